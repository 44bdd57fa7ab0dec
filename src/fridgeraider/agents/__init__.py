"""Model-backed agents for FridgeRaider."""

from fridgeraider.agents.base import Agent, ModelAgent
from fridgeraider.agents.chat_assistant import ChatAssistant, ChatQuestion
from fridgeraider.agents.food_validator import FoodValidator
from fridgeraider.agents.meal_planner import MealPlanner
from fridgeraider.agents.preference_extractor import PreferenceExtractor
from fridgeraider.agents.recipe_generator import RecipeGenerator

__all__ = [
    "Agent",
    "ModelAgent",
    "ChatAssistant",
    "ChatQuestion",
    "FoodValidator",
    "MealPlanner",
    "PreferenceExtractor",
    "RecipeGenerator",
]
