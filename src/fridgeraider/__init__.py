"""
FridgeRaider food-inventory and meal-planning package.

The package tracks the food a household owns and delegates recipe ideas,
multi-day meal plans and a conversational assistant to a hosted generative model.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
