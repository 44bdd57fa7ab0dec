"""Command-line interface for FridgeRaider."""

from __future__ import annotations

import asyncio
import json
from typing import Optional

import typer

from fridgeraider.agents import ChatAssistant, FoodValidator, MealPlanner, RecipeGenerator
from fridgeraider.config import get_settings
from fridgeraider.db import load_inventory, load_preferences
from fridgeraider.kitchen.expiry import expiry_status
from fridgeraider.llm.gemini import build_model
from fridgeraider.logging_utils import configure_logging
from fridgeraider.models.chat import ChatChunk
from fridgeraider.models.context import KitchenContext
from fridgeraider.models.preferences import UserPreferences

app = typer.Typer(help="FridgeRaider food inventory and meal-planning commands.")


def _setup_logging() -> None:
    settings = get_settings()
    configure_logging(
        settings.log_level,
        settings.log_format,
        [settings.gemini_api_key or "", settings.api_token or ""],
    )


def _stored_context(days: Optional[int] = None) -> KitchenContext:
    settings = get_settings()
    return KitchenContext(
        inventory=load_inventory(),
        preferences=load_preferences() or UserPreferences(),
        days=days or settings.default_plan_days,
    )


def _echo_json(payload: object, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes."),
) -> None:
    """Run the HTTP server and web UI."""

    from fridgeraider.server.run import serve as run_server

    run_server(host=host, port=port, reload=reload)


@app.command()
def inventory() -> None:
    """Print the stored inventory with expiry status."""

    items = load_inventory()
    if not items:
        typer.echo("Inventory is empty.")
        return
    for item in items:
        status = expiry_status(item.expiry_date)
        typer.echo(
            f"{item.name:<24} {item.quantity:>8g} {item.unit:<4} "
            f"{item.category:<16} {item.expiry_date.isoformat()} [{status.value}]"
        )


@app.command()
def validate(name: str = typer.Argument(..., help="Food name to check.")) -> None:
    """Ask the food validator whether NAME is food."""

    _setup_logging()
    verdict = asyncio.run(FoodValidator(build_model()).run(name))
    if verdict.is_valid:
        typer.echo(f"{name}: food ({verdict.category})")
    else:
        typer.secho(f"{name}: not a recognised food item", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)


@app.command()
def recipes(
    pretty: bool = typer.Option(True, "--pretty/--no-pretty", help="Pretty-print output JSON."),
) -> None:
    """Generate recipes from the stored inventory."""

    _setup_logging()
    result = asyncio.run(RecipeGenerator(build_model()).run(_stored_context()))
    _echo_json([recipe.model_dump(mode="json") for recipe in result], pretty)


@app.command()
def plan(
    days: Optional[int] = typer.Option(None, "--days", min=1, help="Number of days to plan."),
    pretty: bool = typer.Option(True, "--pretty/--no-pretty", help="Pretty-print output JSON."),
) -> None:
    """Generate a meal plan from the stored inventory."""

    _setup_logging()
    result = asyncio.run(MealPlanner(build_model()).run(_stored_context(days)))
    if not result and load_inventory():
        typer.secho("Could not generate a meal plan.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    _echo_json([day.model_dump(mode="json") for day in result], pretty)


@app.command()
def chat(
    message: str = typer.Argument(..., help="Question for the assistant."),
    stream: bool = typer.Option(False, "--stream", help="Print the answer as it arrives."),
) -> None:
    """Ask the assistant a question about the stored inventory."""

    _setup_logging()
    context = _stored_context()
    assistant = ChatAssistant(build_model())

    if not stream:
        reply = asyncio.run(assistant.reply(message, context.inventory, context.preferences))
        typer.echo(reply.text)
        for link in reply.links:
            typer.echo(f"  - {link.title or link.uri}: {link.uri}")
        return

    async def _stream() -> None:
        printed = ""
        async for event in assistant.stream(message, context.inventory, context.preferences):
            if isinstance(event, ChatChunk):
                if event.text.startswith(printed):
                    typer.echo(event.text[len(printed):], nl=False)
                else:
                    typer.echo("\n" + event.text, nl=False)
                printed = event.text
            else:
                typer.echo("")
                for link in event.links:
                    typer.echo(f"  - {link.title or link.uri}: {link.uri}")

    asyncio.run(_stream())


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for `python -m fridgeraider`."""
    app(prog_name="fridgeraider", args=argv)


if __name__ == "__main__":
    main()
