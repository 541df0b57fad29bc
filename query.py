#!/usr/bin/env python3
"""Ad hoc recipe runner for Pantry Chef.

Run one generation directly without starting the API server.

Usage:
    python query.py                                   # Generator tab, uses the saved pantry
    python query.py --extra "Lemon, Capers" --mode simple
    python query.py --search "Paella" --servings 4    # Search tab
    python query.py --diet vegan --allergy sesame --cuisine Thai
    python query.py --debug --search "Ramen"          # Show full JSON response
    python query.py Beef Wellington                   # Bare words search too

Features:
- Same pipeline as the HTTP service (pre-hooks, generator, serving scale)
- Gemini when GEMINI_API_KEY is set, deterministic fallback otherwise
- Generator-tab requests use the pantry stored by pantry.py
"""

import asyncio
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown

from src.generators.generator import initialize_recipe_generator
from src.generators.pipeline import RecipeSession
from src.kitchen.ingredients import normalize_ingredients
from src.kitchen.pantry_store import PantryStore
from src.models.allergens import ALLERGENS, normalize_allergen
from src.models.models import Recipe, RecipePreferences
from src.utils.logger import logger

console = Console()

USAGE = (
    'Usage: python query.py [--debug] [--search "DISH"] [--mode MODE] [--servings N] '
    "[--diet DIET] [--allergy A]... [--cuisine C] [--extra TEXT] [DISH...]"
)

VALUE_FLAGS = {
    "--search": "query",
    "--mode": "mode",
    "--servings": "servings",
    "--diet": "diet",
    "--cuisine": "cuisine",
    "--extra": "extra",
}


def render_recipe_markdown(recipe: Recipe) -> str:
    """Markdown view of a recipe for terminal display."""
    lines = [
        f"# {recipe.title}",
        "",
        f"**Cuisine:** {recipe.cuisine} | **Servings:** {recipe.servings} | **Time:** ~{recipe.time} min",
        "",
    ]
    if recipe.allergy_note:
        lines += [f"> ⚠ Allergens: {recipe.allergy_note}", ""]

    lines += ["## Ingredients", ""]
    lines += [f"- {line}" for line in normalize_ingredients(recipe.ingredients)]
    lines += ["", "## Steps", ""]
    lines += [f"{idx}. {step}" for idx, step in enumerate(recipe.steps, start=1)]

    if recipe.authentic:
        lines += ["", "## Optional / authentic", ""]
        lines += [f"- {note}" for note in recipe.authentic]
    return "\n".join(lines)


def run_query(request: dict, debug: bool = False) -> int:
    """Execute one generation and print the recipe.

    Args:
        request: Raw preference fields (validated into RecipePreferences here).
        debug: If True, display full JSON response.

    Returns:
        Process exit code.
    """
    if request.get("tab") != "search":
        store = PantryStore()
        request["pantry"] = store.pantry
        logger.info(f"Using saved pantry: {len(store.selected())} items")

    try:
        preferences = RecipePreferences(**request)
    except ValidationError as e:
        console.print(f"[red]✗ Invalid preferences:[/red]\n{e}")
        return 2

    generator = initialize_recipe_generator()
    session = RecipeSession(generator)
    logger.info(f"Generating with '{generator.name}' generator...")

    recipe = asyncio.run(session.submit(preferences))
    console.print()

    if recipe is None:
        console.print(f"[red]✗ {session.error}[/red]")
        return 1

    if debug:
        console.print("[bold cyan]Debug Mode: Full Response[/bold cyan]")
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print_json(data=recipe.model_dump(mode="json", by_alias=True))
        console.print("[dim]" + "=" * 60 + "[/dim]")
        console.print()

    console.print(Markdown(render_recipe_markdown(recipe)))
    return 0


def parse_args(argv: list[str]) -> tuple[dict, bool]:
    """Turn command line flags into request fields.

    Raises:
        ValueError: On unknown flags, unknown allergens or a flag missing its value.
    """
    request: dict = {"tab": "generator", "allergies": []}
    debug = False
    idx = 0

    while idx < len(argv):
        flag = argv[idx]
        if flag == "--debug":
            debug = True
            idx += 1
            continue
        if not flag.startswith("--"):
            # Bare words are the dish to search for
            request["query"] = " ".join(filter(None, (request.get("query"), flag)))
            request["tab"] = "search"
            idx += 1
            continue
        if flag not in VALUE_FLAGS and flag != "--allergy":
            raise ValueError(f"Unknown flag: {flag}")
        if idx + 1 >= len(argv):
            raise ValueError(f"{flag} requires a value")

        value = argv[idx + 1]
        if flag == "--allergy":
            if normalize_allergen(value) not in ALLERGENS:
                raise ValueError(f"Unknown allergen: {value} (known: {', '.join(ALLERGENS)})")
            request["allergies"].append(value)
        else:
            request[VALUE_FLAGS[flag]] = value
        if flag == "--search":
            request["tab"] = "search"
        idx += 2

    return request, debug


if __name__ == "__main__":
    if any(arg in ("-h", "--help") for arg in sys.argv[1:]):
        print(USAGE)
        sys.exit(0)

    try:
        request_fields, debug_mode = parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        sys.exit(1)

    try:
        sys.exit(run_query(request_fields, debug=debug_mode))
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
