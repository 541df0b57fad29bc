"""Parsing model replies into canonical recipes.

Model output is untrusted: it may wrap the JSON in prose or a fenced block,
and any field may be missing or of the wrong type. Extraction is a
best-effort heuristic (no syntax repair); normalization fills every field with
a documented default rather than rejecting the reply.
"""

import json
import re
from typing import Any

from src.generators.errors import RecipeGenerationError
from src.kitchen.ingredients import canonicalize_ingredients
from src.models.models import DEFAULT_SERVINGS, Recipe, RecipePreferences
from src.utils.logger import logger


DEFAULT_TITLE = "Recipe"
DEFAULT_CUISINE = "International"
DEFAULT_TIME_MINUTES = 30

JSON_FENCE = re.compile(r"```json([\s\S]*?)```", re.IGNORECASE)


def extract_json(text: str) -> str:
    """Cut the JSON payload out of a free-text reply.

    In order of preference:
    1. the interior of a ```json fenced block
    2. the span from the first '{' to the last '}'
    3. the text unchanged

    Example:
        >>> extract_json('Sure! {"title":"X"} enjoy')
        '{"title":"X"}'
    """
    fence = JSON_FENCE.search(text)
    if fence:
        return fence.group(1).strip()

    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last > first:
        return text[first : last + 1]
    return text


def parse_recipe_payload(text: str) -> dict[str, Any]:
    """Extract and parse the JSON object in a reply.

    Raises:
        RecipeGenerationError: If the extracted text is not a JSON object.
    """
    candidate = extract_json(text)
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning(f"Model reply is not valid JSON: {e} (reply starts with {text[:80]!r})")
        raise RecipeGenerationError(f"Model reply is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise RecipeGenerationError(
            f"Model reply is not a JSON object (got {type(payload).__name__})"
        )
    return payload


def _positive_int(value: Any, default: int) -> int:
    """Positive integer from a number or numeric string, else `default`."""
    if isinstance(value, bool) or value is None:
        return default
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return default
    return number if number >= 1 else default


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


def _non_empty_string(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_recipe(payload: dict[str, Any], preferences: RecipePreferences) -> Recipe:
    """Canonical Recipe from a parsed reply, with a default for every field.

    A pinned cuisine always wins over whatever the model chose.
    """
    title = _non_empty_string(payload.get("title")) or DEFAULT_TITLE
    cuisine = (
        preferences.pinned_cuisine
        or _non_empty_string(payload.get("cuisine"))
        or DEFAULT_CUISINE
    )
    allergy_note = payload.get("allergyNote")

    recipe = Recipe(
        title=title,
        cuisine=cuisine,
        servings=_positive_int(payload.get("servings"), preferences.servings or DEFAULT_SERVINGS),
        time=_positive_int(payload.get("time"), DEFAULT_TIME_MINUTES),
        ingredients=canonicalize_ingredients(payload.get("ingredients")),
        authentic=_string_list(payload.get("authentic")),
        steps=_string_list(payload.get("steps")),
        allergy_note=allergy_note if isinstance(allergy_note, str) else None,
    )

    if not recipe.steps:
        logger.debug("Model reply has no usable steps")
    return recipe
