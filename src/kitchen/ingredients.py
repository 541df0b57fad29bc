"""Ingredient normalization.

Generated recipes list ingredients in two shapes: a free-text line
("2 eggs") or a structured record ({amount, unit, item, note}). This module
turns either shape into:

- a display string (normalize_ingredients), for rendering
- a canonical RecipeIngredient | str entry (canonicalize_ingredients),
  kept structured so quantities can be scaled later

Neither function ever raises on odd input and both preserve length and order.
"""

from typing import Any, Optional

from src.models.models import Ingredient, RecipeIngredient


INGREDIENT_FIELDS = ("amount", "unit", "item", "note")

# Alternative key names models sometimes use for the structured shape
KEY_ALIASES = {
    "quantity": "amount",
    "qty": "amount",
    "name": "item",
    "ingredient": "item",
    "notes": "note",
}


def format_amount(amount: Any) -> str:
    """Render an amount without a trailing '.0' for whole numbers."""
    if isinstance(amount, float) and amount.is_integer():
        return str(int(amount))
    return str(amount)


def ingredient_to_text(ingredient: Any) -> str:
    """Display string for a single entry of either shape.

    Amount, unit and item are joined by single spaces, skipping empty parts
    (None, "" and a zero amount); a note is appended in parentheses.
    """
    if isinstance(ingredient, str):
        return ingredient
    if isinstance(ingredient, RecipeIngredient):
        fields = ingredient.model_dump()
    elif isinstance(ingredient, dict):
        fields = ingredient
    else:
        return str(ingredient)

    parts = [
        format_amount(fields[key]) if key == "amount" else str(fields[key])
        for key in ("amount", "unit", "item")
        if fields.get(key)
    ]
    base = " ".join(parts).strip()
    note = fields.get("note")
    return f"{base} ({note})" if note else base


def normalize_ingredients(entries: Any) -> list[str]:
    """Display strings for a recipe's ingredient list.

    Args:
        entries: Anything. A list is an ingredient list, a bare string is a
            single line; everything else counts as no ingredients.

    Returns:
        One string per entry, [] for None and other non-list values.

    Example:
        >>> normalize_ingredients([{"amount": "200", "unit": "g", "item": "flour", "note": "sifted"}])
        ['200 g flour (sifted)']
    """
    if isinstance(entries, str):
        return [entries]
    if not isinstance(entries, list):
        return []
    return [ingredient_to_text(entry) for entry in entries]


def _coerce_field(key: str, value: Any) -> Optional[Any]:
    if value is None:
        return None
    if key == "amount":
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, (int, float, str)):
            return value
        return str(value)
    return value if isinstance(value, str) else str(value)


def canonicalize_ingredient(entry: Any) -> Ingredient:
    """Canonical shape for one untrusted entry from a model reply."""
    if isinstance(entry, (str, RecipeIngredient)):
        return entry
    if isinstance(entry, dict):
        fields: dict[str, Any] = {}
        for key, value in entry.items():
            canonical = key if key in INGREDIENT_FIELDS else KEY_ALIASES.get(str(key).lower())
            if canonical and fields.get(canonical) is None:
                fields[canonical] = _coerce_field(canonical, value)
        return RecipeIngredient(**fields)
    return str(entry)


def canonicalize_ingredients(entries: Any) -> list[Ingredient]:
    """Canonical entries for a recipe's ingredient list ([] for non-list input)."""
    if not isinstance(entries, list):
        return []
    return [canonicalize_ingredient(entry) for entry in entries]
