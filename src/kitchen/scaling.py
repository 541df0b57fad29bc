"""Linear portion scaling for recipe ingredients."""

from typing import Optional

from src.models.models import Ingredient, Recipe, RecipeIngredient


def scale_ingredient(
    ingredient: Ingredient,
    from_servings: Optional[int],
    to_servings: int,
) -> Ingredient:
    """Rescale one ingredient from one serving count to another.

    Free-text lines are never touched. Structured lines get a numeric amount
    multiplied by to/from and rounded to 2 decimals (whole results
    become ints); every other field, and any
    non-numeric amount, is kept as is.

    Args:
        ingredient: A free-text line or a RecipeIngredient.
        from_servings: Servings the amounts were written for. None, zero or
            negative means unknown and disables scaling.
        to_servings: Servings wanted.

    Returns:
        The same object when nothing changes, otherwise a scaled copy.
    """
    if not from_servings or from_servings <= 0 or from_servings == to_servings:
        return ingredient
    if not isinstance(ingredient, RecipeIngredient):
        return ingredient

    amount = ingredient.amount
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return ingredient

    scaled = round(amount * to_servings / from_servings, 2)
    if scaled.is_integer():
        scaled = int(scaled)
    return ingredient.model_copy(update={"amount": scaled})


def scale_recipe(recipe: Recipe, to_servings: int) -> Recipe:
    """Scale all ingredients from the recipe's own servings and show `to_servings`.

    The serving count is overwritten even when the amounts could not be scaled.
    """
    ingredients = [
        scale_ingredient(ingredient, recipe.servings, to_servings)
        for ingredient in recipe.ingredients
    ]
    return recipe.model_copy(update={"ingredients": ingredients, "servings": to_servings})
