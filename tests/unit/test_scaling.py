"""Unit tests for portion scaling."""

import pytest

from src.kitchen.scaling import scale_ingredient, scale_recipe
from src.models.models import Recipe, RecipeIngredient


class TestScaleIngredient:
    """Linear scaling of structured amounts."""

    def test_doubles_numeric_amount(self):
        flour = RecipeIngredient(amount=2, unit="cup", item="flour")
        scaled = scale_ingredient(flour, 4, 8)
        assert scaled.amount == 4
        assert isinstance(scaled.amount, int)
        assert scaled.model_dump() == {"amount": 4, "unit": "cup", "item": "flour", "note": None}
        assert scaled.unit == "cup"
        assert scaled.item == "flour"

    def test_rounds_to_two_decimals(self):
        scaled = scale_ingredient(RecipeIngredient(amount=1, item="egg"), 3, 2)
        assert scaled.amount == 0.67

    def test_free_text_unchanged(self):
        assert scale_ingredient("2 eggs", 2, 4) == "2 eggs"

    def test_non_numeric_amount_unchanged(self):
        pinch = RecipeIngredient(amount="a pinch", item="salt")
        assert scale_ingredient(pinch, 2, 4) is pinch

    @pytest.mark.parametrize("from_servings", [None, 0, -2])
    def test_unknown_source_servings_disables_scaling(self, from_servings):
        flour = RecipeIngredient(amount=2, item="flour")
        assert scale_ingredient(flour, from_servings, 4) is flour

    def test_same_servings_returns_same_object(self):
        flour = RecipeIngredient(amount=2, item="flour")
        assert scale_ingredient(flour, 4, 4) is flour

    def test_original_not_mutated(self):
        flour = RecipeIngredient(amount=2, item="flour")
        scale_ingredient(flour, 2, 6)
        assert flour.amount == 2


class TestScaleRecipe:
    def test_servings_overwritten_and_amounts_scaled(self):
        recipe = Recipe(
            title="Pancakes",
            cuisine="American",
            servings=4,
            time=20,
            ingredients=[RecipeIngredient(amount=2, unit="cup", item="flour"), "1 pinch salt"],
        )
        scaled = scale_recipe(recipe, 8)
        assert scaled.servings == 8
        assert scaled.ingredients[0].amount == 4
        assert scaled.ingredients[1] == "1 pinch salt"
        assert recipe.servings == 4
