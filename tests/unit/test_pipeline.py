"""Unit tests for hooks, the generation pipeline and request ordering."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.generators.errors import RecipeGenerationError
from src.generators.generator import FallbackRecipeGenerator
from src.generators.pipeline import RecipeSession, run_generation
from src.hooks.hooks import normalize_preferences_pre_hook, scale_servings_post_hook
from src.models.models import Recipe, RecipeIngredient, RecipePreferences


def _recipe(title: str = "Pancakes", servings: int = 4) -> Recipe:
    return Recipe(
        title=title,
        cuisine="American",
        servings=servings,
        time=20,
        ingredients=[RecipeIngredient(amount=2, unit="cup", item="flour"), "1 pinch salt"],
        steps=["Mix.", "Fry."],
    )


def _generator(recipe=None, side_effect=None) -> MagicMock:
    generator = MagicMock()
    generator.name = "mock"
    generator.generate = AsyncMock(return_value=recipe, side_effect=side_effect)
    return generator


class TestPreHook:
    """Tab-specific input cleanup."""

    def test_generator_tab_drops_query(self):
        prefs = RecipePreferences(tab="generator", query="beef wellington", extra="lemon")
        cleaned = normalize_preferences_pre_hook(prefs)
        assert cleaned.query == ""
        assert cleaned.extra == "lemon"

    def test_search_tab_drops_pantry_and_extra(self):
        prefs = RecipePreferences(tab="search", query="soup", pantry={"rice": True}, extra="lemon")
        cleaned = normalize_preferences_pre_hook(prefs)
        assert cleaned.pantry == {}
        assert cleaned.extra == ""
        assert cleaned.query == "soup"

    def test_clean_input_returned_as_is(self):
        prefs = RecipePreferences()
        assert normalize_preferences_pre_hook(prefs) is prefs


class TestPostHook:
    def test_scales_to_requested_servings(self):
        recipe = scale_servings_post_hook(_recipe(servings=4), RecipePreferences(servings=8))
        assert recipe.servings == 8
        assert recipe.ingredients[0].amount == 4
        assert recipe.ingredients[1] == "1 pinch salt"


class TestRunGeneration:
    """pre-hooks -> generator -> post-hooks."""

    @pytest.mark.asyncio
    async def test_generator_receives_cleaned_preferences(self):
        generator = _generator(_recipe())
        prefs = RecipePreferences(tab="generator", query="stale query", servings=4)

        await run_generation(prefs, generator, request_id="t1")

        sent = generator.generate.call_args.args[0]
        assert sent.query == ""

    @pytest.mark.asyncio
    async def test_result_is_scaled(self):
        recipe = await run_generation(RecipePreferences(servings=8), _generator(_recipe(servings=4)))
        assert recipe.servings == 8
        assert recipe.ingredients[0].amount == 4

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        generator = _generator(side_effect=RecipeGenerationError("boom"))
        with pytest.raises(RecipeGenerationError, match="boom"):
            await run_generation(RecipePreferences(), generator)

    @pytest.mark.asyncio
    async def test_cuisine_pin_holds_end_to_end(self):
        recipe = await run_generation(RecipePreferences(cuisine="Peruvian"), FallbackRecipeGenerator())
        assert recipe.cuisine == "Peruvian"


class TestRecipeSession:
    """Latest request wins."""

    @pytest.mark.asyncio
    async def test_submit_sets_current(self):
        session = RecipeSession(_generator(_recipe()))
        recipe = await session.submit(RecipePreferences(servings=4))
        assert session.current is recipe
        assert session.error is None

    @pytest.mark.asyncio
    async def test_failure_sets_error(self):
        session = RecipeSession(_generator(side_effect=RecipeGenerationError("quota exceeded")))
        assert await session.submit(RecipePreferences()) is None
        assert session.current is None
        assert session.error == "quota exceeded"

    @pytest.mark.asyncio
    async def test_blank_error_gets_generic_message(self):
        session = RecipeSession(_generator(side_effect=RuntimeError()))
        await session.submit(RecipePreferences())
        assert session.error == "Unknown error"

    @pytest.mark.asyncio
    async def test_stale_result_is_discarded(self):
        release_first = asyncio.Event()

        async def generate(preferences):
            if preferences.query == "slow":
                await release_first.wait()
                return _recipe(title="Slow")
            return _recipe(title="Fast")

        generator = MagicMock()
        generator.name = "mock"
        generator.generate = generate
        session = RecipeSession(generator)

        slow = asyncio.create_task(session.submit(RecipePreferences(tab="search", query="slow", servings=4)))
        await asyncio.sleep(0)
        fast = await session.submit(RecipePreferences(tab="search", query="fast", servings=4))
        release_first.set()

        assert await slow is None
        assert fast.title == "Fast"
        assert session.current.title == "Fast"

    @pytest.mark.asyncio
    async def test_stale_failure_is_discarded(self):
        release_first = asyncio.Event()

        async def generate(preferences):
            if preferences.query == "slow":
                await release_first.wait()
                raise RecipeGenerationError("late failure")
            return _recipe()

        generator = MagicMock()
        generator.name = "mock"
        generator.generate = generate
        session = RecipeSession(generator)

        slow = asyncio.create_task(session.submit(RecipePreferences(tab="search", query="slow", servings=4)))
        await asyncio.sleep(0)
        await session.submit(RecipePreferences(tab="search", query="fast", servings=4))
        release_first.set()

        assert await slow is None
        assert session.error is None
        assert session.current is not None

    def test_new_token_supersedes(self):
        session = RecipeSession(FallbackRecipeGenerator())
        first = session.issue_token()
        second = session.issue_token()
        assert not session.is_current(first)
        assert session.is_current(second)
        assert session.latest_token == second
