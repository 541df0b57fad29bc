"""Pre-hooks and post-hooks around recipe generation.

Pre-hook Pipeline (RecipePreferences -> RecipePreferences):
1. normalize_preferences_pre_hook - Drops fields that do not belong to the request's tab

Post-hook Pipeline (Recipe, RecipePreferences -> Recipe):
1. scale_servings_post_hook - Rescales ingredients to the requested servings
"""

from typing import Callable, List

from src.kitchen.scaling import scale_recipe
from src.models.models import Recipe, RecipePreferences, Tab
from src.utils.logger import logger


PreHook = Callable[[RecipePreferences], RecipePreferences]
PostHook = Callable[[Recipe, RecipePreferences], Recipe]


def normalize_preferences_pre_hook(preferences: RecipePreferences) -> RecipePreferences:
    """Keep only the inputs the request's tab actually uses.

    Generator requests are pantry-driven, so a leftover search query must not
    influence them (it would flip the complexity heuristic). Search requests
    are query-driven and ignore pantry and extra ingredients.
    """
    if preferences.tab == Tab.GENERATOR and preferences.query:
        logger.debug("Pre-hook: dropping search query from generator request")
        return preferences.model_copy(update={"query": ""})
    if preferences.tab == Tab.SEARCH and (preferences.pantry or preferences.extra):
        logger.debug("Pre-hook: dropping pantry and extra ingredients from search request")
        return preferences.model_copy(update={"pantry": {}, "extra": ""})
    return preferences


def scale_servings_post_hook(recipe: Recipe, preferences: RecipePreferences) -> Recipe:
    """Scale from the servings the generator reported to the servings requested.

    The displayed serving count always becomes the requested one.
    """
    if recipe.servings != preferences.servings:
        logger.debug(f"Post-hook: scaling {recipe.servings} -> {preferences.servings} servings")
    return scale_recipe(recipe, preferences.servings)


def get_pre_hooks() -> List[PreHook]:
    return [normalize_preferences_pre_hook]


def get_post_hooks() -> List[PostHook]:
    return [scale_servings_post_hook]
