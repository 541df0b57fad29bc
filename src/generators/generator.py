"""Recipe generators and the factory that picks one.

Two interchangeable strategies implement `async generate(preferences) -> Recipe`:

1. GeminiRecipeGenerator (GEMINI_API_KEY set):
   - Builds the user instruction (src/prompts/prompts.py)
   - Makes ONE Gemini call, temperature chosen by dish complexity
   - Extracts/parses/normalizes the reply (src/generators/parsing.py)
   - Any failure surfaces as a single RecipeGenerationError, no retries

2. FallbackRecipeGenerator (no credential):
   - Deterministic template recipe built from the preferences alone
   - No external call, never fails

initialize_recipe_generator() chooses the strategy from configuration, so the
rest of the pipeline receives the generator as an explicit dependency.
"""

import asyncio
from typing import Any, Optional, Protocol

from google import genai
from google.genai import types
from pydantic import ValidationError

from src.generators.errors import RecipeGenerationError
from src.generators.parsing import normalize_recipe, parse_recipe_payload
from src.models.models import DEFAULT_SERVINGS, Mode, Recipe, RecipePreferences, Tab
from src.prompts.prompts import GenerationPrompt, build_generation_prompt, get_system_instructions, is_complex_dish
from src.utils.config import Config, config
from src.utils.logger import logger
from src.utils.safe import safe_execute_sync


class RecipeGenerator(Protocol):
    """Strategy interface for producing one recipe per request."""

    name: str

    async def generate(self, preferences: RecipePreferences) -> Recipe: ...


# ============================================================================
# Gemini
# ============================================================================


def _response_text(response: Any) -> str:
    """Reply text from a Gemini response, "" when there is none.

    Prefers `response.text`; falls back to the first text part of the first
    candidate.
    """
    text = safe_execute_sync(lambda: response.text, "Read response.text", log_level="debug")
    if text:
        return text.strip()

    def _first_part_text() -> Optional[str]:
        for part in response.candidates[0].content.parts or []:
            if getattr(part, "text", None):
                return part.text
        return None

    text = safe_execute_sync(_first_part_text, "Read first candidate part", log_level="debug")
    return (text or "").strip()


class GeminiRecipeGenerator:
    """Generates recipes with a single Gemini call."""

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature_complex: float = 0.5,
        temperature_default: float = 0.6,
        max_output_tokens: int = 4096,
        client: Optional[Any] = None,
    ) -> None:
        """Initialize generator.

        Args:
            api_key: Gemini API key.
            model: Gemini model id.
            temperature_complex: Temperature for complex dishes.
            temperature_default: Temperature for everything else.
            max_output_tokens: Output cap per call.
            client: Preconfigured genai client (tests inject a mock here).

        Raises:
            ValueError: If api_key is empty and no client is given.
        """
        if not api_key and client is None:
            raise ValueError("GEMINI_API_KEY is required for the Gemini generator")

        self.model = model
        self.temperature_complex = temperature_complex
        self.temperature_default = temperature_default
        self.max_output_tokens = max_output_tokens
        self.client = client or genai.Client(api_key=api_key)

    def temperature_for(self, prompt: GenerationPrompt) -> float:
        return self.temperature_complex if prompt.is_complex else self.temperature_default

    async def _call_model(self, prompt: GenerationPrompt) -> str:
        """Single Gemini call (sync client run in a worker thread)."""
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=prompt.text,
            config=types.GenerateContentConfig(
                system_instruction=get_system_instructions(),
                temperature=self.temperature_for(prompt),
                max_output_tokens=self.max_output_tokens,
                response_mime_type="application/json",
            ),
        )
        return _response_text(response)

    async def generate(self, preferences: RecipePreferences) -> Recipe:
        """Generate one recipe.

        Raises:
            RecipeGenerationError: Transport failure, empty reply, a reply
                without a JSON object, or one that fails recipe validation.
        """
        prompt = build_generation_prompt(preferences)
        logger.info(
            f"Gemini generation: model={self.model}, complex={prompt.is_complex}, "
            f"temperature={self.temperature_for(prompt)}, tab={preferences.tab.value}"
        )

        try:
            raw = await self._call_model(prompt)
        except Exception as e:
            logger.error(f"Gemini call failed: {e}")
            raise RecipeGenerationError(f"Recipe generation failed: {e}") from e

        if not raw:
            raise RecipeGenerationError("Recipe generation failed: the model returned an empty reply")

        payload = parse_recipe_payload(raw)
        try:
            return normalize_recipe(payload, preferences)
        except ValidationError as e:
            logger.warning(f"Model reply does not fit the recipe schema: {e}")
            raise RecipeGenerationError(
                "Recipe generation failed: the model reply is not a usable recipe"
            ) from e


# ============================================================================
# Deterministic fallback
# ============================================================================


FALLBACK_BASE_INGREDIENTS = (
    "2 tbsp oil",
    "1 onion, finely chopped",
    "1 clove garlic, minced",
)

HOME_RECIPE_LABEL = "home recipe"
FALLBACK_CUISINE = "International"
TRADITIONAL_NOTE = "Use authentic regional ingredients where available"

SIMPLE_STEPS = (
    "Heat the oil, sweat the onion, then add the garlic briefly.",
    "Add the main ingredients, season and cook briefly.",
    "Adjust the seasoning and serve.",
)

COMPLEX_STEPS = (
    "Prepare the complete mise en place.",
    "Start the base (stock/dough/sauce) and continue according to the recipe.",
    "Cook, let rest, finish and plate.",
)

DEFAULT_STEPS = (
    "Mise en place: prepare all ingredients.",
    "Heat the oil, cook the onion until translucent, add the garlic briefly.",
    "Add the main ingredients and cook for 15-25 minutes.",
    "Season with herbs and spices, then serve.",
)


def _split_extras(extra: str) -> list[str]:
    return [part.strip() for part in (extra or "").split(",") if part.strip()]


class FallbackRecipeGenerator:
    """Builds a template recipe from the preferences, without any model call."""

    name = "fallback"

    def build(self, preferences: RecipePreferences) -> Recipe:
        is_complex = is_complex_dish(preferences)
        pinned = preferences.pinned_cuisine
        query = preferences.query.strip()

        if preferences.tab == Tab.SEARCH and query:
            title = query
        elif pinned:
            title = f"{pinned} {HOME_RECIPE_LABEL}"
        else:
            title = HOME_RECIPE_LABEL.capitalize()

        if pinned:
            cuisine = pinned
        elif HOME_RECIPE_LABEL in title.lower():
            cuisine = FALLBACK_CUISINE
        else:
            cuisine = preferences.cuisine

        if preferences.mode == Mode.SIMPLE:
            time, steps = 20, SIMPLE_STEPS
        elif is_complex:
            time, steps = 120, COMPLEX_STEPS
        else:
            time, steps = 40, DEFAULT_STEPS

        extras = _split_extras(preferences.extra) if preferences.tab == Tab.GENERATOR else []

        return Recipe(
            title=title,
            cuisine=cuisine,
            servings=max(1, preferences.servings or DEFAULT_SERVINGS),
            time=time,
            ingredients=[*FALLBACK_BASE_INGREDIENTS, *extras],
            authentic=[TRADITIONAL_NOTE] if preferences.mode == Mode.TRADITIONAL else [],
            steps=list(steps),
            allergy_note=", ".join(preferences.allergies) if preferences.allergies else None,
        )

    async def generate(self, preferences: RecipePreferences) -> Recipe:
        logger.info(f"Fallback generation: tab={preferences.tab.value}, mode={preferences.mode.value}")
        return self.build(preferences)


def initialize_recipe_generator(cfg: Optional[Config] = None) -> RecipeGenerator:
    """Pick the generation strategy from configuration.

    Args:
        cfg: Configuration to read; the module-level config by default.

    Returns:
        GeminiRecipeGenerator when a Gemini credential is configured,
        FallbackRecipeGenerator otherwise.
    """
    cfg = cfg or config
    if cfg.has_ai_credentials:
        logger.debug(f"Using Gemini generator ({cfg.GEMINI_MODEL})")
        return GeminiRecipeGenerator(
            api_key=cfg.GEMINI_API_KEY,
            model=cfg.GEMINI_MODEL,
            temperature_complex=cfg.TEMPERATURE_COMPLEX,
            temperature_default=cfg.TEMPERATURE_DEFAULT,
            max_output_tokens=cfg.MAX_OUTPUT_TOKENS,
        )
    logger.debug("No GEMINI_API_KEY configured, using fallback generator")
    return FallbackRecipeGenerator()
