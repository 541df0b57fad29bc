"""Generation pipeline and request ordering.

run_generation() is the one code path from preferences to a displayable
recipe: pre-hooks -> generator -> post-hooks. It is shared by the HTTP
service and the CLI.

RecipeSession holds the "current recipe" for one user. Each submit() gets a
request token; a result is applied only while its token is still the latest,
so a slow, superseded request can never overwrite a newer one.
"""

import time
import uuid
from typing import Optional

from src.generators.errors import error_message
from src.generators.generator import RecipeGenerator
from src.hooks.hooks import get_post_hooks, get_pre_hooks
from src.models.models import Recipe, RecipePreferences
from src.utils.logger import logger


async def run_generation(
    preferences: RecipePreferences,
    generator: RecipeGenerator,
    request_id: Optional[str] = None,
) -> Recipe:
    """Produce the recipe for one request.

    Args:
        preferences: Validated request preferences.
        generator: Strategy chosen by initialize_recipe_generator().
        request_id: Correlation id for logs; generated when omitted.

    Returns:
        Recipe scaled to, and labelled with, the requested servings.

    Raises:
        RecipeGenerationError: Propagated from the generator.
    """
    request_id = request_id or uuid.uuid4().hex[:8]
    log_extra = {"request_id": request_id, "tab": preferences.tab.value, "generator": generator.name}
    started = time.perf_counter()

    for hook in get_pre_hooks():
        preferences = hook(preferences)

    recipe = await generator.generate(preferences)

    for hook in get_post_hooks():
        recipe = hook(recipe, preferences)

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        f"Recipe ready: '{recipe.title}' ({recipe.cuisine}, {len(recipe.steps)} steps) in {elapsed_ms}ms",
        extra=log_extra,
    )
    return recipe


class RecipeSession:
    """Latest-request-wins holder for one user's recipe.

    Attributes:
        current: Recipe of the latest completed request, None while loading or after an error.
        error: Message of the latest request's failure, None otherwise.
    """

    def __init__(self, generator: RecipeGenerator) -> None:
        self.generator = generator
        self.current: Optional[Recipe] = None
        self.error: Optional[str] = None
        self._latest_token = 0

    @property
    def latest_token(self) -> int:
        return self._latest_token

    def issue_token(self) -> int:
        """Start a new request; every earlier request becomes stale."""
        self._latest_token += 1
        self.current = None
        self.error = None
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    async def submit(self, preferences: RecipePreferences) -> Optional[Recipe]:
        """Run one request and apply its outcome if it is still the latest.

        Returns:
            The recipe when it was applied, None when the request failed or
            was superseded. Failures of the latest request land in `error`.
        """
        token = self.issue_token()
        request_id = f"{token}-{uuid.uuid4().hex[:6]}"

        try:
            recipe = await run_generation(preferences, self.generator, request_id=request_id)
        except Exception as e:
            if not self.is_current(token):
                logger.info(f"Discarding failure of superseded request {token}: {e}")
                return None
            self.error = error_message(e)
            logger.error(f"Request {token} failed: {self.error}", extra={"request_id": request_id})
            return None

        if not self.is_current(token):
            logger.info(f"Discarding stale result of request {token} (latest is {self._latest_token})")
            return None

        self.current = recipe
        return recipe
