"""Errors raised by the generation pipeline."""

DEFAULT_ERROR_MESSAGE = "Unknown error"


class RecipeGenerationError(Exception):
    """The model call failed or its reply could not be turned into a recipe."""


def error_message(exc: BaseException) -> str:
    """Single user-facing message for a failed request."""
    return str(exc).strip() or DEFAULT_ERROR_MESSAGE
