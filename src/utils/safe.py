"""Graceful-degradation helpers.

Wrap the try/except/log pattern used for operations whose failure must never
reach the user: decoding share tokens, reading the local pantry slot,
probing optional parts of a model response. Failures of the generation call
itself propagate instead.
"""

from typing import Any, Callable

from src.utils.logger import logger


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    """Log error with appropriate level.

    Args:
        operation_name: Description for logging
        exception: Exception that occurred
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
    """
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    elif log_level == "error":
        logger.error(msg)
    else:
        logger.warning(msg)


def safe_execute_sync(
    func: Callable[[], Any],
    operation_name: str,
    log_level: str = "warning",
    default_return: Any = None,
    reraise: bool = False,
) -> Any:
    """Safely execute sync operation with consistent error logging.

    Args:
        func: Callable to execute (no args).
        operation_name: Description for logging (e.g., "Decode share token").
        log_level: Logging level ("debug", "warning", "error"). Default: "warning".
        default_return: Value to return on exception. Default: None.
        reraise: If True, re-raise exception after logging. Default: False.

    Returns:
        Result of func if successful, default_return on exception when reraise=False.

    Raises:
        Exception: Original exception if reraise=True.

    Example:
        selection = safe_execute_sync(lambda: _decode(token), "Decode token", default_return=[])
    """
    try:
        return func()
    except Exception as e:
        _log_error(operation_name, e, log_level)
        if reraise:
            raise
        return default_return
