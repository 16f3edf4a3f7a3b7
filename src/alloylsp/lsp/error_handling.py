"""Error handling for LSP feature handlers."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


def wrap_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], R],
    expected: tuple[type[Exception], ...] = (),
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that makes an LSP feature handler degrade instead of fail.

    Any exception is logged and replaced by ``default_factory()``, so the
    client sees an empty answer rather than an error response.

    Args:
        logger: Logger instance for error logging.
        feature_name: Name of the LSP feature (for log messages).
        default_factory: Callable that returns the fallback result.
        expected: Exception types that signal a known inconsistency between
            client and server state. These are logged as a one-line warning;
            anything else is logged with its traceback.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except expected as exc:
                logger.warning("%s request rejected: %s", feature_name, exc)
            except Exception:
                logger.exception("Error in %s handler", feature_name)
            return default_factory()

        return wrapper

    return decorator
