"""Error handling utilities for the assessment flow.

Public questionnaire operations must never dead-end a user mid-assessment.
Operations decorated with ``degrade_on_error`` log the failure and return a
fallback value instead of raising.

Usage:
    from armora.core.error_handling import degrade_on_error

    @degrade_on_error(fallback=lambda responses: base_steps())
    def calculate_progressive_steps(responses):
        ...

    # Constant fallback
    @degrade_on_error(fallback=9)
    def get_total_steps(responses):
        ...
"""

import functools
import re
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from armora.config.settings import get_settings
from armora.core.logging import get_logger
from armora.utils.exceptions import ArmoraError

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def error_code_for(exc: Exception) -> str:
    """Derive a machine-readable error code from an exception type."""
    if isinstance(exc, ArmoraError):
        return re.sub(r"(?<!^)(?=[A-Z])", "_", type(exc).__name__).lower()
    return "internal_error"


def degrade_on_error(
    fallback: Callable[..., T] | T,
    operation: str | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator returning a fallback result when the wrapped call raises.

    Args:
        fallback: Value to return, or a callable invoked with the same
            arguments as the wrapped function to build it.
        operation: Name used in the warning (default: function name)

    Returns:
        Decorated function

    When ``Settings.degrade_on_error`` is False the exception is logged and
    re-raised.
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        op_name = operation or func.__name__

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    "assessment_degraded",
                    operation=op_name,
                    error_code=error_code_for(e),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                if not get_settings().degrade_on_error:
                    raise
                if callable(fallback):
                    return fallback(*args, **kwargs)
                return fallback

        return wrapper

    return decorator
