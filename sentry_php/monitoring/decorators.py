"""
Monitoring Decorators

Provides a decorator for automatic error capture around CLI commands.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional, TypeVar, cast

from .setup import add_breadcrumb, capture_exception

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def capture_errors(
    step_name: Optional[str] = None,
    reraise: bool = True,
    tags: Optional[Dict[str, str]] = None,
) -> Callable[[F], F]:
    """
    Decorator to capture exceptions and send to Sentry.

    Args:
        step_name: Optional step name for context
        reraise: Whether to reraise the exception after capture
        tags: Additional tags to include

    Usage:
        @capture_errors(step_name="deploy")
        def deploy():
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            name = step_name or func.__name__

            add_breadcrumb(message=f"Starting {name}")

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                error_tags = {"step": name}
                if tags:
                    error_tags.update(tags)

                capture_exception(
                    exception=e,
                    tags=error_tags,
                    extra={"function": func.__name__},
                )

                if reraise:
                    raise

                logger.debug("%s failed: %s", name, e)
                return None

            add_breadcrumb(message=f"Completed {name}")
            return result

        return cast(F, wrapper)

    return decorator
