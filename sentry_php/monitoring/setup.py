"""
Sentry Setup and Context Management

Initializes the Sentry SDK for the tool itself and provides breadcrumb and
capture helpers that are no-ops until initialized.
"""

import logging
from typing import Any, Dict, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from .config import MonitoringConfig

logger = logging.getLogger(__name__)

# Track initialization state
_sentry_initialized = False


def init_sentry(config: Optional[MonitoringConfig] = None) -> bool:
    """
    Initialize Sentry SDK.

    Args:
        config: MonitoringConfig with DSN

    Returns:
        True if initialized successfully
    """
    global _sentry_initialized

    if _sentry_initialized:
        return True

    config = config or MonitoringConfig.from_env()

    if not config.sentry_enabled:
        logger.debug("Monitoring DSN not configured, skipping Sentry initialization")
        return False

    logging_integration = LoggingIntegration(
        level=logging.INFO,  # Capture INFO and above as breadcrumbs
        event_level=logging.ERROR,  # Send ERROR and above as events
    )

    try:
        sentry_sdk.init(
            dsn=config.sentry_dsn,
            environment=config.sentry_environment,
            traces_sample_rate=config.sentry_traces_sample_rate,
            integrations=[logging_integration],
            send_default_pii=False,
            attach_stacktrace=True,
        )
    except Exception as e:
        logger.error("Failed to initialize Sentry: %s", e)
        return False

    sentry_sdk.set_tag("tool", "sentry-php")

    _sentry_initialized = True
    logger.debug("Sentry initialized successfully")
    return True


def reset_sentry() -> None:
    """Forget initialization state (used by tests)."""
    global _sentry_initialized
    _sentry_initialized = False


def add_breadcrumb(
    message: str,
    category: str = "setup",
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Add a breadcrumb to the current Sentry scope.

    Args:
        message: Breadcrumb message
        category: Category (setup, api, prompt)
        level: Level (debug, info, warning, error)
        data: Additional data
    """
    if not _sentry_initialized:
        return

    sentry_sdk.add_breadcrumb(
        message=message,
        category=category,
        level=level,
        data=data,
    )


def capture_exception(
    exception: Exception,
    level: str = "error",
    tags: Optional[Dict[str, str]] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Optional[str]:
    """
    Capture an exception and send to Sentry.

    Args:
        exception: The exception to capture
        level: Severity level (error, warning, info)
        tags: Additional tags
        extra: Additional context data

    Returns:
        Sentry event ID if captured, None otherwise
    """
    if not _sentry_initialized:
        return None

    with sentry_sdk.new_scope() as scope:
        scope.set_level(level)

        for key, value in (tags or {}).items():
            scope.set_tag(key, value)

        for key, value in (extra or {}).items():
            scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
