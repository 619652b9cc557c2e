"""
Self-monitoring for the setup tool

Provides:
- Sentry error tracking for failures of this tool
- Breadcrumbs for API calls and setup steps
"""

from .config import MonitoringConfig
from .setup import (
    init_sentry,
    reset_sentry,
    add_breadcrumb,
    capture_exception,
)
from .decorators import capture_errors

__all__ = [
    'MonitoringConfig',
    'init_sentry',
    'reset_sentry',
    'add_breadcrumb',
    'capture_exception',
    'capture_errors',
]
