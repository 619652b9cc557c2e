"""Sentry PHP - Sentry error monitoring setup for Laravel applications.

This package authenticates against the Sentry API, picks or creates a
php-laravel project, resolves its client key (DSN) and produces the
environment variables and config edits the application needs.

Modules:
    models - Data models (dataclasses)
    api - Sentry API clients
    console - Operator prompts
    resolver - Project / client key / sample rate resolution
    plugin - Install and deploy lifecycle
    monitoring - Error reporting for the tool itself
    config - Configuration
"""

from .config import Config, APIConfig, DSN_KEY, SAMPLE_RATE_KEY
from .plugin import SentryPlugin
from .resolver import SentryProjectResolver

__all__ = [
    'Config',
    'APIConfig',
    'DSN_KEY',
    'SAMPLE_RATE_KEY',
    'SentryPlugin',
    'SentryProjectResolver',
]

__version__ = '1.0.0'
