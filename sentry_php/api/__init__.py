"""API layer - Sentry REST API communication."""

from .client import SentryApiClient, ProductionSentryApiClient, MockSentryApiClient
from .errors import SentryApiError, AuthenticationError, SentryResolutionError

__all__ = [
    'SentryApiClient',
    'ProductionSentryApiClient',
    'MockSentryApiClient',
    'SentryApiError',
    'AuthenticationError',
    'SentryResolutionError',
]
