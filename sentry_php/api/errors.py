"""Exceptions raised while talking to the Sentry API."""

from typing import Optional


class SentryApiError(Exception):
    """Raised when the Sentry API answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AuthenticationError(SentryApiError):
    """Raised when the auth token is rejected or no valid token was supplied."""


class SentryResolutionError(SentryApiError):
    """Raised when the account is missing an organization, team or client key."""
