"""Data models - Dataclass definitions for Sentry entities and session state."""

from .sentry import (
    LARAVEL_PLATFORM,
    Organization,
    Team,
    Project,
    ClientKey,
    ExistingProject,
    CreateNewProject,
    ProjectChoice,
)
from .session import SentrySession

__all__ = [
    'LARAVEL_PLATFORM',
    'Organization',
    'Team',
    'Project',
    'ClientKey',
    'ExistingProject',
    'CreateNewProject',
    'ProjectChoice',
    'SentrySession',
]
