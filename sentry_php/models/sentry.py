from dataclasses import dataclass
from typing import Any, Dict, Union

# Sentry platform tag for Laravel applications
LARAVEL_PLATFORM = 'php-laravel'


@dataclass(frozen=True)
class Organization:
    """Top-level Sentry account owning teams and projects."""
    slug: str
    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Organization':
        return cls(slug=data['slug'], name=data.get('name', data['slug']))


@dataclass(frozen=True)
class Team:
    """Team within an organization. Projects are created under a team."""
    slug: str
    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Team':
        return cls(slug=data['slug'], name=data.get('name', data['slug']))


@dataclass(frozen=True)
class Project:
    slug: str
    name: str
    platform: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Project':
        return cls(
            slug=data['slug'],
            name=data.get('name', data['slug']),
            # Projects created without a platform come back as null
            platform=data.get('platform') or '',
        )


@dataclass(frozen=True)
class ClientKey:
    """A project client key. `dsn` is the public DSN handed to the application."""
    name: str
    dsn: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ClientKey':
        return cls(name=data.get('name', ''), dsn=data['dsn']['public'])


@dataclass(frozen=True)
class ExistingProject:
    """Selection of a project that already exists in Sentry."""
    project: Project

    @property
    def label(self) -> str:
        return self.project.name


@dataclass(frozen=True)
class CreateNewProject:
    """Trailing selection entry that asks for a new project instead."""

    @property
    def label(self) -> str:
        return 'Create new project'


ProjectChoice = Union[ExistingProject, CreateNewProject]
