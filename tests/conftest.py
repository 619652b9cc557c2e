"""Shared pytest fixtures for Sentry PHP setup tests."""

import pytest


@pytest.fixture
def mock_api():
    """Create a mock Sentry API client."""
    from sentry_php.api.client import MockSentryApiClient
    return MockSentryApiClient()


@pytest.fixture
def console_factory():
    """Build a ScriptedConsole from a list of answers."""
    from sentry_php.console import ScriptedConsole

    def _make(*answers):
        return ScriptedConsole(list(answers))
    return _make


@pytest.fixture
def organization():
    from sentry_php.models import Organization
    return Organization(slug='acme', name='Acme')


@pytest.fixture
def sample_organizations():
    """Sample organizations response."""
    return [
        {'slug': 'acme', 'name': 'Acme'},
        {'slug': 'other', 'name': 'Other Org'},
    ]


@pytest.fixture
def sample_teams():
    """Sample teams response (unsorted)."""
    return [
        {'slug': 'web', 'name': 'Web'},
        {'slug': 'backend', 'name': 'Backend'},
    ]


@pytest.fixture
def sample_projects():
    """Projects on mixed platforms, in API order."""
    return [
        {'slug': 'shop', 'name': 'shop', 'platform': 'php-laravel'},
        {'slug': 'frontend', 'name': 'frontend', 'platform': 'javascript-react'},
        {'slug': 'billing', 'name': 'billing', 'platform': 'php-laravel'},
        {'slug': 'worker', 'name': 'worker', 'platform': 'python'},
        {'slug': 'legacy', 'name': 'legacy', 'platform': None},
    ]


@pytest.fixture
def sample_keys():
    """Client keys of a project (unsorted)."""
    return [
        {'name': 'Production', 'dsn': {'public': 'https://prod@o1.ingest.sentry.io/1'}},
        {'name': 'Default', 'dsn': {'public': 'https://abc@sentry.io/1'}},
    ]


@pytest.fixture
def populated_api(mock_api, sample_organizations, sample_teams, sample_projects, sample_keys):
    """Mock client with organizations, teams, projects and keys for 'acme'."""
    mock_api.set_response('organizations/', sample_organizations)
    mock_api.set_response('organizations/acme/teams/', sample_teams)
    mock_api.set_response('projects/', sample_projects)
    for slug in ('shop', 'billing', 'new-app', 'my-app'):
        mock_api.set_response(f'projects/acme/{slug}/keys/', sample_keys)
    return mock_api
