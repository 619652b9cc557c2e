"""Sentry API Client - Interface and implementations for Sentry REST calls."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

import requests

from .errors import AuthenticationError, SentryApiError
from ..config import APIConfig
from ..monitoring import add_breadcrumb

logger = logging.getLogger(__name__)


class SentryApiClient(ABC):
    """Abstract interface for Sentry API calls."""

    @abstractmethod
    def validate_token(self) -> bool:
        """Probe the API with the configured token. False if it is rejected."""
        pass

    @abstractmethod
    def list_organizations(self) -> List[Dict[str, Any]]:
        """List organizations visible to the token."""
        pass

    @abstractmethod
    def list_teams(self, org_slug: str) -> List[Dict[str, Any]]:
        """List teams of an organization."""
        pass

    @abstractmethod
    def list_projects(self, per_page: int = 100) -> List[Dict[str, Any]]:
        """List projects (first page only)."""
        pass

    @abstractmethod
    def create_project(self, org_slug: str, team_slug: str, name: str, platform: str) -> Dict[str, Any]:
        """Create a project under a team."""
        pass

    @abstractmethod
    def list_client_keys(self, org_slug: str, project_slug: str) -> List[Dict[str, Any]]:
        """List client keys (DSNs) of a project."""
        pass

    def close(self) -> None:
        """Release network resources."""
        pass


class ProductionSentryApiClient(SentryApiClient):
    """Real Sentry client using requests with bearer-token auth."""

    def __init__(self, token: str, config: Optional[APIConfig] = None):
        self.config = config or APIConfig()
        self.base_url = self.config.base_url.rstrip('/') + '/'
        self.session = requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {token}',
            'Accept': 'application/json',
        })

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict] = None,
        json: Optional[Dict] = None,
    ) -> requests.Response:
        """Send a request and map error statuses to SentryApiError."""
        url = f"{self.base_url}{path}"
        logger.debug("%s %s %s", method, url, params or '')
        add_breadcrumb(message=f"{method} {path}", category="api", data=params)

        response = self.session.request(
            method, url, params=params, json=json, timeout=self.config.timeout
        )

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Sentry rejected the auth token ({response.status_code})",
                status_code=response.status_code,
                url=url,
            )
        if not response.ok:
            raise SentryApiError(
                f"Sentry API request failed with status code {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                url=url,
            )
        return response

    def _get(self, path: str, params: Optional[Dict] = None) -> Tuple[Any, requests.Response]:
        response = self._request('GET', path, params=params)
        return response.json(), response

    def validate_token(self) -> bool:
        try:
            self._request('GET', 'projects/', params={'per_page': 1})
        except AuthenticationError:
            return False
        return True

    def list_organizations(self) -> List[Dict[str, Any]]:
        data, _ = self._get('organizations/')
        return data

    def list_teams(self, org_slug: str) -> List[Dict[str, Any]]:
        data, _ = self._get(f'organizations/{org_slug}/teams/')
        return data

    def list_projects(self, per_page: int = 100) -> List[Dict[str, Any]]:
        data, response = self._get('projects/', params={'per_page': per_page})

        # Sentry paginates with a Link header; only the first page is read
        next_page = response.links.get('next', {})
        if next_page.get('results') == 'true':
            logger.warning(
                "More than %d projects found, only the first page is considered",
                per_page,
            )
        return data

    def create_project(self, org_slug: str, team_slug: str, name: str, platform: str) -> Dict[str, Any]:
        response = self._request(
            'POST',
            f'teams/{org_slug}/{team_slug}/projects/',
            json={'name': name, 'platform': platform},
        )
        return response.json()

    def list_client_keys(self, org_slug: str, project_slug: str) -> List[Dict[str, Any]]:
        data, _ = self._get(f'projects/{org_slug}/{project_slug}/keys/')
        return data

    def close(self) -> None:
        self.session.close()


class MockSentryApiClient(SentryApiClient):
    """Mock client for testing."""

    def __init__(self, valid_token: bool = True):
        self.valid_token = valid_token
        self.responses: Dict[str, Any] = {}
        self.calls: List[Tuple[str, str]] = []
        self.created: List[Dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def _get_response(self, method: str, key: str) -> Any:
        self.calls.append((method, key))
        return self.responses.get(key, [])

    def validate_token(self) -> bool:
        self.calls.append(('GET', 'projects/?per_page=1'))
        return self.valid_token

    def list_organizations(self) -> List[Dict[str, Any]]:
        return self._get_response('GET', 'organizations/')

    def list_teams(self, org_slug: str) -> List[Dict[str, Any]]:
        return self._get_response('GET', f'organizations/{org_slug}/teams/')

    def list_projects(self, per_page: int = 100) -> List[Dict[str, Any]]:
        return self._get_response('GET', 'projects/')[:per_page]

    def create_project(self, org_slug: str, team_slug: str, name: str, platform: str) -> Dict[str, Any]:
        self.calls.append(('POST', f'teams/{org_slug}/{team_slug}/projects/'))
        project = {'slug': name.lower().replace(' ', '-'), 'name': name, 'platform': platform}
        self.created.append(project)
        return project

    def list_client_keys(self, org_slug: str, project_slug: str) -> List[Dict[str, Any]]:
        return self._get_response('GET', f'projects/{org_slug}/{project_slug}/keys/')

    def set_response(self, key: str, data: Any) -> None:
        """Test helper to set mock responses, keyed by request path."""
        self.responses[key] = data

    def paths(self, method: Optional[str] = None) -> List[str]:
        """Test helper returning requested paths, optionally filtered by method."""
        return [path for m, path in self.calls if method is None or m == method]

    def reset(self) -> None:
        """Reset recorded calls and responses."""
        self.calls = []
        self.created = []
        self.responses = {}
