"""Sentry Project Resolver - Picks or creates the project and client key for an app.

The resolver walks one linear flow per run:

    organization -> project (or none) -> client key -> traces sample rate

Each step takes the current SentrySession and returns an updated copy. When
the operator declines to pick or create a project, the remaining steps are
skipped and the run ends without a DSN, which disables Sentry for the app.
"""

import logging
from typing import List, Optional

from .api.client import SentryApiClient
from .api.errors import SentryResolutionError
from .console import Console
from .models import (
    LARAVEL_PLATFORM,
    ClientKey,
    CreateNewProject,
    ExistingProject,
    Organization,
    Project,
    ProjectChoice,
    SentrySession,
    Team,
)
from .monitoring import add_breadcrumb

logger = logging.getLogger(__name__)

PERFORMANCE_DOCS_URL = 'https://docs.sentry.io/platforms/{language}/performance/'


def parse_sample_rate(value: str) -> float:
    """
    Parse a traces sample rate.

    Args:
        value: Raw operator input

    Returns:
        The rate as a float in [0.0, 1.0]

    Raises:
        ValueError: If the value is not numeric or out of range
    """
    rate = float(value)
    if not 0.0 <= rate <= 1.0:
        raise ValueError(f"Sample rate {value} is outside 0.0-1.0")
    return rate


class SentryProjectResolver:
    """Resolves organization, project, client key and sample rate interactively."""

    def __init__(
        self,
        api_client: SentryApiClient,
        console: Console,
        app_name: str,
        platform: str = LARAVEL_PLATFORM,
        project_page_size: int = 100,
        sample_rate_attempts: int = 3,
    ):
        """
        Initialize resolver.

        Args:
            api_client: Authenticated Sentry API client
            console: Operator console for prompts and messages
            app_name: Name of the application, used as the default project name
            platform: Sentry platform tag of candidate projects
            project_page_size: Number of projects fetched (first page only)
            sample_rate_attempts: Prompts before giving up on the sample rate
        """
        self.api_client = api_client
        self.console = console
        self.app_name = app_name
        self.platform = platform
        self.project_page_size = project_page_size
        self.sample_rate_attempts = sample_rate_attempts

    def resolve(self, session: Optional[SentrySession] = None) -> SentrySession:
        """Run the full flow and return the final session."""
        session = session or SentrySession()

        if session.organization is None:
            session = self.discover_organization(session)

        session = self.resolve_project(session)
        session = self.resolve_client_key(session)
        session = self.resolve_sample_rate(session)
        return session

    def discover_organization(self, session: SentrySession) -> SentrySession:
        """Use the first organization of the authenticated account."""
        organizations = self.api_client.list_organizations()
        if not organizations:
            raise SentryResolutionError("No Sentry organization found for this auth token")

        organization = Organization.from_api(organizations[0])
        if len(organizations) > 1:
            logger.info(
                "Token can access %d organizations, using %s",
                len(organizations),
                organization.slug,
            )
        logger.debug("Using organization %s", organization.slug)
        return session.with_organization(organization)

    def list_candidate_projects(self) -> List[Project]:
        """Projects on the configured platform, in API order."""
        data = self.api_client.list_projects(per_page=self.project_page_size)
        projects = [Project.from_api(item) for item in data]
        candidates = [p for p in projects if p.platform == self.platform]
        logger.debug("Found %d %s projects out of %d", len(candidates), self.platform, len(projects))
        return candidates

    def resolve_project(self, session: SentrySession) -> SentrySession:
        """
        Pick an existing project or create a new one.

        Order of preference:
            1. A project named after the app -> straight to the selection list
            2. Operator agrees to create a project
            3. Selection from existing projects
            4. One more offer to create a project when none exist
            5. No project (Sentry is disabled for this run)
        """
        organization = session.organization
        candidates = self.list_candidate_projects()

        if any(p.name == self.app_name for p in candidates):
            return session.with_project(self.select_from_existing(organization, candidates))

        if self.console.confirm('Create Sentry project?', True):
            return session.with_project(self.create_project(organization))

        if candidates:
            return session.with_project(self.select_from_existing(organization, candidates))

        self.console.error(f"No existing {self.platform} projects found!")

        if self.console.confirm('Create Sentry project?', True):
            return session.with_project(self.create_project(organization))

        self.console.error('No project selected! Disabling Sentry plugin.')
        logger.info("No Sentry project selected")
        return session.with_project(None)

    def create_project(self, organization: Organization) -> Project:
        """Prompt for team and name, then create a project on the platform."""
        teams = [Team.from_api(item) for item in self.api_client.list_teams(organization.slug)]
        if not teams:
            raise SentryResolutionError(f"No Sentry team found in organization {organization.slug}")

        teams = sorted(teams, key=lambda t: t.name)
        default_team = teams[0].name if len(teams) == 1 else None
        team = teams[self.console.choice('Select a team', [t.name for t in teams], default_team)]

        name = self.console.ask('Project name', self.app_name) or self.app_name

        data = self.api_client.create_project(organization.slug, team.slug, name, self.platform)
        project = Project.from_api(data)

        add_breadcrumb(message=f"Created project {project.slug}", data={"team": team.slug})
        logger.info("Created Sentry project %s in team %s", project.slug, team.slug)
        return project

    def select_from_existing(self, organization: Organization, candidates: List[Project]) -> Project:
        """Choose among candidates, with a trailing entry to create a new project."""
        choices: List[ProjectChoice] = [ExistingProject(p) for p in sorted(candidates, key=lambda p: p.name)]
        choices.append(CreateNewProject())

        labels = [choice.label for choice in choices]
        default = self.app_name if any(p.name == self.app_name for p in candidates) else None

        selection = choices[self.console.choice('Select a Sentry project', labels, default)]

        if isinstance(selection, CreateNewProject):
            return self.create_project(organization)

        return selection.project

    def resolve_client_key(self, session: SentrySession) -> SentrySession:
        """Pick the client key whose public DSN the app will use."""
        if session.project is None:
            return session

        data = self.api_client.list_client_keys(session.organization_slug, session.project.slug)
        keys = sorted((ClientKey.from_api(item) for item in data), key=lambda k: k.name)
        if not keys:
            raise SentryResolutionError(f"No client key found for Sentry project {session.project.slug}")

        key = keys[self.console.choice('Select a client key', [k.name for k in keys])]
        logger.debug("Using client key %s", key.name)
        return session.with_dsn(key.dsn)

    def resolve_sample_rate(self, session: SentrySession) -> SentrySession:
        """
        Ask for the performance traces sample rate. Blank leaves it disabled.

        Non-numeric and out-of-range answers are asked again, up to
        sample_rate_attempts times. Of the errors raised by the console only
        ValueError counts as a bad answer; anything else (click.Abort,
        KeyboardInterrupt) ends the run.
        """
        if not session.has_dsn:
            return session

        language = self.platform.split('-')[0]

        self.console.info('To enable performance monitoring, set a number greater than 0.0 (max 1.0).')
        self.console.info('Leave blank to disable.')
        self.console.new_line()
        self.console.info(f"More info: {PERFORMANCE_DOCS_URL.format(language=language)}")

        for attempt in range(1, self.sample_rate_attempts + 1):
            try:
                value = self.console.ask('Traces Sample Rate')
                if value is None:
                    return session.with_sample_rate(None)
                return session.with_sample_rate(parse_sample_rate(value))
            except ValueError as e:
                logger.debug("Rejected sample rate (attempt %d): %s", attempt, e)
                self.console.error('Invalid value! Enter a number between 0.0 and 1.0.')
                self.console.new_line()

        logger.warning(
            "No valid sample rate after %d attempts, performance monitoring left disabled",
            self.sample_rate_attempts,
        )
        return session.with_sample_rate(None)
