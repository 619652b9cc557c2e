"""Sentry plugin - Install/deploy lifecycle around the project resolver."""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .api.client import ProductionSentryApiClient, SentryApiClient
from .api.errors import AuthenticationError
from .config import Config, DSN_KEY, SAMPLE_RATE_KEY
from .console import Console
from .models import SentrySession
from .resolver import SentryProjectResolver
from .results import DeploymentResult, InstallationResult, VendorPublish

logger = logging.getLogger(__name__)

TOKEN_URL = 'https://sentry.io/settings/account/api/auth-tokens/'
TOKEN_SCOPES = ['project:read', 'team:read', 'project:write', 'org:read', 'member:read']

SERVICE_PROVIDER = 'Sentry\\Laravel\\ServiceProvider'

# Laravel logging config that routes the stack channel through Sentry
LOGGING_CONFIG = {
    'logging.channels.sentry.driver': 'sentry',
    'logging.channels.stack.channels': "['single', 'sentry']",
    'logging.channels.sentry.log_level': "env('LOG_LEVEL', 'error')",
    'logging.channels.sentry.bubble': True,
}


class SentryPlugin:
    """Configures Sentry error monitoring for a Laravel application."""

    name = 'sentry-php'

    def __init__(
        self,
        config: Config,
        console: Console,
        client_factory: Optional[Callable[[str], SentryApiClient]] = None,
    ):
        """
        Initialize plugin.

        Args:
            config: Tool configuration
            console: Operator console
            client_factory: Builds an API client for a token (defaults to the requests client)
        """
        self.config = config
        self.console = console
        self.client_factory = client_factory or (
            lambda token: ProductionSentryApiClient(token, config.api)
        )

    def required_composer_packages(self) -> List[str]:
        return ['sentry/sentry-laravel']

    def connect(self) -> SentryApiClient:
        """
        Return an API client for a validated auth token.

        Tries the configured token first, then prompts the operator.

        Raises:
            AuthenticationError: If no valid token was given within the allowed attempts
        """
        token = self.config.auth_token
        help_shown = False

        for attempt in range(1, self.config.token_attempts + 1):
            if not token:
                if not help_shown:
                    self.console.info(f"Create a Sentry auth token at {TOKEN_URL}")
                    self.console.info(
                        "When creating a token, make sure to select the following permissions: "
                        + ', '.join(TOKEN_SCOPES)
                    )
                    help_shown = True
                token = self.console.secret('Sentry auth token')

            client = self.client_factory(token)
            if client.validate_token():
                logger.debug("Auth token accepted (attempt %d)", attempt)
                return client

            client.close()
            self.console.error('Invalid Sentry auth token!')
            token = None

        raise AuthenticationError(
            f"No valid Sentry auth token after {self.config.token_attempts} attempts"
        )

    def setup_sentry(self) -> SentrySession:
        """Authenticate and run the resolver."""
        client = self.connect()
        try:
            resolver = SentryProjectResolver(
                api_client=client,
                console=self.console,
                app_name=self.config.app_name,
                project_page_size=self.config.api.project_page_size,
                sample_rate_attempts=self.config.sample_rate_attempts,
            )
            return resolver.resolve()
        finally:
            client.close()

    def install(self) -> InstallationResult:
        result = InstallationResult()
        for key, value in LOGGING_CONFIG.items():
            result.update_config(key, value)
        result.vendor_publish(VendorPublish(provider=SERVICE_PROVIDER))

        if self.console.confirm('Setup Sentry PHP project now?', False):
            session = self.setup_sentry()
            result.environment_variables(self.environment_variables(session))

        return result

    def deploy(self, project_env: Mapping[str, Optional[str]]) -> DeploymentResult:
        """
        Resolve the DSN for a deployment.

        Args:
            project_env: Variables of the application's own .env file
        """
        existing = project_env.get(DSN_KEY)

        if existing:
            self.console.mini_task('Using existing Sentry Laravel client key from', '.env')
            session = SentrySession(dsn=existing)
        else:
            session = self.setup_sentry()

        return DeploymentResult().environment_variables(self.environment_variables(session))

    def should_deploy(self, site_env: Mapping[str, Optional[str]]) -> bool:
        """False when the deployed site already defines the DSN."""
        return DSN_KEY not in site_env

    def environment_variables(self, session: SentrySession) -> Dict[str, Any]:
        params: Dict[str, Any] = {DSN_KEY: session.dsn or ''}

        if session.sample_rate is not None:
            params[SAMPLE_RATE_KEY] = session.sample_rate

        return params
