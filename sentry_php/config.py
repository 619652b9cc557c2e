from dataclasses import dataclass
import os
from typing import Optional

# Default Sentry REST API root
DEFAULT_API_URL = 'https://sentry.io/api/0/'

# Variable names written to the Laravel application's environment
DSN_KEY = 'SENTRY_LARAVEL_DSN'
SAMPLE_RATE_KEY = 'SENTRY_TRACES_SAMPLE_RATE'


def get_app_name() -> str:
    """
    Get the application name from environment variable or working directory.

    Uses APP_NAME (the same variable Laravel reads) if set, otherwise the
    name of the current directory.

    Returns:
        Display name of the application being configured
    """
    return os.getenv('APP_NAME') or os.path.basename(os.getcwd())


@dataclass
class APIConfig:
    base_url: str = DEFAULT_API_URL
    timeout: int = 30
    project_page_size: int = 100


@dataclass
class Config:
    app_name: str = ''
    auth_token: Optional[str] = None
    env_file: str = '.env'
    token_attempts: int = 3
    sample_rate_attempts: int = 3
    api: APIConfig = None

    def __post_init__(self):
        if self.api is None:
            self.api = APIConfig()
        if not self.app_name:
            self.app_name = get_app_name()

    @classmethod
    def from_env(cls) -> 'Config':
        return cls(
            app_name = get_app_name(),
            auth_token = os.getenv('SENTRY_AUTH_TOKEN') or None,
            env_file = os.getenv('SENTRY_PHP_ENV_FILE', '.env'),
            token_attempts = int(os.getenv('SENTRY_PHP_TOKEN_ATTEMPTS', 3)),
            sample_rate_attempts = int(os.getenv('SENTRY_PHP_SAMPLE_RATE_ATTEMPTS', 3)),
            api=APIConfig(
                base_url = os.getenv('SENTRY_API_URL', DEFAULT_API_URL),
                timeout = int(os.getenv('SENTRY_API_TIMEOUT', 30)),
            )
        )
