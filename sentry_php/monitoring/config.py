"""
Monitoring Configuration

Loads self-monitoring settings from environment variables. These describe
where this tool reports its own failures, not the DSN it provisions.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class MonitoringConfig:
    """Configuration for the tool's own error reporting."""

    sentry_dsn: Optional[str] = field(default=None)
    sentry_environment: str = "production"
    sentry_traces_sample_rate: float = 0.0

    @classmethod
    def from_env(cls) -> "MonitoringConfig":
        """Create config from environment variables."""
        return cls(
            sentry_dsn=os.getenv("SENTRY_PHP_MONITORING_DSN"),
            sentry_environment=os.getenv("SENTRY_PHP_MONITORING_ENV", "production"),
            sentry_traces_sample_rate=float(os.getenv("SENTRY_PHP_MONITORING_SAMPLE_RATE", "0.0")),
        )

    @property
    def sentry_enabled(self) -> bool:
        """Check if error reporting is configured."""
        return bool(self.sentry_dsn)
