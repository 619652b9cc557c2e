from dataclasses import dataclass, replace
from typing import Optional

from .sentry import Organization, Project


@dataclass(frozen=True)
class SentrySession:
    """State of one install/deploy run.

    Each resolution step returns an updated copy instead of mutating shared
    fields. Nothing here is persisted; the host stores the resulting variables.
    """
    organization: Optional[Organization] = None
    project: Optional[Project] = None
    dsn: Optional[str] = None
    sample_rate: Optional[float] = None

    def with_organization(self, organization: Organization) -> 'SentrySession':
        return replace(self, organization=organization)

    def with_project(self, project: Optional[Project]) -> 'SentrySession':
        return replace(self, project=project)

    def with_dsn(self, dsn: str) -> 'SentrySession':
        """Attach the client key DSN. A DSN cannot change once set."""
        if self.dsn is not None and self.dsn != dsn:
            raise ValueError("DSN is already set for this session")
        return replace(self, dsn=dsn)

    def with_sample_rate(self, sample_rate: Optional[float]) -> 'SentrySession':
        if sample_rate is not None and not 0.0 <= sample_rate <= 1.0:
            raise ValueError(f"Sample rate must be between 0.0 and 1.0, got {sample_rate}")
        return replace(self, sample_rate=sample_rate)

    @property
    def has_dsn(self) -> bool:
        return bool(self.dsn)

    @property
    def organization_slug(self) -> str:
        if self.organization is None:
            raise ValueError("Organization has not been resolved")
        return self.organization.slug
