"""Result types handed back to the host after install or deploy."""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class VendorPublish:
    """A `php artisan vendor:publish` request for a service provider."""
    provider: str

    @property
    def command(self) -> str:
        return f'php artisan vendor:publish --provider="{self.provider}"'


@dataclass
class DeploymentResult:
    """Environment variables to set on the deployed site."""
    environment: Dict[str, Any] = field(default_factory=dict)

    def environment_variables(self, variables: Dict[str, Any]) -> 'DeploymentResult':
        self.environment.update(variables)
        return self


@dataclass
class InstallationResult(DeploymentResult):
    """Deployment result plus Laravel config edits and vendor publishes."""
    config_updates: Dict[str, Any] = field(default_factory=dict)
    vendor_publishes: List[VendorPublish] = field(default_factory=list)

    def update_config(self, key: str, value: Any) -> 'InstallationResult':
        self.config_updates[key] = value
        return self

    def vendor_publish(self, publish: VendorPublish) -> 'InstallationResult':
        self.vendor_publishes.append(publish)
        return self
