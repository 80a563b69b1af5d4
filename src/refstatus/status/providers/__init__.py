"""Commit status providers for refstatus."""

from __future__ import annotations

from refstatus.lib.errors import ConfigError
from refstatus.models.config import ProviderConfig
from refstatus.status.providers.base import StatusProvider


def create_provider(config: ProviderConfig) -> StatusProvider:
    """Create a status provider based on the provider configuration."""
    if config.kind == "github":
        from refstatus.status.providers.github import GitHubStatusProvider

        return GitHubStatusProvider(config)

    raise ConfigError("provider.kind", f"Unsupported status provider: {config.kind}")


__all__ = ["StatusProvider", "create_provider"]
