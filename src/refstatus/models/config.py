"""Pydantic models for refstatus configuration."""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from refstatus.config.defaults import (
    DEFAULT_CACHE_CONFIG,
    DEFAULT_PROVIDER_CONFIG,
    SUPPORTED_PROVIDERS,
)


class ProviderConfig(BaseModel):
    """Commit status provider settings.

    Attributes:
        kind: Provider implementation to use
        api_url: Base URL of the provider API
        token: Optional API token sent as a bearer token
        timeout: HTTP timeout in seconds
    """

    model_config = ConfigDict(extra="forbid")

    kind: str = Field(default=DEFAULT_PROVIDER_CONFIG["kind"])
    api_url: str = Field(default=DEFAULT_PROVIDER_CONFIG["api_url"])
    token: str | None = Field(default=None)
    timeout: float = Field(default=DEFAULT_PROVIDER_CONFIG["timeout"], gt=0)

    @field_validator("kind")
    @classmethod
    def validate_kind(cls, v: str) -> str:
        """Validate the provider kind is supported."""
        if v not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported provider: {v}. "
                f"Supported: {', '.join(SUPPORTED_PROVIDERS)}"
            )
        return v

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the API URL."""
        return v.rstrip("/")


class CacheConfig(BaseModel):
    """Cache policy durations, in seconds."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=DEFAULT_CACHE_CONFIG["enabled"])
    unknown_ttl: int = Field(default=DEFAULT_CACHE_CONFIG["unknown_ttl"], gt=0)
    pending_ttl: int = Field(default=DEFAULT_CACHE_CONFIG["pending_ttl"], gt=0)
    recent_ttl: int = Field(default=DEFAULT_CACHE_CONFIG["recent_ttl"], gt=0)
    settled_ttl: int = Field(default=DEFAULT_CACHE_CONFIG["settled_ttl"], gt=0)
    pending_window: int = Field(
        default=DEFAULT_CACHE_CONFIG["pending_window"], gt=0
    )
    settled_after: int = Field(default=DEFAULT_CACHE_CONFIG["settled_after"], gt=0)

    @model_validator(mode="after")
    def validate_windows(self) -> CacheConfig:
        """Validate that the pending window is shorter than the settle age."""
        if self.pending_window >= self.settled_after:
            raise ValueError("pending_window must be shorter than settled_after")
        return self

    def duration(self, name: str) -> timedelta:
        """Return a configured duration as a timedelta."""
        return timedelta(seconds=getattr(self, name))


class StatusConfig(BaseModel):
    """Top-level refstatus configuration."""

    model_config = ConfigDict(extra="forbid")

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    warn_production_only_reference: bool = Field(
        default=False,
        description=(
            "Warn when a production stage deploys a reference that never went "
            "to a non-production stage"
        ),
    )
