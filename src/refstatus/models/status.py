"""Pydantic models for commit status results.

Provider statuses, synthetic deploy-history warnings and plugin entries all
share the StatusEntry shape so they can be merged into one ordered list.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class StatusState(str, Enum):
    """Overall state of a reference."""

    SUCCESS = "success"
    PENDING = "pending"
    FAILURE = "failure"
    ERROR = "error"
    MISSING = "missing"


# Least to most severe; MISSING has no severity.
STATE_PRIORITY: tuple[StatusState, ...] = (
    StatusState.SUCCESS,
    StatusState.PENDING,
    StatusState.FAILURE,
    StatusState.ERROR,
)


def severity_of(state: str | None) -> StatusState | None:
    """Return the ranked state for a raw state string, or None if unranked."""
    try:
        ranked = StatusState(state)
    except ValueError:
        return None
    return ranked if ranked in STATE_PRIORITY else None


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def most_severe(states: Iterable[str | None]) -> StatusState:
    """Return the most severe ranked state, or MISSING if none is ranked."""
    ranked = [s for s in (severity_of(state) for state in states) if s is not None]
    if not ranked:
        return StatusState.MISSING
    return max(ranked, key=STATE_PRIORITY.index)


class StatusEntry(BaseModel):
    """A single status line for a reference.

    ``state`` is a free-form label: provider entries use the ranked states,
    synthetic entries use labels such as ``"Old Release"``. Extra keys are kept
    so plugin and provider fields pass through untouched.
    """

    model_config = ConfigDict(extra="allow")

    state: str | None = Field(default=None, description="Status label")
    description: str | None = Field(default=None, description="Human summary")
    context: str | None = Field(default=None, description="Reporting context")
    target_url: str | None = Field(default=None, description="Link to details")
    updated_at: datetime | None = Field(
        default=None, description="Last time the provider updated this status"
    )


class RefStatus(BaseModel):
    """A group of statuses contributed on top of the provider result.

    Extra keys, such as a plugin name, are kept.
    """

    model_config = ConfigDict(extra="allow")

    state: StatusState = Field(..., description="Severity of this group")
    statuses: list[StatusEntry] = Field(default_factory=list)


class CommitStatusResult(BaseModel):
    """Combined state and ordered statuses for a reference."""

    model_config = ConfigDict(extra="forbid")

    state: StatusState = Field(..., description="Most severe state")
    statuses: list[StatusEntry] = Field(default_factory=list)

    @classmethod
    def missing(cls) -> CommitStatusResult:
        """Result for a reference the provider does not know about."""
        return cls(state=StatusState.MISSING, statuses=[])

    @property
    def last_updated_at(self) -> datetime | None:
        """Newest ``updated_at`` across statuses as UTC, if any carries one."""
        timestamps = [as_utc(s.updated_at) for s in self.statuses if s.updated_at]
        return max(timestamps) if timestamps else None
