"""Read-only views of projects, stages and deploys.

These are the shapes the deploy repository hands to the status lookup. They do
not assume any persistence technology.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

SUCCEEDED = "succeeded"


class Project(BaseModel):
    """Project whose references are being checked."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="Project identifier")
    name: str = Field(..., description="Human-readable project name")
    repository_path: str = Field(
        ..., description="Repository path on the provider, e.g. org/repo"
    )


class Stage(BaseModel):
    """Deployment stage grouping one or more deploy groups."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="Stage identifier")
    name: str = Field(..., description="Stage name shown in warnings")
    project_id: int = Field(..., description="Owning project identifier")
    production: bool = Field(default=False, description="Production stage flag")
    deploy_group_ids: list[int] = Field(
        default_factory=list, description="Deploy groups this stage deploys to"
    )


class DeployRecord(BaseModel):
    """A past deploy as seen by the history inspector."""

    model_config = ConfigDict(extra="forbid")

    id: int = Field(..., description="Deploy identifier")
    reference: str = Field(..., description="Deployed reference")
    stage_id: int = Field(..., description="Stage that ran the deploy")
    stage_name: str = Field(..., description="Name of that stage")
    deploy_group_ids: list[int] = Field(
        default_factory=list, description="Deploy groups of that stage"
    )
    job_status: str = Field(..., description="Status of the deploy job")
    created_at: datetime | None = Field(default=None, description="Deploy time")

    @property
    def succeeded(self) -> bool:
        """Whether the deploy job finished successfully."""
        return self.job_status == SUCCEEDED
