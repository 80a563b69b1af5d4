"""Pytest configuration and shared fixtures for refstatus tests."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

import pytest

from refstatus.lib.cache_store import MemoryCacheStore
from refstatus.lib.hooks import HookRegistry
from refstatus.models.config import CacheConfig
from refstatus.models.deploy import DeployRecord, Project, Stage
from refstatus.models.status import CommitStatusResult
from refstatus.status.aggregator import StatusAggregator
from refstatus.status.cache_policy import CachePolicy
from refstatus.status.history import DeployHistoryInspector
from refstatus.status.providers.base import StatusProvider
from refstatus.status.repository import DeployRepository

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeDeployRepository(DeployRepository):
    """In-memory deploy history.

    Returns every deploy overlapping the requested groups, regardless of job
    status, so callers must filter on ``succeeded`` themselves.
    """

    def __init__(self) -> None:
        self.deploys: list[DeployRecord] = []
        self.non_production_references: set[str] = set()
        self.queries: list[tuple[list[int], int | None]] = []

    def add(self, **fields: Any) -> DeployRecord:
        defaults: dict[str, Any] = {
            "id": len(self.deploys) + 1,
            "stage_id": 2,
            "stage_name": "Production",
            "deploy_group_ids": [1],
            "job_status": "succeeded",
        }
        record = DeployRecord(**{**defaults, **fields})
        self.deploys.append(record)
        return record

    def find_succeeded_deploys(
        self,
        deploy_group_ids: Iterable[int],
        excluding_deploy_id: int | None = None,
    ) -> Sequence[DeployRecord]:
        groups = set(deploy_group_ids)
        self.queries.append((sorted(groups), excluding_deploy_id))
        return [
            deploy
            for deploy in self.deploys
            if deploy.id != excluding_deploy_id
            and groups & set(deploy.deploy_group_ids)
        ]

    def deployed_reference_to_non_production_stage(
        self, project: Project, reference: str
    ) -> bool:
        return reference in self.non_production_references


class FakeStatusProvider(StatusProvider):
    """Status provider returning canned payloads and counting calls."""

    def __init__(self, result: CommitStatusResult | None = None) -> None:
        self.result = result
        self.error: Exception | None = None
        self.calls: list[tuple[str, str]] = []

    def respond(self, state: str, statuses: list[dict[str, Any]]) -> None:
        self.result = CommitStatusResult.model_validate(
            {"state": state, "statuses": statuses}
        )

    def not_found(self) -> None:
        self.result = None

    def get_status(
        self, repository_path: str, reference: str
    ) -> CommitStatusResult | None:
        self.calls.append((repository_path, reference))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at NOW."""
    return FrozenClock()


@pytest.fixture
def store(clock: FrozenClock) -> MemoryCacheStore:
    """Empty in-memory cache store driven by the frozen clock."""
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def cache_policy(store: MemoryCacheStore, clock: FrozenClock) -> CachePolicy:
    """Cache policy with default durations."""
    return CachePolicy(store, CacheConfig(), clock=clock)


@pytest.fixture
def repository() -> FakeDeployRepository:
    """Empty deploy history."""
    return FakeDeployRepository()


@pytest.fixture
def provider() -> FakeStatusProvider:
    """Provider reporting one successful status updated a day ago."""
    fake = FakeStatusProvider()
    fake.respond(
        "success",
        [{"state": "success", "context": "ci", "updated_at": "2024-04-30T12:00:00Z"}],
    )
    return fake


@pytest.fixture
def hooks() -> HookRegistry:
    """Empty hook registry."""
    return HookRegistry()


@pytest.fixture
def project() -> Project:
    """Project under test."""
    return Project(id=1, name="Foo", repository_path="bar/foo")


@pytest.fixture
def staging_stage() -> Stage:
    """Non-production stage sharing deploy group 1."""
    return Stage(id=1, name="Staging", project_id=1, deploy_group_ids=[1])


@pytest.fixture
def production_stage() -> Stage:
    """Production stage deploying to deploy group 1."""
    return Stage(
        id=2, name="Production", project_id=1, production=True, deploy_group_ids=[1]
    )


@pytest.fixture
def aggregator(
    provider: FakeStatusProvider,
    repository: FakeDeployRepository,
    cache_policy: CachePolicy,
    hooks: HookRegistry,
) -> StatusAggregator:
    """Aggregator wired with fakes."""
    return StatusAggregator(
        provider=provider,
        history=DeployHistoryInspector(repository),
        cache_policy=cache_policy,
        hooks=hooks,
    )


# Configure pytest
def pytest_configure(config: Any) -> None:
    """Configure pytest with marker options."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )
