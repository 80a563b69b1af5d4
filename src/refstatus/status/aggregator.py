"""Combined commit status for a reference about to be deployed.

Merges the CI provider's status with deploy history warnings and plugin
statuses into one ordered list and one overall state.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from refstatus.lib.errors import PluginStatusError
from refstatus.lib.hooks import REF_STATUS, HookCallback, HookRegistry
from refstatus.models.deploy import Project, Stage
from refstatus.models.status import (
    CommitStatusResult,
    RefStatus,
    StatusEntry,
    StatusState,
    most_severe,
)
from refstatus.status.cache_policy import CachePolicy, cache_key
from refstatus.status.history import DeployHistoryInspector
from refstatus.status.providers.base import StatusProvider

logger = logging.getLogger(__name__)

NO_STATUS_DESCRIPTION = "No status was reported for this reference."
NO_STATUS_CONTEXT = "Reference"


def _as_ref_status(item: Any) -> RefStatus | StatusEntry:
    """Normalize a plugin result into a status group or a single entry."""
    if isinstance(item, RefStatus | StatusEntry):
        return item
    if isinstance(item, dict) and "statuses" in item:
        return RefStatus.model_validate(item)
    return StatusEntry.model_validate(item)


def _plugin_name(callback: HookCallback) -> str:
    module = getattr(callback, "__module__", None)
    name = getattr(callback, "__qualname__", None) or repr(callback)
    return f"{module}.{name}" if module else name


class StatusAggregator:
    """Resolves the combined status of a reference for a stage.

    Provider results for immutable references are cached through the cache
    policy; history and plugin statuses are always computed live.

    Example:
        >>> aggregator = StatusAggregator(provider, inspector, cache_policy, hooks)
        >>> result = aggregator.resolve(project, "v4.2", stage)
        >>> result.state
        <StatusState.ERROR: 'error'>
    """

    def __init__(
        self,
        provider: StatusProvider,
        history: DeployHistoryInspector,
        cache_policy: CachePolicy,
        hooks: HookRegistry | None = None,
    ) -> None:
        self.provider = provider
        self.history = history
        self.cache_policy = cache_policy
        self.hooks = hooks or HookRegistry()

    def resolve(
        self,
        project: Project,
        reference: str,
        stage: Stage | None = None,
        deploy_id: int | None = None,
    ) -> CommitStatusResult:
        """Resolve the combined state and statuses of a reference.

        Args:
            project: Project owning the reference.
            reference: Branch, tag or commit being deployed.
            stage: Stage being deployed to, if any.
            deploy_id: Deploy in progress, excluded from history checks.

        Returns:
            CommitStatusResult with provider statuses first, then history
            warnings, then plugin statuses.

        Raises:
            StatusProviderError: If the provider lookup fails.
            PluginStatusError: If a plugin returns an unusable result.
        """
        provider_result = self.provider_status(project, reference)
        if provider_result.state == StatusState.MISSING:
            return CommitStatusResult.missing()

        statuses = list(provider_result.statuses)
        states: list[str | None] = [provider_result.state.value]
        if not statuses:
            statuses.append(
                StatusEntry(
                    state=StatusState.PENDING.value,
                    description=NO_STATUS_DESCRIPTION,
                    context=NO_STATUS_CONTEXT,
                )
            )
            states = [StatusState.PENDING.value]
        else:
            states.extend(status.state for status in statuses)

        contributed = [
            *self.history.statuses(project, stage, reference, deploy_id),
            *self.plugin_statuses(stage, reference),
        ]
        for item in contributed:
            if isinstance(item, RefStatus):
                statuses.extend(item.statuses)
                states.append(item.state.value)
            else:
                statuses.append(item)
                states.append(item.state)

        return CommitStatusResult(state=most_severe(states), statuses=statuses)

    def state(
        self,
        project: Project,
        reference: str,
        stage: Stage | None = None,
        deploy_id: int | None = None,
    ) -> StatusState:
        """Return only the combined state."""
        return self.resolve(project, reference, stage, deploy_id).state

    def statuses(
        self,
        project: Project,
        reference: str,
        stage: Stage | None = None,
        deploy_id: int | None = None,
    ) -> list[StatusEntry]:
        """Return only the ordered statuses."""
        return self.resolve(project, reference, stage, deploy_id).statuses

    def provider_status(self, project: Project, reference: str) -> CommitStatusResult:
        """Provider result for a reference, through the cache for versions.

        A reference unknown to the provider resolves to a missing result.
        """
        payload = self.cache_policy.fetch_if(
            self.cache_policy.should_cache(reference),
            cache_key(project.id, reference),
            expires_in=lambda cached: self.cache_policy.cache_duration(
                CommitStatusResult.model_validate_json(cached)
            ),
            compute=lambda: self._fetch(project, reference).model_dump_json(),
        )
        return CommitStatusResult.model_validate_json(payload)

    def plugin_statuses(
        self, stage: Stage | None, reference: str
    ) -> list[RefStatus | StatusEntry]:
        """Statuses contributed by ``ref_status`` hooks, in registration order.

        Raises:
            PluginStatusError: If a plugin result is neither a status entry nor a
                status group.
        """
        statuses: list[RefStatus | StatusEntry] = []
        for callback, items in self.hooks.fire_each(REF_STATUS, stage, reference):
            for item in items:
                try:
                    statuses.append(_as_ref_status(item))
                except ValidationError as e:
                    raise PluginStatusError(_plugin_name(callback), str(e)) from e
        return statuses

    def expire_cache(self, project: Project, reference: str) -> bool:
        """Drop the cached provider result for a reference."""
        return self.cache_policy.expire(cache_key(project.id, reference))

    def _fetch(self, project: Project, reference: str) -> CommitStatusResult:
        result = self.provider.get_status(project.repository_path, reference)
        if result is None:
            logger.debug(f"{project.repository_path}@{reference} not found by provider")
            return CommitStatusResult.missing()
        return result
