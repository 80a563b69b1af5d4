"""Commit status resolution for deploy references.

Main components:
- StatusAggregator: combined provider, history and plugin statuses
- DeployHistoryInspector: old release warnings for production stages
- CachePolicy: caching of provider results for immutable references
- build_aggregator: wires the pieces from a StatusConfig
"""

from __future__ import annotations

from refstatus.lib.cache_store import DEFAULT_STORE, CacheStore
from refstatus.lib.hooks import HookRegistry
from refstatus.models.config import StatusConfig
from refstatus.status.aggregator import StatusAggregator
from refstatus.status.cache_policy import CachePolicy, cache_key
from refstatus.status.history import DeployHistoryInspector
from refstatus.status.providers import StatusProvider, create_provider
from refstatus.status.repository import DeployRepository


def build_aggregator(
    config: StatusConfig,
    repository: DeployRepository,
    *,
    provider: StatusProvider | None = None,
    store: CacheStore | None = None,
    hooks: HookRegistry | None = None,
) -> StatusAggregator:
    """Create a StatusAggregator from configuration.

    Args:
        config: Loaded refstatus configuration.
        repository: Deploy history of the host application.
        provider: Status provider; built from ``config.provider`` when omitted.
        store: Cache store; the process-wide DEFAULT_STORE when omitted, so
            aggregators built per request still share cached results.
        hooks: Plugin hooks; an empty registry when omitted.
    """
    return StatusAggregator(
        provider=provider or create_provider(config.provider),
        history=DeployHistoryInspector(
            repository,
            warn_production_only_reference=config.warn_production_only_reference,
        ),
        cache_policy=CachePolicy(store or DEFAULT_STORE, config.cache),
        hooks=hooks,
    )


__all__ = [
    "CachePolicy",
    "DeployHistoryInspector",
    "DeployRepository",
    "StatusAggregator",
    "StatusProvider",
    "build_aggregator",
    "cache_key",
]
