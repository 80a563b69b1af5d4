"""refstatus - decide whether a reference is safe to deploy to a stage.

Combines a CI provider's commit status with the project's own deploy history
and caches the provider side under an adaptive time-to-live.

Main features:
- Combined commit status from a CI provider (GitHub)
- Old release warnings when a newer version already reached the stage
- Plugin hooks contributing extra statuses
- Read-through caching for immutable version references
"""

from refstatus.config.loader import ConfigLoader
from refstatus.lib.errors import (
    ConfigError,
    PluginStatusError,
    ProviderAPIError,
    ProviderConnectionError,
    RefStatusError,
    StatusProviderError,
)
from refstatus.status import StatusAggregator, build_aggregator

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigError",
    "ConfigLoader",
    "PluginStatusError",
    "ProviderAPIError",
    "ProviderConnectionError",
    "RefStatusError",
    "StatusAggregator",
    "StatusProviderError",
    "build_aggregator",
]
