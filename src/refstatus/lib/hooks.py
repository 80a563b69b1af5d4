"""Synchronous plugin hook registry.

Plugins contribute extra data to a lookup by registering callbacks for a named
event. Callbacks run in registration order and their results are collected
verbatim.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

REF_STATUS = "ref_status"

KNOWN_EVENTS: frozenset[str] = frozenset({REF_STATUS})

HookCallback = Callable[..., Any]


class HookRegistry:
    """Registry of plugin callbacks keyed by event name.

    Example:
        >>> hooks = HookRegistry()
        >>> hooks.register("ref_status", lambda stage, reference: None)
        >>> hooks.fire("ref_status", stage, "v4.2")
        []
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._callbacks: dict[str, list[HookCallback]] = {
            event: [] for event in KNOWN_EVENTS
        }

    def register(self, event: str, callback: HookCallback) -> None:
        """Register a callback for an event.

        Args:
            event: Event name
            callback: Callable invoked with the event arguments

        Raises:
            ValueError: If the event is unknown
        """
        self._callbacks_for(event).append(callback)
        logger.debug(f"Registered hook {callback!r} for '{event}'")

    def callbacks(self, event: str) -> list[HookCallback]:
        """Return registered callbacks for an event, in registration order."""
        return list(self._callbacks_for(event))

    def fire(self, event: str, *args: Any) -> list[Any]:
        """Invoke all callbacks for an event and collect their results.

        A callback may return a single result, a list or tuple of results, or
        None. None results are skipped, lists are flattened one level.

        Args:
            event: Event name
            *args: Positional arguments passed to every callback

        Returns:
            Collected results in registration order
        """
        return [item for _, items in self.fire_each(event, *args) for item in items]

    def fire_each(
        self, event: str, *args: Any
    ) -> list[tuple[HookCallback, list[Any]]]:
        """Like ``fire``, but keeps each callback next to its own results."""
        collected: list[tuple[HookCallback, list[Any]]] = []
        for callback in self._callbacks_for(event):
            result = callback(*args)
            if result is None:
                items = []
            elif isinstance(result, list | tuple):
                items = [item for item in result if item is not None]
            else:
                items = [result]
            collected.append((callback, items))
        return collected

    def _callbacks_for(self, event: str) -> list[HookCallback]:
        try:
            return self._callbacks[event]
        except KeyError:
            raise ValueError(
                f"Unknown hook event: {event}. "
                f"Known events: {', '.join(sorted(KNOWN_EVENTS))}"
            ) from None
