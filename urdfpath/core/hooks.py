"""
Discovery and resolution events

PackageIndex and PathResolver report what they do (packages indexed or
overridden, manifests skipped, lookups that fail, ../ rewrites, package root
moves) through a HookManager, so importer UI code can collect them without
parsing log output.

Usage:
    missing = []
    hooks = HookManager()
    hooks.register(EventType.ON_PACKAGE_NOT_FOUND, lambda **kw: missing.append(kw["package_name"]))
    resolver = PathResolver(host, hooks=hooks)
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)


class EventType(Enum):
    """
    Events and the keyword arguments they are emitted with.

    ON_PACKAGE_INDEXED       name, path
    ON_PACKAGE_OVERRIDDEN    name, old_path, new_path
    ON_MANIFEST_SKIPPED      manifest, reason
    ON_PACKAGE_NOT_FOUND     package_name, search_roots
    ON_TRAVERSAL_BLOCKED     original, rewritten
    ON_PACKAGE_ROOT_CHANGED  old_root, new_root
    """

    ON_PACKAGE_INDEXED = auto()
    ON_PACKAGE_OVERRIDDEN = auto()
    ON_MANIFEST_SKIPPED = auto()
    ON_PACKAGE_NOT_FOUND = auto()
    ON_TRAVERSAL_BLOCKED = auto()
    ON_PACKAGE_ROOT_CHANGED = auto()


class HookManager:
    """
    Event listeners keyed by EventType, called in priority order.

    A listener that raises is logged and skipped; the crawl or resolution
    that emitted the event carries on.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Tuple[int, Callable[..., None]]]] = {}

    def register(
        self, event: EventType, callback: Callable[..., None], priority: int = 0
    ) -> None:
        """
        Listen for an event.

        Args:
            event: Event to listen for
            callback: Called with the event's keyword arguments
            priority: Lower runs first; equal priorities keep registration order
        """
        listeners = self._listeners.setdefault(event, [])
        listeners.append((priority, callback))
        listeners.sort(key=lambda item: item[0])

    def emit(self, event: EventType, **context: Any) -> None:
        for _, callback in self._listeners.get(event, ()):
            try:
                callback(**context)
            except Exception as e:
                logger.error(f"Listener for {event.name} failed: {e}", exc_info=True)
