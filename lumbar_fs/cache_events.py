"""Publish/subscribe channel for cache invalidation notifications."""

import logging
from collections import defaultdict
from collections.abc import Callable

logger = logging.getLogger(__name__)

CACHE_SET = "cache:set"
CACHE_RESET = "cache:reset"

Listener = Callable[[str | None], None]


class CacheEvents:
    """Delivers ``cache:set`` and ``cache:reset`` notifications to listeners.

    Listeners are called synchronously in subscription order. A listener that
    raises is logged and skipped so it cannot disturb the cache or its peers.
    """

    def __init__(self) -> None:
        self.listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event: str, listener: Listener) -> None:
        if listener not in self.listeners[event]:
            self.listeners[event].append(listener)
            logger.debug("Subscribed listener to %s", event)

    def unsubscribe(self, event: str, listener: Listener) -> None:
        if listener in self.listeners.get(event, []):
            self.listeners[event].remove(listener)
            logger.debug("Unsubscribed listener from %s", event)

    def clear_listeners(self, event: str | None = None) -> None:
        if event:
            self.listeners.pop(event, None)
        else:
            self.listeners.clear()

    def emit(self, event: str, path: str | None = None) -> None:
        # Copy so a listener may unsubscribe itself while being notified.
        for listener in list(self.listeners.get(event, [])):
            try:
                listener(path)
            except Exception:
                logger.exception("Error in %s listener for %r", event, path)
