"""Tests for the cache notification channel."""

import logging

from lumbar_fs.cache_events import CACHE_RESET, CACHE_SET, CacheEvents


def test_listeners_called_in_subscription_order() -> None:
    """Verify ordered delivery to every listener of an event."""
    events = CacheEvents()
    calls = []
    events.subscribe(CACHE_SET, lambda path: calls.append(("first", path)))
    events.subscribe(CACHE_SET, lambda path: calls.append(("second", path)))
    events.subscribe(CACHE_RESET, lambda path: calls.append(("reset", path)))

    events.emit(CACHE_SET, "/a.txt")
    assert calls == [("first", "/a.txt"), ("second", "/a.txt")]


def test_duplicate_subscription_ignored() -> None:
    """Verify that a listener is registered at most once per event."""
    events = CacheEvents()
    calls = []
    events.subscribe(CACHE_RESET, calls.append)
    events.subscribe(CACHE_RESET, calls.append)
    events.emit(CACHE_RESET)
    assert calls == [None]


def test_unsubscribe_and_clear() -> None:
    """Verify that removed listeners stop receiving events."""
    events = CacheEvents()
    calls = []
    events.subscribe(CACHE_SET, calls.append)
    events.unsubscribe(CACHE_SET, calls.append)
    events.emit(CACHE_SET, "/a.txt")

    events.subscribe(CACHE_RESET, calls.append)
    events.clear_listeners()
    events.emit(CACHE_RESET, "/a.txt")
    assert calls == []


def test_failing_listener_is_isolated(caplog) -> None:
    """Verify that one failing listener does not block the others."""
    events = CacheEvents()
    calls = []

    def broken(path):
        raise RuntimeError("boom")

    events.subscribe(CACHE_SET, broken)
    events.subscribe(CACHE_SET, calls.append)

    with caplog.at_level(logging.ERROR, logger="lumbar_fs.cache_events"):
        events.emit(CACHE_SET, "/a.txt")

    assert calls == ["/a.txt"]
    assert "cache:set" in caplog.text
