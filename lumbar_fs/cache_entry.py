"""Data model for a single cached read."""

import asyncio
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CacheEntry:
    """A coalesced read of one canonical path.

    ``future`` resolves to the entry itself once ``data`` is populated. A
    permanent failure resolves it with the error, after the entry has been
    evicted from its table.
    """

    path: str
    future: asyncio.Future
    data: Any = None
    artifacts: dict[str, Any] = field(default_factory=dict)
    task: asyncio.Task | None = None
