"""Derived values attached to cached file reads."""

from dataclasses import dataclass
from typing import Any

from lumbar_fs.filesystem import Filesystem
from lumbar_fs.read_cache import ReadCache


@dataclass
class ArtifactRead:
    """Raw file data together with one named artifact, if present."""

    data: bytes
    artifact: Any = None


class ArtifactStore:
    """Memoizes values such as compiled templates on live cache entries.

    Artifacts live and die with their entry: setting one for a path that is
    not cached is silently dropped.
    """

    def __init__(self, cache: ReadCache, filesystem: Filesystem) -> None:
        self.cache = cache
        self.filesystem = filesystem

    def set_artifact(self, path: str, name: str, value: Any) -> None:
        entry = self.cache.peek(path)
        if entry is not None:
            entry.artifacts[name] = value

    async def get_with_artifact(self, path: str, name: str) -> ArtifactRead:
        entry = await self.cache.get(path, self.filesystem.read)
        return ArtifactRead(data=entry.data, artifact=entry.artifacts.get(name))
