"""Service object tying the filesystem access layer together."""

import logging
import re
from typing import Any

from lumbar_fs.artifact_store import ArtifactRead, ArtifactStore
from lumbar_fs.cache_events import CacheEvents, Listener
from lumbar_fs.compile_template import compile_template
from lumbar_fs.directory_ensurer import DirectoryEnsurer
from lumbar_fs.filesystem import FileStat, Filesystem, LocalFilesystem
from lumbar_fs.load_config import DEFAULT_CONFIG
from lumbar_fs.path_resolver import PathResolver
from lumbar_fs.read_cache import ReadCache
from lumbar_fs.resource_descriptor import ResourceDescriptor
from lumbar_fs.resource_expander import ResourceExpander
from lumbar_fs.retry_on_exhaustion import retry_on_exhaustion
from lumbar_fs.template_loader import Compiler, TemplateLoader

logger = logging.getLogger(__name__)


class FileUtil:
    """Reads, lists and writes files through one cache and one lookup root.

    Construct one instance per process (or per test); nothing is shared
    between instances.
    """

    def __init__(
        self,
        filesystem: Filesystem | None = None,
        lookup_path: str | None = None,
        retry_delay: float = DEFAULT_CONFIG["retry_delay"],
        template_suffixes: list[str] | None = None,
        ignored_names: list[str] | None = None,
        compiler: Compiler = compile_template,
    ) -> None:
        self.filesystem = filesystem or LocalFilesystem()
        self.retry_delay = retry_delay
        self.resolver = PathResolver(lookup_path)
        self.events = CacheEvents()
        self.cache = ReadCache(self.resolver, self.events, retry_delay)
        self.artifacts = ArtifactStore(self.cache, self.filesystem)
        self.directories = DirectoryEnsurer(self.filesystem, retry_delay)
        self.expander = ResourceExpander(
            self.resolver,
            self.cache,
            self.filesystem,
            retry_delay,
            ignored_names or DEFAULT_CONFIG["ignored_names"],
        )
        self.templates = TemplateLoader(
            self.artifacts,
            compiler,
            template_suffixes or DEFAULT_CONFIG["template_suffixes"],
        )

    @classmethod
    def from_config(
        cls, config: dict[str, Any], filesystem: Filesystem | None = None
    ) -> "FileUtil":
        return cls(
            filesystem=filesystem,
            lookup_path=config.get("lookup_path"),
            retry_delay=config.get("retry_delay", DEFAULT_CONFIG["retry_delay"]),
            template_suffixes=config.get("template_suffixes"),
            ignored_names=config.get("ignored_names"),
        )

    # Paths

    def resolve_path(self, name: str) -> str:
        return self.resolver.resolve_path(name)

    def make_relative(self, name: str) -> str:
        return self.resolver.make_relative(name)

    def lookup_path(self, new_root: str | None = None) -> str:
        return self.resolver.lookup_path(new_root)

    # Notifications

    def subscribe(self, event: str, listener: Listener) -> None:
        self.events.subscribe(event, listener)

    def unsubscribe(self, event: str, listener: Listener) -> None:
        self.events.unsubscribe(event, listener)

    # Reads

    async def stat(self, path: str) -> FileStat:
        """Stat ``path`` as given, uncached."""
        return await retry_on_exhaustion(
            self.filesystem.stat, path, delay=self.retry_delay
        )

    async def read_file(self, path: str) -> bytes:
        entry = await self.cache.get(path, self.filesystem.read)
        return entry.data

    def read_file_sync(self, path: str) -> bytes:
        """Read ``path`` immediately, bypassing the cache."""
        return self.filesystem.read_sync(self.resolve_path(path))

    async def read_file_artifact(self, path: str, name: str) -> ArtifactRead:
        return await self.artifacts.get_with_artifact(path, name)

    def set_file_artifact(self, path: str, name: str, value: Any) -> None:
        self.artifacts.set_artifact(path, name, value)

    async def readdir(self, path: str) -> list[str]:
        entry = await self.cache.get(path, self.filesystem.list)
        return entry.data

    def reset_cache(self, path: str | None = None) -> None:
        self.cache.reset(path)

    # Writes

    async def ensure_dirs(self, path: str) -> None:
        await self.directories.ensure_dirs(self.resolve_path(path))

    async def write_file(self, path: str, data: str | bytes) -> None:
        """Write ``data`` to ``path``, creating parent directories as needed."""
        self.reset_cache(path)
        path = self.resolve_path(path)
        await self.directories.ensure_dirs(path)

        if isinstance(data, str):
            data = data.encode("utf-8")
        await retry_on_exhaustion(
            self.filesystem.write, path, data, delay=self.retry_delay
        )
        logger.debug("Wrote %d bytes to %s", len(data), path)

    # Resources and templates

    async def file_list(
        self, spec: Any, extension: re.Pattern[str] | str | None = None
    ) -> list[ResourceDescriptor]:
        return await self.expander.expand(spec, extension)

    async def load_template(self, template: str, split_on: str | None = None) -> Any:
        return await self.templates.load(template, split_on)
