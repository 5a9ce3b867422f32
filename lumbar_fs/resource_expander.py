"""Expansion of path specs into flat, ordered resource lists.

A spec may be a bare path, a resource (a path plus template fields), or a
list mixing either with already normalized descriptors. Directories are
walked recursively through the read cache's listing path; every file that
survives filtering becomes one descriptor and every directory adds one
synthetic ``dir`` descriptor of its own.

Directory results are sorted by their source string. List results keep
their input order.
"""

import asyncio
import logging
import posixpath
import re
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from lumbar_fs.errors import NotFoundError
from lumbar_fs.filesystem import Filesystem
from lumbar_fs.path_resolver import PathResolver
from lumbar_fs.read_cache import ReadCache
from lumbar_fs.resource_descriptor import (
    PathSpec,
    ResourceDescriptor,
    ResourceSpec,
    Spec,
    as_spec,
    sort_key,
)
from lumbar_fs.retry_on_exhaustion import DEFAULT_RETRY_DELAY, retry_on_exhaustion

logger = logging.getLogger(__name__)

MATCH_ALL = re.compile(r".*")

DEFAULT_IGNORED_NAMES = ("vendor",)


def unique(items: Iterable[Any]) -> list[Any]:
    """De-duplicate by equality, keeping the first occurrence."""
    result: list[Any] = []
    for item in items:
        if item not in result:
            result.append(item)
    return result


class ResourceExpander:
    """Turns path specs into resource descriptors."""

    def __init__(
        self,
        resolver: PathResolver,
        cache: ReadCache,
        filesystem: Filesystem,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        ignored_names: Iterable[str] = DEFAULT_IGNORED_NAMES,
    ) -> None:
        self.resolver = resolver
        self.cache = cache
        self.filesystem = filesystem
        self.retry_delay = retry_delay
        self.ignored_names = frozenset(ignored_names)

    async def expand(
        self,
        spec: Any,
        extension: re.Pattern[str] | str | None = None,
    ) -> list[ResourceDescriptor]:
        """Expand ``spec`` into descriptors.

        ``extension`` filters files discovered inside directories; files named
        explicitly are never filtered by it. A missing path yields a single
        ``enoent`` descriptor. Any other error aborts the whole expansion.
        """
        if extension is None:
            pattern = MATCH_ALL
        elif isinstance(extension, str):
            pattern = re.compile(extension)
        else:
            pattern = extension

        if isinstance(spec, (list, tuple)):
            return await self._expand_list(spec, pattern)
        return await self._expand_item(as_spec(spec), pattern, None, None, None)

    async def _expand_list(
        self, items: Sequence[Any], pattern: re.Pattern[str]
    ) -> list[ResourceDescriptor]:
        if not items:
            return []
        specs = [as_spec(item) for item in unique(items)]
        results = await asyncio.gather(
            *(self._expand_item(spec, pattern, None, None, None) for spec in specs)
        )
        return [resource for result in results for resource in result]

    async def _expand_item(
        self,
        spec: Spec,
        pattern: re.Pattern[str],
        template: dict[str, Any] | None,
        src_dir: str | None,
        parent: str | None,
    ) -> list[ResourceDescriptor]:
        """Expand one spec; ``parent`` is the canonical directory it was listed in."""
        if isinstance(spec, ResourceDescriptor):
            return [spec]

        if isinstance(spec, ResourceSpec):
            if template is None:
                template = spec.fields
            name = spec.src
        elif isinstance(spec, PathSpec):
            name = spec.path
        else:
            raise TypeError(f"Unsupported spec: {spec!r}")

        template = {k: v for k, v in (template or {}).items() if k != "src"}

        if parent is None:
            path = self.resolver.resolve_path(name)
        else:
            path = parent.rstrip("/") + "/" + name
        return await self._expand_path(
            path, pattern, template, src_dir, in_directory=parent is not None
        )

    async def _expand_path(
        self,
        path: str,
        pattern: re.Pattern[str],
        template: dict[str, Any],
        src_dir: str | None,
        in_directory: bool,
    ) -> list[ResourceDescriptor]:
        relative = self.resolver.make_relative(path)
        try:
            stat = await retry_on_exhaustion(
                self.filesystem.stat, path, delay=self.retry_delay
            )
        except NotFoundError:
            return [
                ResourceDescriptor(src=relative, enoent=True, fields=dict(template))
            ]

        if stat.is_directory:
            return await self._expand_directory(
                path, relative, pattern, template, src_dir or relative
            )

        if not self._accepts(relative, pattern, in_directory):
            return []
        return [
            ResourceDescriptor(src=relative, src_dir=src_dir, fields=dict(template))
        ]

    def _accepts(
        self, relative: str, pattern: re.Pattern[str], in_directory: bool
    ) -> bool:
        basename = posixpath.basename(relative)
        if basename.startswith(".") or basename in self.ignored_names:
            return False
        # The extension filter only applies to files found by listing a directory.
        return not in_directory or bool(pattern.search(relative))

    async def _expand_directory(
        self,
        path: str,
        relative: str,
        pattern: re.Pattern[str],
        template: dict[str, Any],
        src_dir: str,
    ) -> list[ResourceDescriptor]:
        entry = await self.cache.get(path, self.filesystem.list)

        # gather keeps results in child index order whatever order they finish in.
        children = await asyncio.gather(
            *(
                self._expand_item(as_spec(child), pattern, template, src_dir, path)
                for child in entry.data
            )
        )

        resources = [
            replace(resource, src_dir=src_dir)
            for child in children
            for resource in child
        ]
        resources.append(ResourceDescriptor(dir=relative, fields=dict(template)))
        resources.sort(key=sort_key)
        logger.debug("Expanded %s into %d resources", relative, len(resources))
        return resources
