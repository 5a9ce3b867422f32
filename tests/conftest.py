"""Shared fixtures: an in-memory filesystem with call counting and fault injection."""

import asyncio
import posixpath
from collections import Counter, defaultdict

import pytest

from lumbar_fs.errors import AlreadyExistsError, NotFoundError
from lumbar_fs.file_util import FileUtil
from lumbar_fs.filesystem import FileStat

RETRY_DELAY = 0.01


class FakeFilesystem:
    """Async filesystem double keyed by absolute POSIX paths."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.dirs: list[str] = ["/"]
        self.calls: Counter = Counter()
        self.failures: dict[tuple[str, str], list[Exception]] = defaultdict(list)
        self.delays: dict[str, float] = {}

    def add_file(self, path: str, data: bytes = b"") -> None:
        self.add_dir(posixpath.dirname(path))
        self.files[path] = data

    def add_dir(self, path: str) -> None:
        path = path.rstrip("/") or "/"
        if path in self.dirs:
            return
        self.add_dir(posixpath.dirname(path))
        self.dirs.append(path)

    def fail(self, op: str, path: str, *errors: Exception) -> None:
        self.failures[(op, path)].extend(errors)

    async def _enter(self, op: str, path: str) -> None:
        self.calls[(op, path)] += 1
        await asyncio.sleep(self.delays.get(path, 0))
        queue = self.failures.get((op, path))
        if queue:
            raise queue.pop(0)

    async def read(self, path: str) -> bytes:
        await self._enter("read", path)
        return self.read_sync(path)

    def read_sync(self, path: str) -> bytes:
        if path not in self.files:
            raise NotFoundError(f"no such file: {path}", path=path)
        return self.files[path]

    async def list(self, path: str) -> list[str]:
        await self._enter("list", path)
        path = path.rstrip("/") or "/"
        if path not in self.dirs:
            raise NotFoundError(f"no such directory: {path}", path=path)
        children = [p for p in self.dirs if p != "/" and posixpath.dirname(p) == path]
        children += [p for p in self.files if posixpath.dirname(p) == path]
        return [posixpath.basename(p) for p in children]

    async def stat(self, path: str) -> FileStat:
        await self._enter("stat", path)
        path = path.rstrip("/") or "/"
        if path in self.dirs:
            return FileStat(is_directory=True)
        if path in self.files:
            return FileStat(is_directory=False)
        raise NotFoundError(f"no such path: {path}", path=path)

    async def write(self, path: str, data: bytes) -> None:
        await self._enter("write", path)
        if posixpath.dirname(path) not in self.dirs:
            raise NotFoundError(f"no parent for: {path}", path=path)
        self.files[path] = data

    async def mkdir(self, path: str, mode: int = 0o755) -> None:
        await self._enter("mkdir", path)
        if path in self.dirs or path in self.files:
            raise AlreadyExistsError(f"exists: {path}", path=path)
        if posixpath.dirname(path) not in self.dirs:
            raise NotFoundError(f"no parent for: {path}", path=path)
        self.dirs.append(path)


@pytest.fixture
def fake_fs() -> FakeFilesystem:
    return FakeFilesystem()


@pytest.fixture
def fake_util(fake_fs: FakeFilesystem) -> FileUtil:
    return FileUtil(fake_fs, lookup_path="/project", retry_delay=RETRY_DELAY)


@pytest.fixture
def disk_util(tmp_path) -> FileUtil:
    return FileUtil(lookup_path=str(tmp_path), retry_delay=RETRY_DELAY)
