"""Asynchronous local filesystem collaborator."""

import asyncio
import os
import stat as stat_module
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from lumbar_fs.errors import translate_os_error


@dataclass(frozen=True)
class FileStat:
    """The subset of stat information the access layer needs."""

    is_directory: bool


@runtime_checkable
class Filesystem(Protocol):
    """The async filesystem surface the access layer depends on."""

    async def read(self, path: str) -> bytes: ...

    def read_sync(self, path: str) -> bytes: ...

    async def list(self, path: str) -> list[str]: ...

    async def stat(self, path: str) -> FileStat: ...

    async def write(self, path: str, data: bytes) -> None: ...

    async def mkdir(self, path: str, mode: int = 0o755) -> None: ...


class LocalFilesystem:
    """Runs blocking ``os`` calls on a worker thread and normalizes their errors."""

    async def read(self, path: str) -> bytes:
        return await asyncio.to_thread(self.read_sync, path)

    def read_sync(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise translate_os_error(e, path) from e

    async def list(self, path: str) -> list[str]:
        try:
            return await asyncio.to_thread(os.listdir, path)
        except OSError as e:
            raise translate_os_error(e, path) from e

    async def stat(self, path: str) -> FileStat:
        try:
            st = await asyncio.to_thread(os.stat, path)
        except OSError as e:
            raise translate_os_error(e, path) from e
        return FileStat(is_directory=stat_module.S_ISDIR(st.st_mode))

    async def write(self, path: str, data: bytes) -> None:
        await asyncio.to_thread(self._write_sync, path, data)

    def _write_sync(self, path: str, data: bytes) -> None:
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise translate_os_error(e, path) from e

    async def mkdir(self, path: str, mode: int = 0o755) -> None:
        try:
            await asyncio.to_thread(os.mkdir, path, mode)
        except OSError as e:
            raise translate_os_error(e, path) from e
