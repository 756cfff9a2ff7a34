# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Sandboxed file access shared by manifest loading and runtime I/O.

All file opens go through `resolve_open_path`, which classifies the request,
normalizes it against the working directory, and canonicalizes it when the
platform requires an explicit pass. Reads come in two flavours:

- synchronous reads that block the calling thread (startup-critical reads
  such as the manifest itself),
- asynchronous reads that run on a shared worker pool while the awaiting
  coroutine is suspended, so slow disks never stall the event loop.

There is no cancellation: a dispatched read always runs to completion and a
caller that loses interest simply drops the result.
"""

from __future__ import annotations

import asyncio
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from functools import cache
from pathlib import Path
from typing import IO, TYPE_CHECKING, Final

from ikemanifest.core.model_types import LogComponent
from ikemanifest.exceptions import FileAccessError, IkeIOError
from ikemanifest.logging import structured_extra

from .canonicalize import Canonicalizer, get_canonicalizer
from .normalize import normalize_path

if TYPE_CHECKING:
    from types import TracebackType

    from ikemanifest.compat import Self

__all__ = [
    "File",
    "FileSystem",
    "open_file",
    "read_file",
    "read_file_sync",
    "read_text_file",
    "read_text_file_sync",
    "resolve_open_path",
]

logger: logging.Logger = logging.getLogger("ike.fs")

IO_WORKER_PREFIX: Final[str] = "ike-fs"


@cache
def _io_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(thread_name_prefix=IO_WORKER_PREFIX)


def resolve_open_path(
    path: str | os.PathLike[str],
    *,
    canonicalizer: Canonicalizer | None = None,
    cwd: Path | None = None,
) -> Path:
    """Resolve the path a sandboxed open will actually use.

    Args:
        path: Absolute or working-directory-relative path.
        canonicalizer: Optional override of the platform canonicalizer.
        cwd: Working directory for relative inputs; defaults to ``Path.cwd()``.

    Returns:
        Path: Device paths unchanged, otherwise a normalized (and, where the
        platform requires it, canonical) absolute path. A missing leaf is
        resolved through its parent directory and re-appended.

    Raises:
        IkeIOError: Neither the path nor its parent directory can be resolved.
    """
    impl = canonicalizer or get_canonicalizer()
    raw = os.fspath(path)
    if impl.is_device_path(raw):
        return Path(raw)

    candidate = Path(raw)
    if not candidate.is_absolute():
        candidate = (cwd or Path.cwd()) / candidate
    candidate = normalize_path(candidate)

    if not impl.needs_canonicalization(candidate):
        return candidate
    try:
        return impl.canonicalize(candidate)
    except IkeIOError as exc:
        original = exc
    parent = _canonical_parent(impl, candidate)
    if parent is None:
        raise original
    logger.debug(
        "Resolved %s through its parent directory",
        candidate,
        extra=structured_extra(LogComponent.FS, path=candidate),
    )
    return parent / candidate.name


def _canonical_parent(impl: Canonicalizer, candidate: Path) -> Path | None:
    if candidate.parent == candidate or not candidate.name:
        return None
    try:
        return impl.canonicalize(candidate.parent)
    except IkeIOError:
        return None


def open_file(
    path: str | os.PathLike[str],
    *,
    canonicalizer: Canonicalizer | None = None,
) -> IO[bytes]:
    """Open ``path`` for binary reading through the sandbox.

    Args:
        path: Absolute or working-directory-relative path.
        canonicalizer: Optional override of the platform canonicalizer.

    Returns:
        IO[bytes]: An open binary file handle owned by the caller.

    Raises:
        FileAccessError: The path cannot be resolved or opened.
    """
    try:
        resolved = resolve_open_path(path, canonicalizer=canonicalizer)
        return resolved.open("rb")
    except OSError as exc:
        raise FileAccessError(path, exc) from exc


class File:
    """An opened file whose contents can be read once, sync or async."""

    def __init__(self, handle: IO[bytes], path: str | os.PathLike[str]) -> None:
        self._handle = handle
        self.path = path

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        self._handle.close()

    def _read_all(self) -> bytes:
        try:
            with self._handle:
                return self._handle.read()
        # A closed handle raises ValueError rather than OSError.
        except (OSError, ValueError) as exc:
            raise FileAccessError(self.path, exc) from exc

    def read_sync(self) -> bytes:
        """Read the whole file on the calling thread and close it.

        Returns:
            bytes: Entire file content.
        """
        return self._read_all()

    async def read_async(self) -> bytes:
        """Read the whole file on the I/O worker pool and close it.

        The awaiting coroutine is suspended until the worker reports completion.

        Returns:
            bytes: Entire file content, identical to `read_sync`.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(_io_executor(), self._read_all)


class FileSystem:
    """Entry points for sandboxed opens and directory management."""

    @staticmethod
    def open_sync(path: str | os.PathLike[str], *, canonicalizer: Canonicalizer | None = None) -> File:
        return File(open_file(path, canonicalizer=canonicalizer), path)

    @staticmethod
    async def open_async(path: str | os.PathLike[str], *, canonicalizer: Canonicalizer | None = None) -> File:
        loop = asyncio.get_running_loop()
        handle = await loop.run_in_executor(
            _io_executor(),
            lambda: open_file(path, canonicalizer=canonicalizer),
        )
        return File(handle, path)

    @staticmethod
    def create_dir_sync(path: str | os.PathLike[str]) -> None:
        """Create a single directory; an existing directory is an error."""
        try:
            Path(path).mkdir()
        except OSError as exc:
            raise FileAccessError(path, exc) from exc

    @staticmethod
    def create_dir_all_sync(path: str | os.PathLike[str]) -> None:
        """Create a directory and any missing ancestors.

        A directory that already exists, including one created concurrently by
        another caller, counts as success.
        """
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FileAccessError(path, exc) from exc

    @staticmethod
    def remove_dir_sync(path: str | os.PathLike[str]) -> None:
        """Remove an empty directory."""
        try:
            Path(path).rmdir()
        except OSError as exc:
            raise FileAccessError(path, exc) from exc


def read_file_sync(path: str | os.PathLike[str]) -> bytes:
    """Read a whole file synchronously through the sandbox."""
    return FileSystem.open_sync(path).read_sync()


async def read_file(path: str | os.PathLike[str]) -> bytes:
    """Read a whole file on the I/O worker pool through the sandbox."""
    file = await FileSystem.open_async(path)
    return await file.read_async()


def read_text_file_sync(path: str | os.PathLike[str], encoding: str = "utf-8") -> str:
    """Read and decode a whole file synchronously."""
    data = read_file_sync(path)
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise FileAccessError(path, exc) from exc


async def read_text_file(path: str | os.PathLike[str], encoding: str = "utf-8") -> str:
    """Read and decode a whole file on the I/O worker pool."""
    data = await read_file(path)
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise FileAccessError(path, exc) from exc
