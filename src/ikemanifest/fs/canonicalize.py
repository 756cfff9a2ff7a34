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

"""Filesystem-aware path canonicalization.

Every platform difference that matters for canonical paths lives behind the
`Canonicalizer` protocol:

- whether opening a lexically normalized path already resolves symlinks,
- which roots are virtual filesystems whose entries must always be resolved,
- how raw device paths are recognised,
- which prefix the OS adds to canonical strings.

Call sites obtain the platform implementation once through
`get_canonicalizer()` and never branch on ``sys.platform`` themselves.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import cache
from pathlib import Path, PurePath
from typing import Final, Protocol, runtime_checkable

from ikemanifest.compat import override
from ikemanifest.exceptions import PathAccessError, PathNotFoundError

__all__ = [
    "EXTENDED_LENGTH_PREFIX",
    "Canonicalizer",
    "LinuxCanonicalizer",
    "PosixCanonicalizer",
    "WindowsCanonicalizer",
    "canonicalize_path",
    "get_canonicalizer",
    "strip_extended_prefix",
]

logger: logging.Logger = logging.getLogger("ike.fs")

EXTENDED_LENGTH_PREFIX: Final[str] = "\\\\?\\"
DEVICE_PATH_PREFIX: Final[str] = "\\\\.\\"
LINUX_VIRTUAL_ROOTS: Final[tuple[str, ...]] = ("/proc",)


def strip_extended_prefix(value: str) -> str:
    r"""Remove a leading ``\\?\`` extended-length prefix from a path string.

    Args:
        value: Canonical path string as returned by the OS.

    Returns:
        The same path without the prefix, so string comparisons stay stable.
    """
    if value.startswith(EXTENDED_LENGTH_PREFIX):
        return value[len(EXTENDED_LENGTH_PREFIX) :]
    return value


@runtime_checkable
class Canonicalizer(Protocol):
    """Platform capability for resolving paths to one canonical form."""

    def canonicalize(self, path: Path) -> Path:
        """Resolve an absolute path, following every symlink.

        Raises:
            PathNotFoundError: The path does not exist.
            PathAccessError: Any other OS failure.
        """
        ...

    def needs_canonicalization(self, path: PurePath) -> bool:
        """Return True when opening ``path`` requires an explicit canonical pass."""
        ...

    def is_device_path(self, raw: str) -> bool:
        """Return True for raw device paths that bypass canonicalization."""
        ...


class PosixCanonicalizer:
    """Canonicalizer for POSIX systems without Linux's open-time resolution."""

    def canonicalize(self, path: Path) -> Path:
        try:
            resolved = os.path.realpath(path, strict=True)
        except FileNotFoundError as exc:
            raise PathNotFoundError(path) from exc
        except OSError as exc:
            raise PathAccessError(path, exc) from exc
        return Path(self._finalise(resolved))

    def needs_canonicalization(self, path: PurePath) -> bool:
        return True

    def is_device_path(self, raw: str) -> bool:
        return False

    def _finalise(self, resolved: str) -> str:
        return resolved


class LinuxCanonicalizer(PosixCanonicalizer):
    """Linux resolves symlinks at open time except under synthesized roots."""

    def __init__(self, virtual_roots: tuple[str, ...] = LINUX_VIRTUAL_ROOTS) -> None:
        self.virtual_roots = tuple(PurePath(root) for root in virtual_roots)

    @override
    def needs_canonicalization(self, path: PurePath) -> bool:
        return any(path == root or root in path.parents for root in self.virtual_roots)


class WindowsCanonicalizer(PosixCanonicalizer):
    r"""Windows canonicalizer stripping ``\\?\`` and honouring ``\\.\`` devices."""

    @override
    def is_device_path(self, raw: str) -> bool:
        return raw.startswith(DEVICE_PATH_PREFIX) and ":" not in raw

    @override
    def _finalise(self, resolved: str) -> str:
        return strip_extended_prefix(resolved)


@cache
def get_canonicalizer() -> Canonicalizer:
    """Return the canonicalizer for the running platform.

    Returns:
        Canonicalizer: Shared implementation selected from ``sys.platform``.
    """
    if sys.platform == "win32":
        return WindowsCanonicalizer()
    if sys.platform.startswith("linux"):
        return LinuxCanonicalizer()
    return PosixCanonicalizer()


def canonicalize_path(
    path: str | os.PathLike[str],
    root: str | os.PathLike[str],
    *,
    canonicalizer: Canonicalizer | None = None,
) -> Path:
    """Resolve ``path`` to its canonical absolute form.

    Relative inputs are joined onto ``root`` before resolution.

    Args:
        path: Path to canonicalize.
        root: Base directory for relative paths.
        canonicalizer: Optional override of the platform implementation.

    Returns:
        Path: Absolute, symlink-free path without OS-specific prefixes.

    Raises:
        PathNotFoundError: The path does not exist.
        PathAccessError: The OS refused to resolve the path.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path(root) / candidate
    resolved = (canonicalizer or get_canonicalizer()).canonicalize(candidate)
    logger.debug("Canonicalized %s -> %s", candidate, resolved)
    return resolved
