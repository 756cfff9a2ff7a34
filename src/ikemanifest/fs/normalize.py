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

"""Lexical path normalization that never touches the filesystem.

The helpers here collapse ``.`` and ``..`` segments purely on the textual
path, so they work for paths whose final component does not exist yet. A
leading drive or UNC anchor is kept as-is, and ``..`` never climbs above the
anchor.
"""

from __future__ import annotations

import os
import re
from pathlib import Path, PurePath
from typing import Final, TypeVar, overload

__all__ = ["join_normalized", "looks_like_file", "normalize_path"]

_PathT = TypeVar("_PathT", bound=PurePath)

_FILE_SUFFIX_RE: Final[re.Pattern[str]] = re.compile(r"\.[a-zA-Z0-9]+$")
_CURRENT_DIR: Final[str] = "."
_PARENT_DIR: Final[str] = ".."


@overload
def normalize_path(path: _PathT) -> _PathT: ...


@overload
def normalize_path(path: str | os.PathLike[str]) -> Path: ...


def normalize_path(path: PurePath | str | os.PathLike[str]) -> PurePath:
    """Collapse ``.`` and ``..`` segments without consulting the filesystem.

    Args:
        path: Path to normalize. Pure paths keep their flavour, so a
            ``PureWindowsPath`` is normalized with Windows rules on any host.

    Returns:
        Normalized path of the same flavour as the input (``Path`` for strings).
    """
    pure = path if isinstance(path, PurePath) else Path(path)
    flavour = type(pure)
    anchor = pure.anchor
    parts = pure.parts[1:] if anchor else pure.parts

    segments: list[str] = []
    for part in parts:
        if part == _CURRENT_DIR:
            continue
        if part == _PARENT_DIR:
            # popping past the anchor or an empty relative path is a no-op
            if segments:
                segments.pop()
            continue
        segments.append(part)
    return flavour(anchor, *segments)


def join_normalized(root: PurePath | str, path: PurePath | str) -> Path:
    """Join ``path`` onto ``root`` when relative, then normalize lexically.

    Args:
        root: Base directory used for relative inputs.
        path: Absolute or relative path.

    Returns:
        Normalized absolute-or-rooted path.
    """
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = Path(root) / candidate
    return normalize_path(candidate)


def looks_like_file(path: str | os.PathLike[str]) -> bool:
    """Return True when the final component carries an alphanumeric suffix.

    Args:
        path: Module specifier or filesystem path.

    Returns:
        True for names such as ``index.ts``; False for ``src`` or ``pkg.``.
    """
    return _FILE_SUFFIX_RE.search(os.fspath(path)) is not None
