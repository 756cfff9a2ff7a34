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

"""Nearest-ancestor discovery of project manifests."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Final

from ikemanifest.core.model_types import LogComponent
from ikemanifest.fs.normalize import join_normalized
from ikemanifest.logging import structured_extra

logger: logging.Logger = logging.getLogger("ike.manifest")

__all__ = ["MANIFEST_FILENAME", "find_nearest_file", "find_nearest_manifest", "find_nearest_manifest_dir"]

MANIFEST_FILENAME: Final[str] = "ike.toml"


def find_nearest_file(start: str | os.PathLike[str], filename: str) -> Path | None:
    """Return the nearest ``filename`` in ``start`` or any of its ancestors.

    Only existence checks are performed; nothing is read or parsed. A file
    passed as ``start`` searches from its parent directory.

    Args:
        start: Directory (or file) to begin the search from.
        filename: Exact, case-sensitive file name to look for.

    Returns:
        Path to the nearest matching file, or None when no ancestor up to the
        filesystem root contains one.
    """
    base = join_normalized(Path.cwd(), start)
    if base.is_file():
        base = base.parent

    for candidate in (base, *base.parents):
        target = candidate / filename
        if target.is_file():
            logger.debug(
                "Found %s in %s",
                filename,
                candidate,
                extra=structured_extra(LogComponent.MANIFEST, path=target),
            )
            return target

    logger.debug(
        "No %s found from %s up to the filesystem root",
        filename,
        base,
        extra=structured_extra(LogComponent.MANIFEST, path=base),
    )
    return None


def find_nearest_manifest(start: str | os.PathLike[str]) -> Path | None:
    """Return the nearest ``ike.toml`` at or above ``start``."""
    return find_nearest_file(start, MANIFEST_FILENAME)


def find_nearest_manifest_dir(start: str | os.PathLike[str]) -> Path | None:
    """Return the directory holding the nearest ``ike.toml``, or None."""
    found = find_nearest_manifest(start)
    return found.parent if found is not None else None
