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

"""Validation of dependency tables into canonical `Dependency` values.

The same routine validates ``[dependencies]``, ``[devDependencies]`` and the
private table of every feature. Rules, per entry:

1. Exactly one of ``version``, ``path`` and ``git`` is set.
2. A git dependency may pair ``branch`` with ``rev`` or ``path``, never with both.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from ikemanifest.core.model_types import LogComponent
from ikemanifest.exceptions import (
    ConflictingDependencySourceError,
    InvalidGitReferenceError,
    MissingDependencySourceError,
)
from ikemanifest.logging import structured_extra

from .models import Dependency, DependencySource, GitSource, PathSource, VersionSource

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .raw import RawDependency

__all__ = ["SOURCE_FIELDS", "validate_dependency", "validate_dependency_table"]

logger: logging.Logger = logging.getLogger("ike.manifest")

SOURCE_FIELDS: Final[tuple[str, str, str]] = ("version", "path", "git")


def _source_from_raw(name: str, raw: RawDependency, table: str) -> DependencySource:
    if raw.version is not None:
        return VersionSource(version=raw.version)
    if raw.path is not None:
        return PathSource(path=raw.path)
    if raw.git is not None:
        return GitSource(url=raw.git, branch=raw.branch, rev=raw.rev)
    raise MissingDependencySourceError(name, table)


def validate_dependency(name: str, raw: RawDependency, *, table: str) -> Dependency:
    """Validate one dependency entry and build its canonical form.

    Args:
        name: Dependency key within its table.
        raw: Parsed entry, with the string shorthand already expanded.
        table: Label of the owning table, used in error messages.

    Returns:
        Dependency: Canonical dependency with exactly one source.

    Raises:
        MissingDependencySourceError: None of version/path/git is set.
        InvalidGitReferenceError: ``git`` with ``branch``, ``rev`` and ``path``.
        ConflictingDependencySourceError: More than one of version/path/git is set.
    """
    present = [field for field in SOURCE_FIELDS if getattr(raw, field) is not None]
    if raw.git is not None and raw.branch is not None and raw.rev is not None and raw.path is not None:
        raise InvalidGitReferenceError(name, table)
    if len(present) > 1:
        raise ConflictingDependencySourceError(name, table, present)
    dependency = Dependency(
        name=name,
        source=_source_from_raw(name, raw, table),
        features=tuple(raw.features or ()),
    )
    logger.debug(
        "Validated %s dependency from %s",
        dependency.kind,
        table,
        extra=structured_extra(LogComponent.MANIFEST, dependency=name),
    )
    return dependency


def validate_dependency_table(
    entries: Mapping[str, RawDependency] | None,
    *,
    table: str,
) -> dict[str, Dependency]:
    """Validate every entry of a dependency table.

    Args:
        entries: Parsed table, or None when the table is absent.
        table: Label of the table, used in error messages.

    Returns:
        dict[str, Dependency]: Canonical dependencies keyed by name.
    """
    if not entries:
        return {}
    return {name: validate_dependency(name, raw, table=table) for name, raw in entries.items()}
