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

"""Canonical, immutable manifest models.

Once a manifest has been validated it is represented only by the frozen
dataclasses in this module. A dependency's origin is exactly one of
`VersionSource`, `PathSource`, or `GitSource`; nothing downstream looks at
the permissive parse form again. Mappings are exposed as read-only proxies and
sequences as tuples, so a `ResolvedManifest` cannot change after construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import ClassVar, TypeAlias, TypeVar

from ikemanifest.core.model_types import DependencyTable, SourceKind
from ikemanifest.exceptions import UndefinedFeatureError
from ikemanifest.fs.normalize import join_normalized

from .locator import MANIFEST_FILENAME, find_nearest_file

__all__ = [
    "Dependency",
    "DependencySource",
    "Feature",
    "GitSource",
    "PackageMetadata",
    "PathSource",
    "Repository",
    "ResolvedManifest",
    "VersionSource",
]

_V = TypeVar("_V")


def _frozen_mapping(value: Mapping[str, _V]) -> Mapping[str, _V]:
    if isinstance(value, MappingProxyType):
        return value
    return MappingProxyType(dict(value))


def _empty_mapping() -> Mapping[str, Dependency]:
    return MappingProxyType({})


@dataclass(slots=True, frozen=True)
class VersionSource:
    """Registry dependency pinned by a version string."""

    kind: ClassVar[SourceKind] = SourceKind.VERSION

    version: str


@dataclass(slots=True, frozen=True)
class PathSource:
    """Local dependency; ``path`` is relative to the manifest directory."""

    kind: ClassVar[SourceKind] = SourceKind.PATH

    path: str


@dataclass(slots=True, frozen=True)
class GitSource:
    """Dependency fetched from a git repository at an optional branch or revision."""

    kind: ClassVar[SourceKind] = SourceKind.GIT

    url: str
    branch: str | None = None
    rev: str | None = None


DependencySource: TypeAlias = VersionSource | PathSource | GitSource


@dataclass(slots=True, frozen=True)
class Dependency:
    """A validated dependency declaration.

    Attributes:
        name: Key of the dependency within its table.
        source: The single origin of the dependency.
        features: Extra capabilities to enable on the dependency.
    """

    name: str
    source: DependencySource
    features: tuple[str, ...] = ()

    @property
    def kind(self) -> SourceKind:
        return self.source.kind


@dataclass(slots=True, frozen=True)
class Feature:
    """A named, optionally activated bundle of dependencies and source files.

    Attributes:
        name: Key of the feature within the manifest.
        dependencies: Validated private dependency table.
        files: Extra source files, relative to the manifest directory, in
            declaration order.
        depends_on: Other feature names this feature requires, unresolved.
    """

    name: str
    dependencies: Mapping[str, Dependency] = field(default_factory=_empty_mapping)
    files: tuple[str, ...] = ()
    depends_on: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", _frozen_mapping(self.dependencies))


@dataclass(slots=True, frozen=True)
class Repository:
    """Source repository of the package."""

    type: str
    url: str


@dataclass(slots=True, frozen=True)
class PackageMetadata:
    """Package table of a manifest."""

    name: str
    version: str
    description: str | None = None
    files: tuple[str, ...] | None = None
    main: str | None = None
    types: str | None = None
    repository: Repository | None = None


@dataclass(slots=True, frozen=True)
# ignore JUSTIFIED: the resolved manifest mirrors every manifest table
class ResolvedManifest:  # pylint: disable=too-many-instance-attributes
    """Fully validated manifest together with its on-disk location.

    Attributes:
        package: Package metadata.
        dependencies: Validated ``[dependencies]`` table.
        dev_dependencies: Validated ``[devDependencies]`` table.
        tasks: Task name to shell command.
        features: Validated feature map.
        path: Absolute path of the manifest file the data came from.
    """

    package: PackageMetadata
    path: Path
    dependencies: Mapping[str, Dependency] = field(default_factory=_empty_mapping)
    dev_dependencies: Mapping[str, Dependency] = field(default_factory=_empty_mapping)
    tasks: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    features: Mapping[str, Feature] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", _frozen_mapping(self.dependencies))
        object.__setattr__(self, "dev_dependencies", _frozen_mapping(self.dev_dependencies))
        object.__setattr__(self, "tasks", _frozen_mapping(self.tasks))
        object.__setattr__(self, "features", _frozen_mapping(self.features))

    @property
    def directory(self) -> Path:
        """Directory containing the manifest file."""
        return self.path.parent

    def table(self, table: DependencyTable) -> Mapping[str, Dependency]:
        """Return the dependency mapping for ``table``."""
        if table is DependencyTable.DEV_DEPENDENCIES:
            return self.dev_dependencies
        return self.dependencies

    def resolve_relative(self, value: str) -> Path:
        """Resolve a manifest-relative path lexically against `directory`.

        Args:
            value: Path as written in the manifest.

        Returns:
            Path: Normalized absolute path; absolute inputs are only normalized.
        """
        return join_normalized(self.directory, value)

    def dependency_paths(self) -> dict[str, Path]:
        """Return resolved directories of every path dependency in both tables."""
        resolved: dict[str, Path] = {}
        for table in (self.dependencies, self.dev_dependencies):
            for name, dependency in table.items():
                if isinstance(dependency.source, PathSource):
                    resolved[name] = self.resolve_relative(dependency.source.path)
        return resolved

    def feature_files(self, name: str) -> tuple[Path, ...]:
        """Return the resolved extra files of one feature.

        Raises:
            UndefinedFeatureError: ``name`` is not declared.
        """
        feature = self.features.get(name)
        if feature is None:
            raise UndefinedFeatureError(name)
        return tuple(self.resolve_relative(item) for item in feature.files)

    def activate_features(self, selected: Iterable[str]) -> tuple[Feature, ...]:
        """Return the features to activate for an initial selection.

        The result contains the transitive ``depends_on`` closure, each feature
        once, with dependencies ordered before the features that need them.

        Raises:
            UndefinedFeatureError: A selected or referenced feature is unknown.
            FeatureCycleError: The ``depends_on`` graph reachable from the
                selection contains a cycle.
        """
        from .features import compute_feature_closure  # noqa: PLC0415  # JUSTIFIED: avoid import cycle

        return tuple(self.features[name] for name in compute_feature_closure(self.features, selected))

    def find_parent_manifest(self) -> Path | None:
        """Return the nearest ``ike.toml`` strictly above this manifest's directory."""
        parent = self.directory.parent
        if parent == self.directory:
            return None
        return find_nearest_file(parent, MANIFEST_FILENAME)
