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

"""Manifest loading: locate, read, parse, and validate ``ike.toml``.

Resolution is all-or-nothing. I/O and syntax failures abort with the
underlying cause attached, semantic failures name the offending dependency or
feature, and a `ResolvedManifest` is only constructed once every table has
validated.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ikemanifest.core.model_types import DependencyTable, LogComponent
from ikemanifest.exceptions import FileAccessError, ManifestReadError
from ikemanifest.fs.access import read_text_file_sync
from ikemanifest.fs.normalize import join_normalized
from ikemanifest.logging import structured_extra

from .dependencies import validate_dependency_table
from .features import resolve_features
from .locator import find_nearest_manifest
from .models import PackageMetadata, Repository, ResolvedManifest
from .raw import RawManifest, RawPackage, parse_manifest_text

logger: logging.Logger = logging.getLogger("ike.manifest")

__all__ = ["load_manifest", "load_nearest_manifest", "read_manifest", "resolve_manifest"]


def read_manifest(path: str | os.PathLike[str]) -> RawManifest:
    """Read and parse a manifest file without applying domain rules.

    Args:
        path: Manifest file to read.

    Returns:
        RawManifest: Permissive manifest structure.

    Raises:
        ManifestReadError: The file cannot be read or is not UTF-8.
        ManifestSyntaxError: The text is not a well-formed manifest.
    """
    manifest_path = Path(path)
    try:
        text = read_text_file_sync(manifest_path)
    except FileAccessError as exc:
        raise ManifestReadError(manifest_path, exc.error) from exc
    return parse_manifest_text(text, source=manifest_path)


def _package_from_raw(raw: RawPackage) -> PackageMetadata:
    repository = None
    if raw.repository is not None:
        repository = Repository(type=raw.repository.type, url=raw.repository.url)
    return PackageMetadata(
        name=raw.name,
        version=raw.version,
        description=raw.description,
        files=tuple(raw.files) if raw.files is not None else None,
        main=raw.main,
        types=raw.types,
        repository=repository,
    )


def resolve_manifest(raw: RawManifest, path: Path) -> ResolvedManifest:
    """Apply domain rules to a parsed manifest.

    Args:
        raw: Parsed manifest.
        path: Absolute location of the manifest file.

    Returns:
        ResolvedManifest: Immutable, fully validated manifest.

    Raises:
        IkeSemanticError: A dependency or feature violates a manifest rule.
    """
    dependencies = validate_dependency_table(raw.dependencies, table=DependencyTable.DEPENDENCIES.value)
    dev_dependencies = validate_dependency_table(
        raw.dev_dependencies,
        table=DependencyTable.DEV_DEPENDENCIES.value,
    )
    features = resolve_features(raw.features)
    return ResolvedManifest(
        package=_package_from_raw(raw.package),
        path=path,
        dependencies=dependencies,
        dev_dependencies=dev_dependencies,
        tasks=dict(raw.tasks or {}),
        features=features,
    )


def load_manifest(path: str | os.PathLike[str]) -> ResolvedManifest:
    """Load and validate the manifest at ``path``.

    Args:
        path: Manifest file; relative paths are taken from the working directory.

    Returns:
        ResolvedManifest: Immutable, fully validated manifest.

    Raises:
        ManifestReadError: The file cannot be read.
        ManifestSyntaxError: The text is not a well-formed manifest.
        IkeSemanticError: A dependency or feature violates a manifest rule.
    """
    manifest_path = join_normalized(Path.cwd(), path)
    manifest = resolve_manifest(read_manifest(manifest_path), manifest_path)
    logger.info(
        "Loaded %s@%s",
        manifest.package.name,
        manifest.package.version,
        extra=structured_extra(
            LogComponent.MANIFEST,
            manifest=manifest_path,
            details={
                "dependencies": len(manifest.dependencies),
                "devDependencies": len(manifest.dev_dependencies),
                "features": len(manifest.features),
            },
        ),
    )
    return manifest


def load_nearest_manifest(start: str | os.PathLike[str] | None = None) -> ResolvedManifest | None:
    """Load the nearest ``ike.toml`` at or above ``start``.

    Args:
        start: Directory to search from; defaults to the working directory.

    Returns:
        The resolved manifest, or None when no manifest exists up to the root.
        Every other failure propagates.
    """
    found = find_nearest_manifest(start if start is not None else Path.cwd())
    if found is None:
        return None
    return load_manifest(found)
