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

"""Manifest discovery, parsing, and validation for ``ike.toml``."""

from __future__ import annotations

from .dependencies import validate_dependency, validate_dependency_table
from .features import compute_feature_closure, resolve_feature, resolve_features
from .loader import load_manifest, load_nearest_manifest, read_manifest, resolve_manifest
from .locator import MANIFEST_FILENAME, find_nearest_file, find_nearest_manifest, find_nearest_manifest_dir
from .models import (
    Dependency,
    DependencySource,
    Feature,
    GitSource,
    PackageMetadata,
    PathSource,
    Repository,
    ResolvedManifest,
    VersionSource,
)
from .raw import RawDependency, RawFeature, RawManifest, RawPackage, RawRepository, parse_manifest_text

__all__ = [
    "MANIFEST_FILENAME",
    "Dependency",
    "DependencySource",
    "Feature",
    "GitSource",
    "PackageMetadata",
    "PathSource",
    "RawDependency",
    "RawFeature",
    "RawManifest",
    "RawPackage",
    "RawRepository",
    "Repository",
    "ResolvedManifest",
    "VersionSource",
    "compute_feature_closure",
    "find_nearest_file",
    "find_nearest_manifest",
    "find_nearest_manifest_dir",
    "load_manifest",
    "load_nearest_manifest",
    "parse_manifest_text",
    "read_manifest",
    "resolve_feature",
    "resolve_features",
    "resolve_manifest",
    "validate_dependency",
    "validate_dependency_table",
]
