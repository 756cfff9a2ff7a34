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

"""ikemanifest - ``ike.toml`` package manifests.

Locates the nearest manifest, parses and validates it into an immutable
`ResolvedManifest`, resolves feature activation, and provides the path
canonicalization and file access helpers the runtime uses for I/O.
"""

from __future__ import annotations

from .exceptions import (
    ConflictingDependencySourceError,
    FeatureCycleError,
    FileAccessError,
    IkeError,
    IkeIOError,
    IkeSemanticError,
    IkeSyntaxError,
    InvalidGitReferenceError,
    ManifestReadError,
    ManifestSyntaxError,
    MissingDependencySourceError,
    PathAccessError,
    PathNotFoundError,
    UndefinedFeatureError,
)
from .fs import FileSystem, normalize_path, open_file, read_file, read_file_sync, read_structured
from .manifest import (
    MANIFEST_FILENAME,
    Dependency,
    Feature,
    GitSource,
    PathSource,
    ResolvedManifest,
    VersionSource,
    compute_feature_closure,
    find_nearest_manifest,
    find_nearest_manifest_dir,
    load_manifest,
    load_nearest_manifest,
)
from .settings import EnvOverrides, ManifestLocation, resolve_manifest_location

__all__ = [
    "MANIFEST_FILENAME",
    "ConflictingDependencySourceError",
    "Dependency",
    "EnvOverrides",
    "Feature",
    "FeatureCycleError",
    "FileAccessError",
    "FileSystem",
    "GitSource",
    "IkeError",
    "IkeIOError",
    "IkeSemanticError",
    "IkeSyntaxError",
    "InvalidGitReferenceError",
    "ManifestLocation",
    "ManifestReadError",
    "ManifestSyntaxError",
    "MissingDependencySourceError",
    "PathAccessError",
    "PathNotFoundError",
    "PathSource",
    "ResolvedManifest",
    "UndefinedFeatureError",
    "VersionSource",
    "__version__",
    "compute_feature_closure",
    "find_nearest_manifest",
    "find_nearest_manifest_dir",
    "load_manifest",
    "load_nearest_manifest",
    "normalize_path",
    "open_file",
    "read_file",
    "read_file_sync",
    "read_structured",
    "resolve_manifest_location",
]

__version__ = "0.1.0"
