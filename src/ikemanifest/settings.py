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

"""Environment-driven settings for locating the manifest.

Precedence for the manifest location is CLI > environment > discovery:

1. ``--manifest`` names the file, ``--start`` the directory to search from.
2. ``IKE_MANIFEST`` names the file, ``IKE_ROOT`` the directory to search from.
3. Otherwise the search starts in the working directory.

Within one source an explicit file wins over a search directory.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from ikemanifest.core.model_types import LogComponent, ManifestOrigin
from ikemanifest.fs.normalize import join_normalized
from ikemanifest.logging import structured_extra
from ikemanifest.manifest.locator import find_nearest_manifest

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = [
    "MANIFEST_ENV",
    "ROOT_ENV",
    "EnvOverrides",
    "ManifestLocation",
    "resolve_manifest_location",
]

logger: logging.Logger = logging.getLogger("ike.manifest")

MANIFEST_ENV: Final[str] = "IKE_MANIFEST"
ROOT_ENV: Final[str] = "IKE_ROOT"


def _path_from_env(env: Mapping[str, str], key: str) -> Path | None:
    value = env.get(key, "").strip()
    return Path(value) if value else None


@dataclass(slots=True, frozen=True)
class EnvOverrides:
    """Environment-sourced overrides for the manifest location."""

    manifest_path: Path | None = None
    root: Path | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> EnvOverrides:
        """Create overrides from the current environment variables.

        Args:
            environ: Optional mapping to read environment variables from. Defaults
                to ``os.environ`` when not provided.

        Returns:
            EnvOverrides: Parsed environment overrides.
        """
        env = os.environ if environ is None else environ
        return cls(
            manifest_path=_path_from_env(env, MANIFEST_ENV),
            root=_path_from_env(env, ROOT_ENV),
        )

    @property
    def active_overrides(self) -> dict[str, Path]:
        """Return a mapping of environment keys to active overrides."""
        mapping: dict[str, Path] = {}
        if self.manifest_path is not None:
            mapping[MANIFEST_ENV] = self.manifest_path
        if self.root is not None:
            mapping[ROOT_ENV] = self.root
        return mapping


@dataclass(slots=True, frozen=True)
class ManifestLocation:
    """Outcome of manifest location resolution.

    Attributes:
        manifest_path: Selected manifest file, or None when a search found nothing.
        origin: Source that decided the location.
        start_dir: Directory the upward search began in; None for explicit files.
    """

    manifest_path: Path | None
    origin: ManifestOrigin
    start_dir: Path | None = None

    @property
    def found(self) -> bool:
        return self.manifest_path is not None


def _search(start: Path, origin: ManifestOrigin) -> ManifestLocation:
    return ManifestLocation(manifest_path=find_nearest_manifest(start), origin=origin, start_dir=start)


def resolve_manifest_location(
    cli_manifest: str | os.PathLike[str] | None = None,
    cli_start: str | os.PathLike[str] | None = None,
    env: EnvOverrides | None = None,
    cwd: Path | None = None,
) -> ManifestLocation:
    """Select the manifest to load using CLI > environment > discovery precedence.

    An explicit manifest path is returned as given, normalized against ``cwd``,
    without checking that it exists; loading it reports any read failure.

    Args:
        cli_manifest: ``--manifest`` value.
        cli_start: ``--start`` value.
        env: Environment overrides, defaulting to ``os.environ``.
        cwd: Base for relative paths, defaulting to the working directory.

    Returns:
        ManifestLocation: Selected path and where it came from.
    """
    overrides = env if env is not None else EnvOverrides.from_environ()
    base = cwd if cwd is not None else Path.cwd()

    if cli_manifest is not None:
        location = ManifestLocation(manifest_path=join_normalized(base, cli_manifest), origin=ManifestOrigin.CLI)
    elif cli_start is not None:
        location = _search(join_normalized(base, cli_start), ManifestOrigin.CLI)
    elif overrides.manifest_path is not None:
        location = ManifestLocation(
            manifest_path=join_normalized(base, overrides.manifest_path),
            origin=ManifestOrigin.ENV,
        )
    elif overrides.root is not None:
        location = _search(join_normalized(base, overrides.root), ManifestOrigin.ENV)
    else:
        location = _search(base, ManifestOrigin.DISCOVERY)

    logger.debug(
        "Manifest location from %s: %s",
        location.origin,
        location.manifest_path,
        extra=structured_extra(
            LogComponent.MANIFEST,
            manifest=location.manifest_path,
            details={"env": {key: str(value) for key, value in overrides.active_overrides.items()}},
        ),
    )
    return location
