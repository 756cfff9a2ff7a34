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

"""Enumerations shared across ikemanifest.

- Dependency source kinds and the tables dependencies are declared in
- Log formats and components for structured logging
- CLI actions
"""

from __future__ import annotations

from ikemanifest.compat import StrEnum


class SourceKind(StrEnum):
    """Mutually exclusive origins of a dependency.

    Attributes:
        VERSION: Registry dependency pinned by a version string.
        PATH: Local dependency addressed by a directory path.
        GIT: Dependency fetched from a git repository.
    """

    VERSION = "version"
    PATH = "path"
    GIT = "git"


class DependencyTable(StrEnum):
    """Manifest tables that hold dependency declarations."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"

    def for_feature(self, feature: str) -> str:
        """Return the table label used for a feature's private dependencies.

        Args:
            feature: Feature name owning the table.

        Returns:
            Dotted label such as ``features.web.dependencies``.
        """
        return f"features.{feature}.{self.value}"


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: Human-readable text format.
        JSON: Machine-readable JSON format.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Enumeration of loggable system components.

    Attributes:
        FS: Path canonicalization and file access.
        MANIFEST: Manifest discovery, parsing, and validation.
        FEATURES: Feature resolution and activation.
        CLI: Command-line interface component.
    """

    FS = "fs"
    MANIFEST = "manifest"
    FEATURES = "features"
    CLI = "cli"


class CommandAction(StrEnum):
    """Subcommands exposed by the ``ike-manifest`` CLI."""

    CHECK = "check"
    TASKS = "tasks"
    DEPS = "deps"
    FEATURES = "features"

    @classmethod
    def from_str(cls, raw: str) -> CommandAction:
        """Create a CommandAction enum from a string value.

        Args:
            raw: String representation of the command.

        Returns:
            CommandAction enum value.

        Raises:
            ValueError: If the string does not match any command.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown command '{raw}'"
            raise ValueError(msg) from exc


class ManifestOrigin(StrEnum):
    """Where the manifest location was taken from.

    Attributes:
        CLI: ``--manifest`` or ``--start`` on the command line.
        ENV: ``IKE_MANIFEST`` or ``IKE_ROOT``.
        DISCOVERY: Upward search from the working directory.
    """

    CLI = "cli"
    ENV = "env"
    DISCOVERY = "discovery"


__all__ = ["CommandAction", "DependencyTable", "LogComponent", "LogFormat", "ManifestOrigin", "SourceKind"]
