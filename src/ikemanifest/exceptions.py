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

"""Common exception hierarchy for ikemanifest.

Every failure raised by the library belongs to exactly one of three kinds:

- `IkeIOError`: a file is missing, unreadable, or cannot be opened.
- `IkeSyntaxError`: manifest text does not deserialize into the expected shape.
- `IkeSemanticError`: well-formed data that violates a domain rule.

Concrete errors keep the offending path, dependency, or feature name as
attributes so callers can build diagnostics without parsing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

__all__ = [
    "ConflictingDependencySourceError",
    "FeatureCycleError",
    "FileAccessError",
    "IkeError",
    "IkeIOError",
    "IkeSemanticError",
    "IkeSyntaxError",
    "InvalidGitReferenceError",
    "ManifestReadError",
    "ManifestSyntaxError",
    "MissingDependencySourceError",
    "PathAccessError",
    "PathNotFoundError",
    "StructuredDecodeError",
    "StructuredFileNotFoundError",
    "UndefinedFeatureError",
]


class IkeError(Exception):
    """Base error for all ikemanifest exceptions."""


class IkeIOError(IkeError, OSError):
    """Raised when the filesystem refuses an operation."""


class IkeSyntaxError(IkeError, ValueError):
    """Raised when structured text cannot be deserialized."""


class IkeSemanticError(IkeError, ValueError):
    """Raised when well-formed data violates a manifest rule."""


class PathNotFoundError(IkeIOError, FileNotFoundError):
    """Raised when canonicalization fails because the path does not exist."""

    def __init__(self, path: Path) -> None:
        """Initialize the exception with the missing path.

        Args:
            path: Absolute path that could not be resolved.
        """
        self.path = path
        super().__init__(f"File not found: {path}")


class PathAccessError(IkeIOError):
    """Raised when canonicalization fails for any reason other than absence."""

    def __init__(self, path: Path, error: OSError) -> None:
        """Initialize the exception with the path and the OS failure.

        Args:
            path: Absolute path that could not be resolved.
            error: Underlying operating-system error.
        """
        self.path = path
        self.error = error
        super().__init__(f"Failed to read file {path}: {error}")


class FileAccessError(IkeIOError):
    """Raised when the sandboxed accessor cannot open or read a file."""

    def __init__(self, path: Path | str, error: Exception) -> None:
        """Initialize the exception with the requested path and underlying error.

        Args:
            path: Path as requested by the caller.
            error: Underlying exception raised while opening or reading.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to access {path}: {error}")


class ManifestReadError(IkeIOError):
    """Raised when a located manifest cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with the manifest path and read failure.

        Args:
            path: Manifest file that could not be read.
            error: Underlying exception raised while reading.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class ManifestSyntaxError(IkeSyntaxError):
    """Raised when manifest text is not valid TOML or has the wrong shape."""

    def __init__(
        self,
        path: Path | None,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
        locations: Sequence[str] = (),
    ) -> None:
        """Initialize the exception with positional context.

        Args:
            path: Manifest file the text came from, when known.
            message: Parser message describing the failure.
            line: 1-based line of the failure, when the parser reports one.
            column: 1-based column of the failure, when the parser reports one.
            locations: Dotted key paths of schema mismatches.
        """
        self.path = path
        self.message = message
        self.line = line
        self.column = column
        self.locations = tuple(locations)
        source = str(path) if path is not None else "<manifest>"
        if line is not None:
            source = f"{source}:{line}" if column is None else f"{source}:{line}:{column}"
        super().__init__(f"Invalid manifest {source}: {message}")


class MissingDependencySourceError(IkeSemanticError):
    """Raised when a dependency sets none of version, path, or git."""

    def __init__(self, dependency: str, table: str) -> None:
        """Initialize the exception with the dependency and its table.

        Args:
            dependency: Name of the offending dependency.
            table: Name of the table the dependency was declared in.
        """
        self.dependency = dependency
        self.table = table
        super().__init__(
            f"Dependency '{dependency}' in [{table}] must specify one of 'version', 'path', or 'git'",
        )


class ConflictingDependencySourceError(IkeSemanticError):
    """Raised when a dependency sets more than one of version, path, or git."""

    def __init__(self, dependency: str, table: str, fields: Sequence[str]) -> None:
        """Initialize the exception with the dependency and the clashing fields.

        Args:
            dependency: Name of the offending dependency.
            table: Name of the table the dependency was declared in.
            fields: Source fields that were set together.
        """
        self.dependency = dependency
        self.table = table
        self.fields = tuple(fields)
        joined = ", ".join(f"'{name}'" for name in self.fields)
        super().__init__(
            f"Dependency '{dependency}' in [{table}] has conflicting fields: {joined} cannot be used together",
        )


class InvalidGitReferenceError(IkeSemanticError):
    """Raised when a git dependency combines branch with both rev and path."""

    def __init__(self, dependency: str, table: str) -> None:
        """Initialize the exception with the dependency and its table.

        Args:
            dependency: Name of the offending dependency.
            table: Name of the table the dependency was declared in.
        """
        self.dependency = dependency
        self.table = table
        super().__init__(
            f"Dependency '{dependency}' in [{table}] has conflicting fields: "
            "'git', 'branch', 'rev', and 'path' cannot be used together",
        )


class UndefinedFeatureError(IkeSemanticError):
    """Raised when a feature selection or depends_on names an unknown feature."""

    def __init__(self, feature: str, referenced_by: str | None = None) -> None:
        """Initialize the exception with the unknown feature name.

        Args:
            feature: Name that does not match any declared feature.
            referenced_by: Feature whose depends_on list named it, or None when
                the name came from the initial selection.
        """
        self.feature = feature
        self.referenced_by = referenced_by
        if referenced_by is None:
            message = f"Feature '{feature}' is not defined"
        else:
            message = f"Feature '{feature}' (required by '{referenced_by}') is not defined"
        super().__init__(message)


class FeatureCycleError(IkeSemanticError):
    """Raised when feature depends_on references form a cycle."""

    def __init__(self, cycle: Sequence[str]) -> None:
        """Initialize the exception with the cycle path.

        Args:
            cycle: Feature names along the cycle, first name repeated at the end.
        """
        self.cycle = tuple(cycle)
        self.feature = self.cycle[0] if self.cycle else ""
        super().__init__(f"Feature dependency cycle detected: {' -> '.join(self.cycle)}")


class StructuredFileNotFoundError(IkeIOError, FileNotFoundError):
    """Raised when a structured data file does not exist."""

    def __init__(self, path: Path) -> None:
        """Initialize the exception with the missing path.

        Args:
            path: File that was requested.
        """
        self.path = path
        super().__init__(f"File not found: {path}")


class StructuredDecodeError(IkeSyntaxError):
    """Raised when a structured data file cannot be decoded or validated."""

    def __init__(self, path: Path, message: str) -> None:
        """Initialize the exception with the file and the parser message.

        Args:
            path: File that failed to decode.
            message: Message reported by the underlying parser or validator.
        """
        self.path = path
        self.message = message
        super().__init__(f"Failed to read {path}: {message}")
