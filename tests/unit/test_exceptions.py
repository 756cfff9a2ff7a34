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

"""Unit tests for Exceptions."""

from __future__ import annotations

from pathlib import Path

import pytest

from ikemanifest.exceptions import (
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
    StructuredDecodeError,
    StructuredFileNotFoundError,
    UndefinedFeatureError,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("error", "kind"),
    [
        (PathNotFoundError(Path("/x")), IkeIOError),
        (PathAccessError(Path("/x"), PermissionError("denied")), IkeIOError),
        (FileAccessError("/x", OSError("boom")), IkeIOError),
        (ManifestReadError(Path("/x"), OSError("boom")), IkeIOError),
        (StructuredFileNotFoundError(Path("/x")), IkeIOError),
        (ManifestSyntaxError(None, "bad"), IkeSyntaxError),
        (StructuredDecodeError(Path("/x"), "bad"), IkeSyntaxError),
        (MissingDependencySourceError("d", "dependencies"), IkeSemanticError),
        (ConflictingDependencySourceError("d", "dependencies", ["version", "git"]), IkeSemanticError),
        (InvalidGitReferenceError("d", "dependencies"), IkeSemanticError),
        (UndefinedFeatureError("f"), IkeSemanticError),
        (FeatureCycleError(["a", "a"]), IkeSemanticError),
    ],
)
def test_errors_belong_to_one_kind(error: IkeError, kind: type[IkeError]) -> None:
    assert isinstance(error, IkeError)
    assert isinstance(error, kind)
    kinds = {IkeIOError, IkeSyntaxError, IkeSemanticError}
    assert [other for other in kinds if isinstance(error, other)] == [kind]


def test_io_errors_are_os_errors() -> None:
    assert isinstance(FileAccessError("/x", OSError("boom")), OSError)


def test_manifest_syntax_error_message_includes_position() -> None:
    error = ManifestSyntaxError(Path("/w/ike.toml"), "Expected '='", line=3, column=7)
    assert str(error) == f"Invalid manifest {Path('/w/ike.toml')}:3:7: Expected '='"


def test_manifest_syntax_error_without_source() -> None:
    error = ManifestSyntaxError(None, "package: Field required", locations=["package"])
    assert str(error) == "Invalid manifest <manifest>: package: Field required"
    assert error.locations == ("package",)


def test_feature_cycle_error_exposes_first_feature() -> None:
    error = FeatureCycleError(["web", "core", "web"])
    assert error.feature == "web"
    assert error.cycle == ("web", "core", "web")
