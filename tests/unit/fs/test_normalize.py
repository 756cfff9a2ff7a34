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

"""Unit tests for FS Normalize."""

from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath

import pytest

from ikemanifest.fs.normalize import join_normalized, looks_like_file, normalize_path

pytestmark = pytest.mark.unit


def test_normalize_path_collapses_dot_segments() -> None:
    assert normalize_path(PurePosixPath("/root/./x/../y")) == PurePosixPath("/root/y")


def test_join_normalized_resolves_relative_against_root() -> None:
    assert join_normalized(PurePosixPath("/root"), "x/../y") == Path("/root/y")


def test_join_normalized_keeps_absolute_input(tmp_path: Path) -> None:
    absolute = tmp_path / "a" / ".." / "b"
    assert join_normalized("/elsewhere", absolute) == tmp_path / "b"


def test_normalize_path_does_not_climb_above_anchor() -> None:
    assert normalize_path(PurePosixPath("/../../etc")) == PurePosixPath("/etc")


def test_normalize_path_relative_leading_parent_is_dropped() -> None:
    assert normalize_path(PurePosixPath("../a")) == PurePosixPath("a")


def test_normalize_path_keeps_windows_drive() -> None:
    result = normalize_path(PureWindowsPath(r"C:\work\.\pkg\..\src"))
    assert isinstance(result, PureWindowsPath)
    assert result == PureWindowsPath(r"C:\work\src")


def test_normalize_path_keeps_unc_anchor() -> None:
    result = normalize_path(PureWindowsPath(r"\\server\share\a\..\..\b"))
    assert result.anchor == "\\\\server\\share\\"
    assert result == PureWindowsPath(r"\\server\share\b")


def test_normalize_path_accepts_strings() -> None:
    result = normalize_path("/tmp/./cache/../data")
    assert isinstance(result, Path)
    assert result == Path("/tmp/data")


def test_normalize_path_does_not_touch_filesystem(tmp_path: Path) -> None:
    missing = tmp_path / "missing" / "." / "leaf.txt"
    assert normalize_path(missing) == tmp_path / "missing" / "leaf.txt"
    assert not (tmp_path / "missing").exists()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("index.ts", True),
        ("src/lib/mod.d2", True),
        ("src", False),
        ("pkg.", False),
        ("archive.tar-gz", False),
    ],
)
def test_looks_like_file(value: str, *, expected: bool) -> None:
    assert looks_like_file(value) is expected
