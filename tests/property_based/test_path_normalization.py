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

"""Property-based tests for lexical path normalization."""

from __future__ import annotations

import posixpath
from pathlib import PurePosixPath

import pytest
from hypothesis import HealthCheck, given, settings

from ikemanifest.fs.normalize import normalize_path
from tests.property_based.strategies import dotted_segments, path_segments

pytestmark = pytest.mark.property


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(segments=dotted_segments())
def test_h_absolute_normalization_matches_normpath(segments: list[str]) -> None:
    raw = "/" + "/".join(segments)
    assert str(normalize_path(PurePosixPath(raw))) == posixpath.normpath(raw)


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(segments=dotted_segments())
def test_h_normalization_is_idempotent(segments: list[str]) -> None:
    once = normalize_path(PurePosixPath("/", *segments))
    assert normalize_path(once) == once


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(segments=dotted_segments())
def test_h_result_has_no_dot_segments(segments: list[str]) -> None:
    result = normalize_path(PurePosixPath(*segments)) if segments else normalize_path(PurePosixPath("."))
    assert "." not in result.parts
    assert ".." not in result.parts


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(root=path_segments(min_size=1), child=path_segments())
def test_h_plain_child_stays_under_root(root: list[str], child: list[str]) -> None:
    base = PurePosixPath("/", *root)
    result = normalize_path(base.joinpath(*child))
    assert result == base.joinpath(*child)
    assert result.is_relative_to(base)


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(root=path_segments(min_size=1), child=path_segments(min_size=1))
def test_h_parent_after_child_cancels(root: list[str], child: list[str]) -> None:
    base = PurePosixPath("/", *root)
    noisy = base.joinpath(*child, *([".."] * len(child)))
    assert normalize_path(noisy) == base
