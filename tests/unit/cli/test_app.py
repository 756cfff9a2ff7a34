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

"""Unit tests for top-level CLI app helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ikemanifest import __version__
from ikemanifest.cli import app

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

pytestmark = [pytest.mark.unit, pytest.mark.cli]

MANIFEST = """
[package]
name = "demo"
version = "0.3.0"

[dependencies]
registry = "1.2.3"
local = { path = "../local" }

[devDependencies]
remote = { git = "https://example.com/remote.git", branch = "main", rev = "abc123" }

[tasks]
build = "ike build"
t = "ike test"

[features.web]
dependencies = {}
files = ["src/web.ts"]
depends_on = ["core"]

[features.core]
dependencies = {}
files = []

[features.loop]
dependencies = {}
files = []
depends_on = ["loop"]
"""


def test_main_requires_command() -> None:
    with pytest.raises(SystemExit):
        _ = app.main([])


def test_main_unknown_command() -> None:
    with pytest.raises(SystemExit):
        _ = app.main(["unknown"])


def test_main_version(capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["--version"]) == app.EXIT_OK
    assert capsys.readouterr().out.strip() == f"ike-manifest {__version__}"


def test_check_reports_package(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--manifest", str(path), "check"]) == app.EXIT_OK
    assert capsys.readouterr().out.strip() == "OK demo@0.3.0"


def test_check_verbose_lists_counts(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--manifest", str(path), "check", "--verbose"]) == app.EXIT_OK
    out = capsys.readouterr().out
    assert f"manifest: {path}" in out
    assert "features: 3" in out


def test_check_discovers_from_start(
    tmp_path: Path,
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    _ = write_manifest(MANIFEST)
    nested = tmp_path / "src" / "deep"
    nested.mkdir(parents=True)
    assert app.main(["--start", str(nested), "check"]) == app.EXIT_OK
    assert "OK demo@0.3.0" in capsys.readouterr().out


def test_check_uses_environment_manifest(
    write_manifest: Callable[..., Path],
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("IKE_MANIFEST", str(write_manifest(MANIFEST)))
    assert app.main(["check"]) == app.EXIT_OK
    assert "OK demo@0.3.0" in capsys.readouterr().out


def test_check_invalid_manifest_exits_two(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest('[package]\nname = "x"\nversion = "1"\n[dependencies]\nbad = {}\n')
    assert app.main(["--manifest", str(path), "check"]) == app.EXIT_INVALID
    err = capsys.readouterr().err
    assert "[ike]" in err
    assert "Dependency 'bad' in [dependencies]" in err


def test_missing_explicit_manifest_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert app.main(["--manifest", str(tmp_path / "ike.toml"), "check"]) == app.EXIT_INVALID
    assert "Unable to read" in capsys.readouterr().err


def test_no_manifest_found_exits_one(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr("ikemanifest.settings.find_nearest_manifest", lambda _start: None)
    assert app.main(["--start", str(tmp_path), "check"]) == app.EXIT_NOT_FOUND
    assert "No ike.toml found" in capsys.readouterr().err


def test_tasks_lists_aligned_commands(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--manifest", str(path), "tasks"]) == app.EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["build  ike build", "t      ike test"]


def test_deps_lists_runtime_table(
    tmp_path: Path,
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST, tmp_path / "pkg")
    assert app.main(["--manifest", str(path), "deps"]) == app.EXIT_OK
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "registry (version) 1.2.3",
        f"local (path) {tmp_path / 'local'}",
    ]


def test_deps_dev_lists_dev_table(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--manifest", str(path), "deps", "--dev"]) == app.EXIT_OK
    assert capsys.readouterr().out.strip() == "remote (git) https://example.com/remote.git branch=main rev=abc123"


def test_features_prints_closure(
    tmp_path: Path,
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--manifest", str(path), "features", "web", "--files"]) == app.EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["core", "web", f"  {tmp_path / 'src' / 'web.ts'}"]


def test_features_cycle_exits_two(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--manifest", str(path), "features", "loop"]) == app.EXIT_INVALID
    assert "loop -> loop" in capsys.readouterr().err


def test_features_unknown_exits_two(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--manifest", str(path), "features", "mobile"]) == app.EXIT_INVALID
    assert "Feature 'mobile' is not defined" in capsys.readouterr().err


def test_json_logging_flag(
    write_manifest: Callable[..., Path],
    capsys: pytest.CaptureFixture[str],
) -> None:
    path = write_manifest(MANIFEST)
    assert app.main(["--log-format", "json", "--log-level", "info", "--manifest", str(path), "check"]) == 0
    err_lines = [line for line in capsys.readouterr().err.splitlines() if line]
    assert any('"component": "manifest"' in line for line in err_lines)
