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

"""Unit tests for Settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from ikemanifest.core.model_types import ManifestOrigin
from ikemanifest.settings import MANIFEST_ENV, ROOT_ENV, EnvOverrides, resolve_manifest_location

pytestmark = pytest.mark.unit


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    for relative in ("ike.toml", "env/ike.toml", "cli/ike.toml"):
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        _ = target.write_text('[package]\nname = "x"\nversion = "1"\n', encoding="utf-8")
    (tmp_path / "cli" / "nested").mkdir()
    (tmp_path / "env" / "nested").mkdir()
    return tmp_path


def test_env_overrides_from_mapping() -> None:
    overrides = EnvOverrides.from_environ({MANIFEST_ENV: "a/ike.toml", ROOT_ENV: "  ", "OTHER": "x"})
    assert overrides.manifest_path == Path("a/ike.toml")
    assert overrides.root is None
    assert overrides.active_overrides == {MANIFEST_ENV: Path("a/ike.toml")}


def test_env_overrides_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROOT_ENV, "/srv/project")
    assert EnvOverrides.from_environ().root == Path("/srv/project")


def test_empty_mapping_is_not_replaced_by_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ROOT_ENV, "/srv/project")
    assert EnvOverrides.from_environ({}).active_overrides == {}


def test_discovery_from_cwd(workspace: Path) -> None:
    location = resolve_manifest_location(env=EnvOverrides(), cwd=workspace / "cli" / "nested")
    assert location.origin is ManifestOrigin.DISCOVERY
    assert location.manifest_path == workspace / "cli" / "ike.toml"
    assert location.start_dir == workspace / "cli" / "nested"
    assert location.found


def test_env_root_beats_discovery(workspace: Path) -> None:
    env = EnvOverrides(root=Path("env/nested"))
    location = resolve_manifest_location(env=env, cwd=workspace)
    assert location.origin is ManifestOrigin.ENV
    assert location.manifest_path == workspace / "env" / "ike.toml"


def test_env_manifest_beats_env_root(workspace: Path) -> None:
    env = EnvOverrides(manifest_path=Path("ike.toml"), root=Path("env"))
    location = resolve_manifest_location(env=env, cwd=workspace)
    assert location.origin is ManifestOrigin.ENV
    assert location.manifest_path == workspace / "ike.toml"
    assert location.start_dir is None


def test_cli_start_beats_env(workspace: Path) -> None:
    env = EnvOverrides(manifest_path=Path("env/ike.toml"))
    location = resolve_manifest_location(cli_start="cli/nested", env=env, cwd=workspace)
    assert location.origin is ManifestOrigin.CLI
    assert location.manifest_path == workspace / "cli" / "ike.toml"


def test_cli_manifest_beats_cli_start(workspace: Path) -> None:
    location = resolve_manifest_location(
        cli_manifest="env/./ike.toml",
        cli_start="cli",
        env=EnvOverrides(),
        cwd=workspace,
    )
    assert location.origin is ManifestOrigin.CLI
    assert location.manifest_path == workspace / "env" / "ike.toml"


def test_explicit_manifest_is_not_checked_for_existence(tmp_path: Path) -> None:
    location = resolve_manifest_location(cli_manifest="missing.toml", env=EnvOverrides(), cwd=tmp_path)
    assert location.manifest_path == tmp_path / "missing.toml"
    assert location.found


def test_search_without_manifest_is_not_found(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("ikemanifest.settings.find_nearest_manifest", lambda _start: None)
    location = resolve_manifest_location(env=EnvOverrides(), cwd=tmp_path)
    assert not location.found
    assert location.start_dir == tmp_path
