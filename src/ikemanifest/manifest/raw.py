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

"""Permissive manifest models and TOML parsing.

The pydantic models in this module mirror the on-disk ``ike.toml`` layout and
accept everything the format allows, including the bare-string dependency
shorthand. They are an intermediate form only: domain rules are enforced when
they are converted into the canonical models in `ikemanifest.manifest.models`.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ikemanifest.compat import tomllib
from ikemanifest.exceptions import ManifestSyntaxError

if TYPE_CHECKING:
    from pathlib import Path

__all__ = [
    "RawDependency",
    "RawFeature",
    "RawManifest",
    "RawPackage",
    "RawRepository",
    "parse_manifest_text",
]

_POSITION_RE: Final[re.Pattern[str]] = re.compile(r"\(at line (\d+), column (\d+)\)")


class RawRepository(BaseModel):
    """Source repository declared by the package table."""

    type: str
    url: str


class RawPackage(BaseModel):
    """Package metadata table (``[package]``)."""

    name: str
    version: str
    description: str | None = None
    files: list[str] | None = None
    main: str | None = None
    types: str | None = None
    repository: RawRepository | None = None


class RawDependency(BaseModel):
    """Dependency entry as written, either a version string or a table.

    A bare string such as ``"1.2.3"`` is expanded to ``{version = "1.2.3"}``
    before field validation, so both spellings produce identical instances.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    version: str | None = None
    path: str | None = None
    git: str | None = None
    branch: str | None = None
    rev: str | None = None
    features: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _expand_shorthand(cls, value: object) -> object:
        if isinstance(value, str):
            return {"version": value}
        return value


class RawFeature(BaseModel):
    """Feature definition (``[features.<name>]``)."""

    dependencies: dict[str, RawDependency]
    files: list[str]
    depends_on: list[str] | None = None


class RawManifest(BaseModel):
    """Top-level ``ike.toml`` document."""

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    package: RawPackage
    dependencies: dict[str, RawDependency] | None = None
    dev_dependencies: dict[str, RawDependency] | None = Field(default=None, alias="devDependencies")
    tasks: dict[str, str] | None = None
    features: dict[str, RawFeature] | None = None


def _decode_position(exc: tomllib.TOMLDecodeError) -> tuple[int | None, int | None]:
    line = getattr(exc, "lineno", None)
    column = getattr(exc, "colno", None)
    if isinstance(line, int) and isinstance(column, int):
        return line, column
    match = _POSITION_RE.search(str(exc))
    if match is None:
        return None, None
    return int(match.group(1)), int(match.group(2))


def _format_location(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def parse_manifest_text(text: str, source: Path | None = None) -> RawManifest:
    """Deserialize manifest text into a `RawManifest`.

    Args:
        text: UTF-8 decoded manifest content.
        source: File the text was read from, used in diagnostics.

    Returns:
        RawManifest: Permissive manifest structure.

    Raises:
        ManifestSyntaxError: The text is not valid TOML, or its tables do not
            have the manifest's shape.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        line, column = _decode_position(exc)
        raise ManifestSyntaxError(source, str(exc), line=line, column=column) from exc

    try:
        return RawManifest.model_validate(data)
    except ValidationError as exc:
        errors = exc.errors()
        locations = [_format_location(tuple(error["loc"])) for error in errors]
        details = "; ".join(f"{loc}: {error['msg']}" for loc, error in zip(locations, errors))
        raise ManifestSyntaxError(source, details, locations=locations) from exc
