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

"""Read structured data files for configuration consumers.

A missing file raises `StructuredFileNotFoundError` so callers can offer to
scaffold a default. Other access failures surface as `FileAccessError`; text
that cannot be decoded or validated raises `StructuredDecodeError` with the
parser's own message.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TypeVar, overload

from pydantic import BaseModel, ValidationError

from ikemanifest.compat import tomllib
from ikemanifest.exceptions import FileAccessError, StructuredDecodeError, StructuredFileNotFoundError

from .access import read_text_file_sync

__all__ = ["read_structured"]

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _decode(path: Path, text: str) -> object:
    if path.suffix == ".toml":
        return tomllib.loads(text)
    return json.loads(text)


@overload
def read_structured(path: str | os.PathLike[str], model: type[_ModelT]) -> _ModelT: ...


@overload
def read_structured(path: str | os.PathLike[str], model: None = None) -> object: ...


def read_structured(path: str | os.PathLike[str], model: type[BaseModel] | None = None) -> object:
    """Read a UTF-8 file and deserialize it as JSON or TOML.

    Files ending in ``.toml`` are parsed as TOML; everything else as JSON.

    Args:
        path: File to read.
        model: Optional pydantic model to validate the decoded data into.

    Returns:
        The decoded data, or a validated ``model`` instance.

    Raises:
        StructuredFileNotFoundError: The file does not exist.
        FileAccessError: The file exists but cannot be opened or read.
        StructuredDecodeError: The content cannot be decoded or validated.
    """
    target = Path(path)
    try:
        text = read_text_file_sync(target)
    except FileAccessError as exc:
        if isinstance(exc.error, FileNotFoundError):
            raise StructuredFileNotFoundError(target) from exc
        raise
    try:
        data = _decode(target, text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise StructuredDecodeError(target, str(exc)) from exc
    if model is None:
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise StructuredDecodeError(target, str(exc)) from exc
