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

"""Path normalization, canonicalization, and sandboxed file access."""

from __future__ import annotations

from .access import (
    File,
    FileSystem,
    open_file,
    read_file,
    read_file_sync,
    read_text_file,
    read_text_file_sync,
    resolve_open_path,
)
from .canonicalize import (
    Canonicalizer,
    LinuxCanonicalizer,
    PosixCanonicalizer,
    WindowsCanonicalizer,
    canonicalize_path,
    get_canonicalizer,
    strip_extended_prefix,
)
from .normalize import join_normalized, looks_like_file, normalize_path
from .structured import read_structured

__all__ = [
    "Canonicalizer",
    "File",
    "FileSystem",
    "LinuxCanonicalizer",
    "PosixCanonicalizer",
    "WindowsCanonicalizer",
    "canonicalize_path",
    "get_canonicalizer",
    "join_normalized",
    "looks_like_file",
    "normalize_path",
    "open_file",
    "read_file",
    "read_file_sync",
    "read_structured",
    "read_text_file",
    "read_text_file_sync",
    "resolve_open_path",
    "strip_extended_prefix",
]
