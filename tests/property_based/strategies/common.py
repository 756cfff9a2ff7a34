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

"""Common Hypothesis strategies for path tests."""

from __future__ import annotations

from hypothesis import strategies as st

__all__ = ["dotted_segments", "path_segments"]


def path_segments(min_size: int = 0, max_size: int = 8) -> st.SearchStrategy[list[str]]:
    """Return lists of plain directory names (no ``.`` or ``..``)."""
    segment = st.from_regex(r"[a-zA-Z0-9_-]{1,8}", fullmatch=True)
    return st.lists(segment, min_size=min_size, max_size=max_size)


def dotted_segments(min_size: int = 0, max_size: int = 12) -> st.SearchStrategy[list[str]]:
    """Return segment lists mixing plain names with ``.`` and ``..``."""
    segment = st.one_of(
        st.from_regex(r"[a-zA-Z0-9_-]{1,8}", fullmatch=True),
        st.sampled_from([".", ".."]),
    )
    return st.lists(segment, min_size=min_size, max_size=max_size)
