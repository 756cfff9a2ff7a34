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

"""``ike-manifest tasks``: list declared tasks."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from ikemanifest.cli.helpers import echo

if TYPE_CHECKING:
    from ikemanifest.cli.types import SubparserCollection
    from ikemanifest.manifest.models import ResolvedManifest


def register_tasks_command(subparsers: SubparserCollection) -> None:
    """Attach the ``tasks`` command to the CLI."""
    _ = subparsers.add_parser(
        "tasks",
        help="List tasks and their shell commands",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )


def execute_tasks(_: argparse.Namespace, manifest: ResolvedManifest) -> int:
    if not manifest.tasks:
        echo("No tasks defined")
        return 0
    width = max(len(name) for name in manifest.tasks)
    for name, command in manifest.tasks.items():
        echo(f"{name.ljust(width)}  {command}")
    return 0


__all__ = ["execute_tasks", "register_tasks_command"]
