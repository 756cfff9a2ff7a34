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

"""``ike-manifest check``: validate the manifest and report the package."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from ikemanifest.cli.helpers import echo, register_argument

if TYPE_CHECKING:
    from ikemanifest.cli.types import SubparserCollection
    from ikemanifest.manifest.models import ResolvedManifest


def register_check_command(subparsers: SubparserCollection) -> None:
    """Attach the ``check`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
    """
    check = subparsers.add_parser(
        "check",
        help="Load and validate the manifest",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        check,
        "--verbose",
        action="store_true",
        help="Also print the manifest path and table sizes.",
    )


def execute_check(args: argparse.Namespace, manifest: ResolvedManifest) -> int:
    """Report a successfully validated manifest.

    Returns:
        ``0``; validation failures are raised before this handler runs.
    """
    echo(f"OK {manifest.package.name}@{manifest.package.version}")
    if getattr(args, "verbose", False):
        echo(f"  manifest: {manifest.path}")
        echo(f"  dependencies: {len(manifest.dependencies)}")
        echo(f"  devDependencies: {len(manifest.dev_dependencies)}")
        echo(f"  features: {len(manifest.features)}")
        echo(f"  tasks: {len(manifest.tasks)}")
    return 0


__all__ = ["execute_check", "register_check_command"]
