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

"""``ike-manifest deps``: list dependencies with their source."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from ikemanifest.cli.helpers import echo, register_argument
from ikemanifest.core.model_types import DependencyTable
from ikemanifest.manifest.models import GitSource, PathSource, VersionSource

if TYPE_CHECKING:
    from ikemanifest.cli.types import SubparserCollection
    from ikemanifest.manifest.models import Dependency, ResolvedManifest


def register_deps_command(subparsers: SubparserCollection) -> None:
    """Attach the ``deps`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
    """
    deps = subparsers.add_parser(
        "deps",
        help="List dependencies and where they come from",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(
        deps,
        "--dev",
        action="store_true",
        help="List [devDependencies] instead of [dependencies].",
    )


def describe_dependency(dependency: Dependency, manifest: ResolvedManifest) -> str:
    """Return a one-line description of a dependency's source.

    Path sources are shown resolved against the manifest directory.
    """
    source = dependency.source
    if isinstance(source, VersionSource):
        detail = source.version
    elif isinstance(source, PathSource):
        detail = str(manifest.resolve_relative(source.path))
    else:
        detail = _describe_git(source)
    line = f"{dependency.name} ({dependency.kind}) {detail}"
    if dependency.features:
        line += f" [features: {', '.join(dependency.features)}]"
    return line


def _describe_git(source: GitSource) -> str:
    parts = [source.url]
    if source.branch is not None:
        parts.append(f"branch={source.branch}")
    if source.rev is not None:
        parts.append(f"rev={source.rev}")
    return " ".join(parts)


def execute_deps(args: argparse.Namespace, manifest: ResolvedManifest) -> int:
    """List the selected dependency table.

    Returns:
        ``0`` in all cases; an empty table prints a notice.
    """
    table = DependencyTable.DEV_DEPENDENCIES if getattr(args, "dev", False) else DependencyTable.DEPENDENCIES
    entries = manifest.table(table)
    if not entries:
        echo(f"No {table} declared")
        return 0
    for dependency in entries.values():
        echo(describe_dependency(dependency, manifest))
    return 0


__all__ = ["describe_dependency", "execute_deps", "register_deps_command"]
