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

"""``ike-manifest features``: print the activation closure of a selection."""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from ikemanifest.cli.helpers import echo, register_argument

if TYPE_CHECKING:
    from ikemanifest.cli.types import SubparserCollection
    from ikemanifest.manifest.models import ResolvedManifest


def register_features_command(subparsers: SubparserCollection) -> None:
    """Attach the ``features`` command to the CLI.

    Args:
        subparsers: Top-level argparse subparser collection to register commands on.
    """
    features = subparsers.add_parser(
        "features",
        help="Show the features activated by a selection",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(features, "names", nargs="+", metavar="NAME", help="Features to activate.")
    register_argument(
        features,
        "--files",
        action="store_true",
        help="Also print each feature's extra source files, resolved.",
    )


def execute_features(args: argparse.Namespace, manifest: ResolvedManifest) -> int:
    """Print activated features, dependencies first.

    Undefined names and cycles raise and are reported by the caller.
    """
    show_files = bool(getattr(args, "files", False))
    for feature in manifest.activate_features(args.names):
        echo(feature.name)
        if show_files:
            for path in manifest.feature_files(feature.name):
                echo(f"  {path}")
    return 0


__all__ = ["execute_features", "register_features_command"]
