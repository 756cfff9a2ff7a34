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

"""CLI entry point and orchestration for ``ike-manifest``.

Exit codes:

- ``0``: the command succeeded.
- ``1``: no manifest was found.
- ``2``: the manifest could not be read or is invalid, or a command rejected
  its input (unknown feature, feature cycle).
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from contextlib import suppress
from typing import TYPE_CHECKING, Final

from ikemanifest import __version__
from ikemanifest.cli.commands import check as check_command
from ikemanifest.cli.commands import deps as deps_command
from ikemanifest.cli.commands import features as features_command
from ikemanifest.cli.commands import tasks as tasks_command
from ikemanifest.cli.helpers import echo, register_argument
from ikemanifest.core.model_types import CommandAction, LogComponent, LogFormat
from ikemanifest.exceptions import IkeError
from ikemanifest.logging import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from ikemanifest.manifest.loader import load_manifest
from ikemanifest.manifest.locator import MANIFEST_FILENAME
from ikemanifest.settings import resolve_manifest_location

if TYPE_CHECKING:
    from ikemanifest.manifest.models import ResolvedManifest

logger: logging.Logger = logging.getLogger("ike.cli")

EXIT_OK: Final[int] = 0
EXIT_NOT_FOUND: Final[int] = 1
EXIT_INVALID: Final[int] = 2

CommandHandler = Callable[[argparse.Namespace, "ResolvedManifest"], int]


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point for ``ike-manifest``.

    Parses arguments, configures logging, locates and loads the manifest, and
    dispatches to the selected command.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.version:
        echo(f"ike-manifest {__version__}")
        return EXIT_OK
    if args.command is None:
        parser.error("No command provided.")
    _initialize_logging(args.log_format, args.log_level)
    handler = _command_handlers()[CommandAction.from_str(args.command)]

    location = resolve_manifest_location(cli_manifest=args.manifest, cli_start=args.start)
    if location.manifest_path is None:
        echo(f"[ike] No {MANIFEST_FILENAME} found from {location.start_dir}", err=True)
        return EXIT_NOT_FOUND

    try:
        manifest = load_manifest(location.manifest_path)
        return handler(args, manifest)
    except IkeError as exc:
        logger.debug(
            "Command %s failed: %s",
            args.command,
            type(exc).__name__,
            extra=structured_extra(LogComponent.CLI, manifest=location.manifest_path),
        )
        echo(f"[ike] {exc}", err=True)
        return EXIT_INVALID


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with global options and every subcommand."""
    parser = argparse.ArgumentParser(
        prog="ike-manifest",
        description="Inspect and validate ike.toml package manifests.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_argument(parser, "--version", action="store_true", help="Print the version and exit.")
    register_argument(
        parser,
        "--manifest",
        default=None,
        help=f"Explicit {MANIFEST_FILENAME} path (overrides IKE_MANIFEST and discovery).",
    )
    register_argument(
        parser,
        "--start",
        default=None,
        help="Directory to search upward from (overrides IKE_ROOT).",
    )
    register_argument(
        parser,
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Logging output format; defaults to IKE_LOG_FORMAT or text.",
    )
    register_argument(
        parser,
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging verbosity; defaults to IKE_LOG_LEVEL or warning.",
    )
    subparsers = parser.add_subparsers(dest="command")
    check_command.register_check_command(subparsers)
    tasks_command.register_tasks_command(subparsers)
    deps_command.register_deps_command(subparsers)
    features_command.register_features_command(subparsers)
    return parser


def _initialize_logging(log_format: str | None, log_level: str | None) -> None:
    with suppress(ValueError):  # best-effort logger init
        _ = configure_logging(LogFormat.from_str(log_format) if log_format else None, log_level=log_level)


def _command_handlers() -> dict[CommandAction, CommandHandler]:
    return {
        CommandAction.CHECK: check_command.execute_check,
        CommandAction.TASKS: tasks_command.execute_tasks,
        CommandAction.DEPS: deps_command.execute_deps,
        CommandAction.FEATURES: features_command.execute_features,
    }


__all__ = ["EXIT_INVALID", "EXIT_NOT_FOUND", "EXIT_OK", "build_parser", "main"]
