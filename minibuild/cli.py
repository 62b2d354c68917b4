"""CLI entrypoints for minibuild commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .config import BUILD_TYPES, ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .resolver import ResolutionFailure
from .transformers import TransformFailure
from .validators import ValidationError
from .watch import watch


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_project_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    parser.add_argument(
        "--type",
        dest="build_type",
        choices=BUILD_TYPES,
        default=None,
        help="Target platform; overrides build_type from .minibuild.yml.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also append detailed (debug level) logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minibuild",
        description="Incrementally build mini-app projects from their module graph.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Validate the project and transform changed modules.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_project_options(build_parser)
    build_parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and rebuild whenever a source file changes.",
    )

    watch_parser = subparsers.add_parser(
        "watch",
        help="Build once, then rebuild on every source change.",
    )
    _add_verbose_option(watch_parser, suppress_default=True)
    _add_project_options(watch_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for minibuild commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    watching = args.command == "watch" or bool(getattr(args, "watch", False))
    configure_logging(verbose=bool(args.verbose), watch=watching, log_file=args.log_file)

    try:
        orchestrator = Orchestrator.from_path(args.path, build_type=args.build_type)
    except (ConfigError, ValueError, TypeError) as exc:
        parser.exit(1, f"minibuild: invalid configuration: {exc}\n")

    try:
        orchestrator.run()
    except ValidationError as exc:
        if not watching:
            parser.exit(1, f"minibuild build failed with {exc.outcome.errors.count('Error:')} error(s)\n")
    except (TransformFailure, ResolutionFailure) as exc:
        if not watching:
            parser.exit(1, f"minibuild build failed: {exc}\nRun with --verbose for more details.\n")
        orchestrator.logger.error("Initial build failed: %s", exc)

    if watching:
        try:
            asyncio.run(watch(orchestrator))
        except KeyboardInterrupt:
            print("\nStopped watching.")


if __name__ == "__main__":
    main(sys.argv[1:])
