"""CLI entrypoints for elementdocs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analyzers.base import ResolutionError
from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator
from .postproc.markers import MarkerError


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


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the configuration file (defaults to <path>/.elementdocs.yml).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="elementdocs",
        description="Regenerate API tables in web component documentation.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    update_parser = subparsers.add_parser(
        "update",
        help="Regenerate the API section of every configured documentation file.",
    )
    _add_verbose_option(update_parser, suppress_default=True)
    _add_config_option(update_parser)
    update_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the package root (defaults to current directory).",
    )
    update_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print documentation changes without writing them.",
    )
    update_parser.add_argument(
        "--check",
        action="store_true",
        help="Exit with status 1 when any documentation file is out of date.",
    )

    show_parser = subparsers.add_parser(
        "show",
        help="Print the generated API section for a single entrypoint.",
    )
    _add_verbose_option(show_parser, suppress_default=True)
    _add_config_option(show_parser)
    show_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the package root (defaults to current directory).",
    )
    show_parser.add_argument("entrypoint", help="Component source path relative to the package root.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing documentation updates.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for elementdocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "serve":
        from .service.app import run_service

        try:
            run_service(host=args.host, port=args.port)
        except RuntimeError as exc:
            parser.exit(1, f"{exc}\n")
        return

    orchestrator = Orchestrator()

    if args.command == "update":
        check = bool(getattr(args, "check", False))
        dry_run = bool(getattr(args, "dry_run", False)) or check
        try:
            results = orchestrator.run_update(args.path, dry_run=dry_run, config_path=args.config)
        except (FileNotFoundError, ConfigError, MarkerError) as exc:
            parser.exit(1, f"{exc}\n")
        except ResolutionError as exc:
            parser.exit(1, f"elementdocs update failed: {exc}\nRun with --verbose for more details.\n")
        except RuntimeError as exc:
            parser.exit(1, f"elementdocs update failed: {exc}\n")

        changed = [result for result in results if result.changed]
        if check:
            for result in changed:
                print(f"Out of date: {_relativize(result.path)}")
            if changed:
                parser.exit(1, "Run `elementdocs update` to regenerate API docs.\n")
            print("API docs up to date")
        elif dry_run:
            if not changed:
                print("API docs already up to date (dry-run)")
            for result in changed:
                print(result.diff)
        elif not changed:
            print("API docs already up to date")
        else:
            for result in changed:
                print(f"API docs updated at {_relativize(result.path)}")
    elif args.command == "show":
        try:
            block = orchestrator.render_component(args.path, args.entrypoint, config_path=args.config)
        except (ConfigError, ResolutionError) as exc:
            parser.exit(1, f"{exc}\n")
        except RuntimeError as exc:
            parser.exit(1, f"elementdocs show failed: {exc}\n")
        print(block, end="")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
