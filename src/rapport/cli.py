"""CLI entry point for rapport."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app.state import Model, load_model
from .config import Config
from .formatting import DASHBOARD_HEADER, format_summary_row, format_workspace_summary
from .storage.errors import StorageError
from .storage.workspace import find_workspace, init_workspace

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool, log_file: Path | None = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    if log_file is None:
        logging.basicConfig(
            format="%(asctime)s [%(levelname)s] %(message)s",
            level=level,
            stream=sys.stderr,
        )
        return

    # The TUI owns the terminal, so records go to a file instead.
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(message)s",
        level=level,
        filename=log_file,
    )


def _config_from_args(args: argparse.Namespace) -> Config:
    overrides: dict = {}
    if getattr(args, "verbose", False):
        overrides["verbose"] = True
    if getattr(args, "editor", None):
        overrides["editor"] = args.editor
    config_path = Path(args.config).expanduser() if getattr(args, "config", None) else None
    return Config.load(overrides, config_path=config_path)


def _resolve_workspace(path: str | None, config: Config) -> Path | None:
    """Explicit path first, then the configured one; either may be a subdirectory."""
    start = Path(path).expanduser() if path else config.workspace
    return find_workspace(start)


def _not_a_workspace(path: str | None) -> int:
    target = path or "."
    print(f"Error: Not a rapport workspace: {target}", file=sys.stderr)
    print(f"Run 'rapport init {target}' to create one.", file=sys.stderr)
    return 1


def _handle_init(args: argparse.Namespace, config: Config) -> int:
    path = Path(args.path).expanduser().resolve()
    try:
        workspace = init_workspace(path)
    except StorageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Initialized rapport workspace at {workspace.path}")
    print()
    print("Next steps:")
    print(f"  1. Run 'rapport {args.path}' to open the dashboard")
    print("  2. Press 'n' to add your first team member")
    print("  3. Press '?' for help")
    return 0


def _load(args: argparse.Namespace, config: Config) -> Model | None:
    root = _resolve_workspace(args.path, config)
    if root is None:
        return None
    return load_model(root, status_seconds=config.status_seconds)


def _handle_summary(args: argparse.Namespace, config: Config) -> int:
    """Print the dashboard as plain text, most urgent first."""
    try:
        model = _load(args, config)
    except (StorageError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if model is None:
        return _not_a_workspace(args.path)

    print(DASHBOARD_HEADER)
    for record in model.records:
        print(format_summary_row(record.summary))
        for member in record.team:
            print("  " + format_summary_row(member.summary))
    print()
    print(format_workspace_summary(model.workspace_summary))
    return 0


def _handle_run(args: argparse.Namespace, config: Config) -> int:
    from .tui.runner import run

    try:
        model = _load(args, config)
    except (StorageError, OSError) as e:
        print(f"Error: failed to load workspace: {e}", file=sys.stderr)
        return 1
    if model is None:
        return _not_a_workspace(args.path)

    logger.info("Opening workspace %s", model.workspace.path)
    run(model, config)
    return 0


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", type=str, help="Path to config.toml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="rapport",
        description="Track 1-on-1s and team mood from the terminal",
    )
    subparsers = parser.add_subparsers(dest="command")

    # init subcommand
    init_parser = subparsers.add_parser("init", help="Create a new workspace")
    init_parser.add_argument("path", nargs="?", default=".", help="Workspace directory")
    _add_common(init_parser)

    # run subcommand (the default)
    run_parser = subparsers.add_parser("run", help="Open the interactive dashboard")
    run_parser.add_argument("path", nargs="?", default=None, help="Workspace directory")
    run_parser.add_argument("--editor", type=str, help="Editor command for meeting notes")
    _add_common(run_parser)

    # summary subcommand
    summary_parser = subparsers.add_parser(
        "summary", help="Print the urgency-sorted dashboard as text"
    )
    summary_parser.add_argument("path", nargs="?", default=None, help="Workspace directory")
    _add_common(summary_parser)

    if argv is None:
        argv = sys.argv[1:]
    known = {"init", "run", "summary", "-h", "--help"}
    if not argv or argv[0] not in known:
        argv = ["run", *argv]

    args = parser.parse_args(argv)
    config = _config_from_args(args)

    if args.command == "run":
        _setup_logging(config.verbose, log_file=config.log_file)
        return _handle_run(args, config)

    _setup_logging(config.verbose)
    if args.command == "init":
        return _handle_init(args, config)
    if args.command == "summary":
        return _handle_summary(args, config)

    return 1


if __name__ == "__main__":
    sys.exit(main())
