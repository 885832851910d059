"""CLI entry point for gh-notifications.

Wrangle your GitHub inbox: sync notifications to disk, ignore noisy repos,
and mark things done.
"""

import argparse
import sys

from .config import ensure_config_exists, get_config_path, load_config
from .errors import GhNotificationsError
from .inbox import cli as inbox_cli
from .log import enable_stderr, get_logger

_log = get_logger("cli")


def cmd_config_init(args: argparse.Namespace) -> None:
    """Initialize config file with defaults."""
    config_path = ensure_config_exists()
    print(f"Config file at: {config_path}")


def cmd_config_path(args: argparse.Namespace) -> None:
    """Print config file path."""
    print(get_config_path())


def cmd_config_show(args: argparse.Namespace) -> None:
    """Show current config."""
    config_path = get_config_path()
    if config_path.exists():
        print(config_path.read_text())
    else:
        print(f"No config file at {config_path}")
        print("Run 'gh-notifications config init' to create one.")


def setup_config_parser(subparsers: argparse._SubParsersAction) -> None:
    """Set up the config subcommand."""
    config_parser = subparsers.add_parser(
        "config",
        help="Manage gh-notifications configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_command")

    # config init
    init_parser = config_subparsers.add_parser("init", help="Create default config file")
    init_parser.set_defaults(func=cmd_config_init)

    # config path
    path_parser = config_subparsers.add_parser("path", help="Print config file path")
    path_parser.set_defaults(func=cmd_config_path)

    # config show
    show_parser = config_subparsers.add_parser("show", help="Show current config")
    show_parser.set_defaults(func=cmd_config_show)

    config_parser.set_defaults(func=cmd_config_show, config_command=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-notifications",
        description="Wrangle your GitHub inbox",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show progress messages on stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    inbox_cli.setup_parser(subparsers)
    setup_config_parser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        enable_stderr()

    if args.command is None or not hasattr(args, "func"):
        parser.print_help()
        return

    args.config = load_config()
    args.ctx = inbox_cli.CommandContext.from_config(args.config)

    try:
        args.func(args)
    except (GhNotificationsError, OSError) as e:
        _log.error("%s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
