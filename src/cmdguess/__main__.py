"""Entry point for python -m cmdguess."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from cmdguess.cli import (
    list_all_cmds,
    list_commands,
    list_porcelain_cmds,
    run_config,
    run_init,
    run_which,
)
from cmdguess.config import CMDGUESS_HOME, ResolutionContext, ResolverSettings, load_settings
from cmdguess.exceptions import ConfigError, RefFormatError
from cmdguess.refs import iter_refs, help_unknown_ref, parse_ref_lines
from cmdguess.suggest import help_unknown_cmd


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="cmdguess",
        description="Command catalog and typo correction for prefix-dispatched tools",
    )
    subparsers = parser.add_subparsers(dest="command")

    init_parser = subparsers.add_parser("init", help="Write a starter ~/.cmdguess/settings.yaml")
    init_parser.add_argument("--tool", default="git", help="Tool suite name (default: git)")

    config_parser = subparsers.add_parser("config", help="Edit settings.yaml")
    config_parser.add_argument(
        "--editor",
        help="Editor to use (default: from settings or vim)",
    )

    list_parser = subparsers.add_parser("list", help="List available commands")
    list_mode = list_parser.add_mutually_exclusive_group()
    list_mode.add_argument("--all", action="store_true", help="One name per line, no headings")
    list_mode.add_argument(
        "--porcelain",
        action="store_true",
        help="Main porcelain commands from the category table",
    )

    resolve_parser = subparsers.add_parser(
        "resolve", help="Suggest or autocorrect a command name that did not resolve"
    )
    resolve_parser.add_argument("name")

    which_parser = subparsers.add_parser("which", help="Show the executable behind a command")
    which_parser.add_argument("name")

    ref_parser = subparsers.add_parser(
        "ref-hint", help="Suggest remote-tracking refs for an unknown ref"
    )
    ref_parser.add_argument("ref")
    ref_parser.add_argument(
        "--git-dir",
        default=".git",
        help="Repository directory to read refs from (default: .git)",
    )
    ref_parser.add_argument(
        "--refs-file",
        help="Read '<oid> <refname>' lines from this file ('-' for stdin) instead",
    )
    ref_parser.add_argument("--command", help="Command name to report (default: tool name)")
    ref_parser.add_argument("--error", default="unknown revision", help="Error to report")

    return parser


def _load_settings() -> ResolverSettings:
    """Load settings from ~/.cmdguess or fall back to defaults."""
    home_settings = CMDGUESS_HOME.expanduser() / "settings.yaml"
    local_settings = Path("./config/settings.yaml")

    for path in (home_settings, local_settings):
        if path.exists():
            return load_settings(path)

    return ResolverSettings()


def _run_ref_hint(args: argparse.Namespace, context: ResolutionContext) -> NoReturn:
    command = args.command or context.tool_name
    if args.refs_file == "-":
        help_unknown_ref(args.ref, command, args.error, parse_ref_lines(sys.stdin))
    if args.refs_file:
        with open(args.refs_file) as f:
            help_unknown_ref(args.ref, command, args.error, parse_ref_lines(f))
    help_unknown_ref(args.ref, command, args.error, iter_refs(Path(args.git_dir)))


def main() -> int:
    """Run the CLI."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "init":
        run_init(tool_name=args.tool)
        return 0

    try:
        settings = _load_settings()
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    if args.command == "config":
        return run_config(editor=args.editor or settings.editor)

    context = ResolutionContext.from_settings(settings)

    try:
        if args.command == "list":
            if args.all:
                list_all_cmds(context)
            elif args.porcelain:
                list_porcelain_cmds(context)
            else:
                list_commands(context)
            return 0

        if args.command == "resolve":
            print(help_unknown_cmd(args.name, context))
            return 0

        if args.command == "which":
            return run_which(args.name, context)

        if args.command == "ref-hint":
            _run_ref_hint(args, context)
    except (RefFormatError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
