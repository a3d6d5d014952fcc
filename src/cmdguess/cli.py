"""Shared logic for CLI subcommands."""

import subprocess
import sys
from pathlib import Path

import yaml

from cmdguess.catalog import Catalog
from cmdguess.categories import porcelain_commands
from cmdguess.config import CMDGUESS_HOME, VALID_EDITORS, ResolutionContext, load_settings
from cmdguess.exceptions import ConfigError
from cmdguess.suggest import help_unknown_cmd

AUTOCORRECT_HELP = """\
# help.autocorrect: 0 = off, negative = immediate, positive = wait N tenths
# of a second, or one of: never, immediate, prompt
"""


def settings_path() -> Path:
    return CMDGUESS_HOME.expanduser() / "settings.yaml"


def default_settings_yaml(tool_name: str = "git") -> str:
    """Render a starter settings.yaml for a tool suite."""
    data = {
        "tool": {"name": tool_name, "prefix": f"{tool_name}-"},
        "help": {"autocorrect": 0},
        "core": {"editor": "vim"},
        "alias": {},
    }
    return AUTOCORRECT_HELP + yaml.safe_dump(data, sort_keys=False)


def run_init(tool_name: str = "git") -> Path:
    """Write a starter settings.yaml unless one is already there."""
    path = settings_path()
    if path.exists():
        print(f"Already initialized: {path}")
        return path

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(default_settings_yaml(tool_name))
    print(f"Created {path}")
    return path


def run_config(editor: str) -> int:
    """Edit settings.yaml, then check that it still loads."""
    if editor not in VALID_EDITORS:
        print(f"Unknown editor: {editor}. Must be one of {VALID_EDITORS}")
        return 1

    path = settings_path()
    if not path.exists():
        print(f"No settings at {path}. Run 'cmdguess init' first.")
        return 1

    subprocess.run([editor, str(path)])
    try:
        settings = load_settings(path)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    print(f"Settings OK: tool '{settings.tool_name}', autocorrect {settings.autocorrect}")
    return 0


def _print_names(cmds: Catalog) -> None:
    for name in cmds.names():
        print(f"  {name}")


def list_commands(context: ResolutionContext) -> None:
    """Print main and other commands under their own headings."""
    main_cmds, other_cmds = context.load_command_list()
    tool = context.tool_name

    if len(main_cmds):
        print(f"available {tool} commands in '{context.exec_path}'")
        print()
        _print_names(main_cmds)
        print()

    if len(other_cmds):
        print(f"{tool} commands available from elsewhere on your $PATH")
        print()
        _print_names(other_cmds)
        print()


def list_all_cmds(context: ResolutionContext) -> None:
    """Print every command name, one per line."""
    main_cmds, other_cmds = context.load_command_list()
    for name in main_cmds.names() + other_cmds.names():
        print(name)


def list_porcelain_cmds(context: ResolutionContext) -> None:
    for name in porcelain_commands(context.category_table):
        print(name)


def run_which(name: str, context: ResolutionContext) -> int:
    """Print where a command lives, correcting the name if needed.

    Unknown names go through help_unknown_cmd, which exits unless
    autocorrect picks a replacement.
    """
    path = context.locate(name)
    if path is None and name not in context.aliases:
        name = help_unknown_cmd(name, context)
        path = context.locate(name)

    if path is not None:
        print(path)
        return 0
    if name in context.aliases:
        print(f"'{name}' is aliased to '{context.aliases[name]}'")
        return 0

    print(f"{context.tool_name}: cannot locate '{name}'", file=sys.stderr)
    return 1
