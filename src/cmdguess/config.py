"""YAML config loading, validation and the per-resolution context."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from cmdguess.catalog import Catalog, load_command_list, locate_command
from cmdguess.categories import CATEGORIES, DEFAULT_TABLE, GROUPS, CommandHelp
from cmdguess.exceptions import ConfigError

CMDGUESS_HOME = Path("~/.cmdguess")
VALID_EDITORS = ("vim", "nano", "emacs", "code")
AUTOCORRECT_WORDS = {"never": 0, "false": 0, "off": 0, "no": 0, "immediate": -1}
AUTOCORRECT_PROMPT = "prompt"


@dataclass
class ResolverSettings:
    """Settings from settings.yaml."""

    tool_name: str = "git"
    prefix: str = "git-"
    exec_path: str | None = None
    autocorrect: int = 0
    autocorrect_prompt: bool = False
    editor: str = "vim"
    aliases: dict[str, str] = field(default_factory=dict)
    category_table: tuple[CommandHelp, ...] = DEFAULT_TABLE


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML file."""
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return data


def parse_autocorrect(value: Any) -> tuple[int, bool]:
    """Resolve a help.autocorrect value into (autocorrect, prompt).

    Integers are taken as is: 0 disables autocorrect, a negative value
    accepts the guess at once, a positive value waits that many tenths
    of a second first.
    """
    if value is None or value is False:
        return 0, False
    if isinstance(value, bool):
        raise ConfigError(f"Invalid autocorrect value: {value!r}")
    if isinstance(value, int):
        return value, False
    if isinstance(value, str):
        word = value.strip().lower()
        if word == AUTOCORRECT_PROMPT:
            return -1, True
        if word in AUTOCORRECT_WORDS:
            return AUTOCORRECT_WORDS[word], False
        try:
            return int(word), False
        except ValueError:
            pass
    raise ConfigError(
        f"Invalid autocorrect value: {value!r}. Expected an integer, "
        f"'{AUTOCORRECT_PROMPT}', or one of {tuple(AUTOCORRECT_WORDS)}"
    )


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def _parse_aliases(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        raise ConfigError(f"'alias' must be a mapping, got {type(raw).__name__}")
    aliases: dict[str, str] = {}
    for name, target in raw.items():
        if not str(name):
            raise ConfigError("Alias names must not be empty")
        aliases[str(name)] = "" if target is None else str(target)
    return aliases


def _parse_categories(raw: Any) -> tuple[CommandHelp, ...]:
    if not isinstance(raw, list):
        raise ConfigError(f"'categories' must be a list, got {type(raw).__name__}")
    table: list[CommandHelp] = []
    for row in raw:
        if not isinstance(row, dict) or not row.get("name"):
            raise ConfigError(f"Category entry must be a mapping with a name: {row!r}")
        category = row.get("category", "")
        if category not in CATEGORIES:
            raise ConfigError(
                f"Invalid category for '{row['name']}': {category}. Must be one of {CATEGORIES}"
            )
        group = row.get("group")
        if group is not None and group not in GROUPS:
            raise ConfigError(
                f"Invalid group for '{row['name']}': {group}. Must be one of {GROUPS}"
            )
        table.append(
            CommandHelp(
                name=str(row["name"]),
                help=row.get("help", ""),
                category=category,
                group=group,
            )
        )
    return tuple(table)


def load_settings(path: Path) -> ResolverSettings:
    """Load and validate settings.yaml."""
    data = _load_yaml(path)
    tool = _section(data, "tool")
    help_section = _section(data, "help")
    core = _section(data, "core")

    tool_name = tool.get("name", "git")
    if not isinstance(tool_name, str) or not tool_name:
        raise ConfigError(f"Invalid tool name: {tool_name!r}")

    autocorrect, prompt = parse_autocorrect(help_section.get("autocorrect", 0))

    settings = ResolverSettings(
        tool_name=tool_name,
        prefix=tool.get("prefix", f"{tool_name}-"),
        exec_path=tool.get("exec_path"),
        autocorrect=autocorrect,
        autocorrect_prompt=prompt,
        editor=core.get("editor", "vim"),
        aliases=_parse_aliases(data.get("alias", {}) or {}),
    )
    if "categories" in data:
        settings.category_table = _parse_categories(data["categories"] or [])
    return settings


def exec_path_variable(tool_name: str) -> str:
    """Environment variable that overrides the install directory."""
    return f"{tool_name.upper().replace('-', '_')}_EXEC_PATH"


@dataclass
class ResolutionContext:
    """Everything one resolution request needs, read once up front."""

    tool_name: str = "git"
    prefix: str = "git-"
    exec_path: str | None = None
    search_path: str | None = None
    autocorrect: int = 0
    autocorrect_prompt: bool = False
    aliases: dict[str, str] = field(default_factory=dict)
    category_table: tuple[CommandHelp, ...] = DEFAULT_TABLE
    pathsep: str = os.pathsep

    @classmethod
    def from_settings(
        cls,
        settings: ResolverSettings,
        environ: Mapping[str, str] | None = None,
    ) -> "ResolutionContext":
        """Combine settings with the process environment."""
        env = os.environ if environ is None else environ
        return cls(
            tool_name=settings.tool_name,
            prefix=settings.prefix,
            exec_path=env.get(exec_path_variable(settings.tool_name)) or settings.exec_path,
            search_path=env.get("PATH"),
            autocorrect=settings.autocorrect,
            autocorrect_prompt=settings.autocorrect_prompt,
            aliases=dict(settings.aliases),
            category_table=settings.category_table,
        )

    def load_command_list(self) -> tuple[Catalog, Catalog]:
        """Scan for (main, other) command catalogs."""
        return load_command_list(
            prefix=self.prefix,
            exec_path=self.exec_path,
            search_path=self.search_path,
            pathsep=self.pathsep,
        )

    def alias_catalog(self) -> Catalog:
        """Catalog of user-defined alias names."""
        return Catalog(self.aliases)

    def locate(self, name: str) -> Path | None:
        """Find the executable for a command name."""
        return locate_command(
            name,
            prefix=self.prefix,
            exec_path=self.exec_path,
            search_path=self.search_path,
            pathsep=self.pathsep,
        )
