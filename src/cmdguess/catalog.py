"""Command catalogs: directory scanning, deduplication and exclusion."""

import os
import stat
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

DEFAULT_PREFIX = "git-"
EXE_SUFFIX = ".exe"


@dataclass(frozen=True)
class NameEntry:
    """A command name with a numeric tag (the name's length in bytes)."""

    name: str
    tag: int = 0

    @classmethod
    def of(cls, name: str) -> "NameEntry":
        """Build an entry tagged with the byte length of the name."""
        return cls(name=name, tag=len(os.fsencode(name)))


class Catalog:
    """Ordered collection of command names from one provenance.

    Populate with add() or extend(), then sort() and uniq() once. After
    that the catalog is sorted by name and holds no duplicates, which is
    what exclude() relies on.
    """

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._entries: list[NameEntry] = [NameEntry.of(name) for name in names]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[NameEntry]:
        return iter(self._entries)

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self._entries)

    def __repr__(self) -> str:
        return f"Catalog({self.names()!r})"

    def add(self, name: str) -> None:
        """Append a name."""
        self._entries.append(NameEntry.of(name))

    def extend(self, other: "Catalog") -> None:
        """Move every entry of other onto the end of this catalog."""
        self._entries.extend(other._entries)
        other._entries = []

    def names(self) -> list[str]:
        """Return the names in catalog order."""
        return [entry.name for entry in self._entries]

    def sort(self) -> None:
        """Sort entries by name."""
        self._entries.sort(key=lambda entry: entry.name)

    def uniq(self) -> None:
        """Collapse runs of equal names, keeping the first of each run."""
        if not self._entries:
            return
        kept = [self._entries[0]]
        for entry in self._entries[1:]:
            if entry.name != kept[-1].name:
                kept.append(entry)
        self._entries = kept

    def exclude(self, excludes: "Catalog") -> None:
        """Drop every name that also appears in excludes.

        Both catalogs must be sorted by name. Walks them side by side, so
        the cost is linear in their combined size.
        """
        entries = self._entries
        others = excludes._entries
        kept: list[NameEntry] = []
        ci = ei = 0
        while ci < len(entries) and ei < len(others):
            name = entries[ci].name
            other = others[ei].name
            if name < other:
                kept.append(entries[ci])
                ci += 1
            elif name == other:
                ci += 1
            else:
                ei += 1
        kept.extend(entries[ci:])
        self._entries = kept


def is_executable(path: Path) -> bool:
    """Check that path is a regular file the current user may execute."""
    try:
        st = path.stat()
    except OSError:
        return False
    return stat.S_ISREG(st.st_mode) and os.access(path, os.X_OK)


def list_commands_in_dir(catalog: Catalog, path: str | Path, prefix: str = DEFAULT_PREFIX) -> None:
    """Add every executable `<prefix><name>` found in path to catalog.

    Directories that cannot be read are skipped: missing search path
    entries are normal.
    """
    directory = Path(path)
    try:
        children = list(directory.iterdir())
    except OSError:
        return

    for child in children:
        if not child.name.startswith(prefix):
            continue
        if not is_executable(child):
            continue
        name = child.name[len(prefix) :].removesuffix(EXE_SUFFIX)
        if name:
            catalog.add(name)


def split_search_path(search_path: str | None, pathsep: str = os.pathsep) -> list[str]:
    """Split a PATH-style string, dropping empty components."""
    if not search_path:
        return []
    return [component for component in search_path.split(pathsep) if component]


def load_command_list(
    prefix: str = DEFAULT_PREFIX,
    exec_path: str | None = None,
    search_path: str | None = None,
    pathsep: str = os.pathsep,
) -> tuple[Catalog, Catalog]:
    """Scan the install directory and the search path for commands.

    Returns (main, other): main holds the commands found in exec_path,
    other the ones found only elsewhere on search_path.
    """
    main_cmds = Catalog()
    other_cmds = Catalog()

    if exec_path:
        list_commands_in_dir(main_cmds, exec_path, prefix)
        main_cmds.sort()
        main_cmds.uniq()

    if search_path is not None:
        for component in split_search_path(search_path, pathsep):
            if not exec_path or component != os.fspath(exec_path):
                list_commands_in_dir(other_cmds, component, prefix)
        other_cmds.sort()
        other_cmds.uniq()

    other_cmds.exclude(main_cmds)
    return main_cmds, other_cmds


def locate_command(
    name: str,
    prefix: str = DEFAULT_PREFIX,
    exec_path: str | None = None,
    search_path: str | None = None,
    pathsep: str = os.pathsep,
) -> Path | None:
    """Return the path of the executable backing a command, if any.

    The install directory wins over the search path.
    """
    directories = [exec_path] if exec_path else []
    directories.extend(split_search_path(search_path, pathsep))
    filename = f"{prefix}{name}"
    for directory in directories:
        for candidate in (Path(directory) / filename, Path(directory) / f"{filename}{EXE_SUFFIX}"):
            if is_executable(candidate):
                return candidate
    return None
