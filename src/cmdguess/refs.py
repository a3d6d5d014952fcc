"""Hints for ref names that exist only on a remote."""

import sys
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import NoReturn

from cmdguess.exceptions import RefFormatError

REMOTES_PREFIX = "refs/remotes/"


@dataclass(frozen=True)
class Ref:
    """A full ref name and the object id it points at."""

    name: str
    oid: str


def parse_ref_lines(lines: Iterable[str]) -> Iterator[Ref]:
    """Yield refs from `<oid> <refname>` lines.

    Blank lines and `#` comments are skipped, as are peeled `^` lines
    from packed-refs files.
    """
    for lineno, raw in enumerate(lines, 1):
        line = raw.strip()
        if not line or line.startswith("#") or line.startswith("^"):
            continue
        parts = line.split()
        if len(parts) != 2:
            raise RefFormatError(line, lineno)
        oid, name = parts
        yield Ref(name=name, oid=oid)


def _iter_loose_refs(git_dir: Path) -> Iterator[Ref]:
    refs_dir = git_dir / "refs"
    if not refs_dir.is_dir():
        return
    for path in refs_dir.rglob("*"):
        if not path.is_file():
            continue
        try:
            oid = path.read_text().strip()
        except OSError:
            continue
        if oid:
            yield Ref(name=path.relative_to(git_dir).as_posix(), oid=oid)


def iter_refs(git_dir: Path) -> Iterator[Ref]:
    """Yield every ref of a repository, sorted by name.

    Loose refs under refs/ take precedence over entries in packed-refs.
    """
    found: dict[str, str] = {}
    packed = git_dir / "packed-refs"
    if packed.is_file():
        with open(packed) as f:
            for ref in parse_ref_lines(f):
                found[ref.name] = ref.oid
    for ref in _iter_loose_refs(git_dir):
        found[ref.name] = ref.oid
    for name in sorted(found):
        yield Ref(name=name, oid=found[name])


def guess_refs(ref: str, refs: Iterable[Ref]) -> list[str]:
    """Remote-tracking refs whose last path segment is ref.

    Names come back without the refs/remotes/ prefix, e.g. origin/main.
    """
    similar: list[str] = []
    for candidate in refs:
        if not candidate.name.startswith(REMOTES_PREFIX):
            continue
        if candidate.name.rsplit("/", 1)[-1] == ref:
            similar.append(candidate.name[len(REMOTES_PREFIX) :])
    return similar


def help_unknown_ref(ref: str, cmd: str, error: str, refs: Iterable[Ref]) -> NoReturn:
    """Report an unknown ref with remote-tracking lookalikes, then exit."""
    suggested = guess_refs(ref, refs)

    print(f"{cmd}: {ref} - {error}", file=sys.stderr)
    if suggested:
        if len(suggested) == 1:
            print("\nDid you mean this?", file=sys.stderr)
        else:
            print("\nDid you mean one of these?", file=sys.stderr)
        for name in suggested:
            print(f"\t{name}", file=sys.stderr)
    sys.exit(1)
