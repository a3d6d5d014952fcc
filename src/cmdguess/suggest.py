"""Unknown-command suggestions and autocorrect."""

import sys
import threading
from dataclasses import dataclass
from itertools import takewhile
from typing import NoReturn

from prompt_toolkit.shortcuts import confirm

from cmdguess.catalog import Catalog
from cmdguess.categories import common_commands
from cmdguess.config import ResolutionContext

# An empirically derived magic number
SIMILARITY_FLOOR = 7

SWAP_COST = 0
SUBSTITUTION_COST = 2
INSERTION_COST = 1
DELETION_COST = 3

BAD_INTERPRETER_ADVICE = (
    "'{cmd}' appears to be a {tool} command, but we were not\n"
    "able to execute it. Maybe {prefix}{cmd} is broken?"
)


def similar_enough(score: int) -> bool:
    """Whether a score is close enough to suggest."""
    return score < SIMILARITY_FLOOR


def levenshtein(
    string1: str,
    string2: str,
    swap: int,
    substitution: int,
    insertion: int,
    deletion: int,
) -> int:
    """Weighted edit distance from string1 to string2.

    Adjacent transpositions cost `swap`. `insertion` is charged for each
    character string2 has that string1 lacks, `deletion` for each extra
    character in string1.
    """
    len2 = len(string2)
    row0 = [0] * (len2 + 1)
    row1 = [j * insertion for j in range(len2 + 1)]
    row2 = [0] * (len2 + 1)

    for i, ch1 in enumerate(string1):
        row2[0] = (i + 1) * deletion
        for j, ch2 in enumerate(string2):
            cost = row1[j] + substitution * (ch1 != ch2)
            if (
                i > 0
                and j > 0
                and string1[i - 1] == ch2
                and ch1 == string2[j - 1]
                and cost > row0[j - 1] + swap
            ):
                cost = row0[j - 1] + swap
            cost = min(cost, row1[j + 1] + deletion, row2[j] + insertion)
            row2[j + 1] = cost
        row0, row1, row2 = row1, row2, row0

    return row1[len2]


@dataclass(frozen=True)
class NoCommandsFound:
    """The catalog is empty: the installation is broken."""


@dataclass(frozen=True)
class FatalBadInterpreter:
    """The command exists, so running it failed for another reason."""

    name: str


@dataclass(frozen=True)
class AutoAccepted:
    """Proceed with the corrected command."""

    name: str
    autocorrect: int


@dataclass(frozen=True)
class Suggestions:
    """Resolution failed; names holds the closest commands, if any."""

    names: tuple[str, ...] = ()
    best_similarity: int = SIMILARITY_FLOOR + 1


Outcome = NoCommandsFound | FatalBadInterpreter | AutoAccepted | Suggestions


class SuggestionEngine:
    """Ranks known commands against a name that failed to resolve."""

    def __init__(self, context: ResolutionContext) -> None:
        self._context = context

    def merged_command_set(self) -> Catalog:
        """Main commands, aliases and other commands, sorted and unique."""
        main_cmds, other_cmds = self._context.load_command_list()
        main_cmds.extend(self._context.alias_catalog())
        main_cmds.extend(other_cmds)
        main_cmds.sort()
        main_cmds.uniq()
        return main_cmds

    def score(self, cmd: str, commands: Catalog) -> dict[str, int]:
        """Score every command; lower is closer.

        A common command that starts with cmd scores 0. Anything else
        scores its edit distance plus one. commands must be sorted by name.
        """
        common = common_commands(self._context.category_table)
        scores: dict[str, int] = {}
        n = 0
        for entry in commands:
            candidate = entry.name
            while n < len(common) and common[n] < candidate:
                n += 1
            if n < len(common) and common[n] == candidate:
                n += 1
                if candidate.startswith(cmd):
                    scores[candidate] = 0
                    continue
            scores[candidate] = (
                levenshtein(
                    cmd,
                    candidate,
                    SWAP_COST,
                    SUBSTITUTION_COST,
                    INSERTION_COST,
                    DELETION_COST,
                )
                + 1
            )
        return scores

    def rank(self, cmd: str, commands: Catalog) -> Outcome:
        """Decide what to do about cmd given a sorted, unique catalog."""
        if not len(commands):
            return NoCommandsFound()
        if cmd in commands:
            return FatalBadInterpreter(cmd)

        scores = self.score(cmd, commands)
        ranked = sorted(commands, key=lambda entry: (scores[entry.name], entry.tag, entry.name))

        prefix_run = sum(1 for _ in takewhile(lambda e: scores[e.name] == 0, ranked))
        if prefix_run == len(ranked):
            # prefix of everything: too ambiguous to say anything
            best_similarity = SIMILARITY_FLOOR + 1
            candidates: list[str] = []
        else:
            best_similarity = scores[ranked[prefix_run].name]
            tied = takewhile(lambda e: scores[e.name] == best_similarity, ranked[prefix_run:])
            candidates = [entry.name for entry in ranked[:prefix_run]]
            candidates += [entry.name for entry in tied]

        autocorrect = self._context.autocorrect
        if autocorrect and prefix_run == 1 and len(ranked) > 1:
            # the only common command starting with cmd
            return AutoAccepted(ranked[0].name, autocorrect)
        if autocorrect and len(candidates) == 1 and similar_enough(best_similarity):
            return AutoAccepted(candidates[0], autocorrect)
        if similar_enough(best_similarity):
            return Suggestions(tuple(candidates), best_similarity)
        return Suggestions((), best_similarity)

    def resolve_unknown(self, cmd: str) -> Outcome:
        """Scan for commands and rank them against cmd."""
        return self.rank(cmd, self.merged_command_set())


class AutocorrectDelay:
    """Blocking pause before running a guessed command.

    cancel() ends the wait early, e.g. from a signal handler. Ctrl-C
    interrupts it like any other blocking call.
    """

    def __init__(self, tenths: int) -> None:
        self.seconds = max(tenths, 0) / 10
        self._cancelled = threading.Event()

    def wait(self) -> bool:
        """Block for the delay. Return False if it was cancelled."""
        return not self._cancelled.wait(self.seconds)

    def cancel(self) -> None:
        self._cancelled.set()


def _die(message: str) -> NoReturn:
    print(f"fatal: {message}", file=sys.stderr)
    sys.exit(128)


def _not_a_command(cmd: str, tool: str) -> None:
    print(f"{tool}: '{cmd}' is not a {tool} command. See '{tool} --help'.", file=sys.stderr)


def _accept(cmd: str, outcome: AutoAccepted, context: ResolutionContext) -> bool:
    """Announce the correction and wait or ask as configured."""
    print(
        f"WARNING: You called a {context.tool_name.capitalize()} command named "
        f"'{cmd}', which does not exist.",
        file=sys.stderr,
    )
    if context.autocorrect_prompt:
        if not sys.stdin.isatty():
            print("Cannot ask for confirmation: stdin is not a terminal.", file=sys.stderr)
            return False
        return confirm(f"Run '{outcome.name}' instead?")
    if outcome.autocorrect < 0:
        print(
            f"Continuing under the assumption that you meant '{outcome.name}'.",
            file=sys.stderr,
        )
        return True
    print(
        f"Continuing in {outcome.autocorrect / 10:0.1f} seconds, "
        f"assuming that you meant '{outcome.name}'.",
        file=sys.stderr,
    )
    return AutocorrectDelay(outcome.autocorrect).wait()


def help_unknown_cmd(cmd: str, context: ResolutionContext) -> str:
    """Report an unknown command and exit, unless it can be corrected.

    Returns the corrected command name when autocorrect accepts a guess.
    Every other outcome terminates the process.
    """
    outcome = SuggestionEngine(context).resolve_unknown(cmd)
    tool = context.tool_name

    if isinstance(outcome, NoCommandsFound):
        _die(f"Uh oh. Your system reports no {tool.capitalize()} commands at all.")

    if isinstance(outcome, FatalBadInterpreter):
        _die(BAD_INTERPRETER_ADVICE.format(cmd=cmd, tool=tool, prefix=context.prefix))

    if isinstance(outcome, AutoAccepted):
        if _accept(cmd, outcome, context):
            return outcome.name
        _not_a_command(cmd, tool)
        sys.exit(1)

    _not_a_command(cmd, tool)
    if outcome.names:
        if len(outcome.names) == 1:
            print("\nThe most similar command is", file=sys.stderr)
        else:
            print("\nThe most similar commands are", file=sys.stderr)
        for name in outcome.names:
            print(f"\t{name}", file=sys.stderr)
    sys.exit(1)
