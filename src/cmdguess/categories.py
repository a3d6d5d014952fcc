"""Static command category table."""

from dataclasses import dataclass

MAIN_PORCELAIN = "mainporcelain"

CATEGORIES = (
    MAIN_PORCELAIN,
    "ancillarymanipulators",
    "ancillaryinterrogators",
    "foreignscminterface",
    "plumbingmanipulators",
    "plumbinginterrogators",
    "synchingrepositories",
    "purehelpers",
)

GROUPS = ("init", "worktree", "info", "history", "remote")


@dataclass(frozen=True)
class CommandHelp:
    """One row of the category table."""

    name: str
    help: str
    category: str
    group: str | None = None


DEFAULT_TABLE: tuple[CommandHelp, ...] = (
    CommandHelp("add", "Add file contents to the index", MAIN_PORCELAIN, "worktree"),
    CommandHelp("am", "Apply a series of patches from a mailbox", MAIN_PORCELAIN),
    CommandHelp("archive", "Create an archive of files from a named tree", MAIN_PORCELAIN),
    CommandHelp("bisect", "Find the change that introduced a bug", MAIN_PORCELAIN, "info"),
    CommandHelp("branch", "List, create, or delete branches", MAIN_PORCELAIN, "history"),
    CommandHelp("bundle", "Move objects and refs by archive", MAIN_PORCELAIN),
    CommandHelp(
        "checkout", "Switch branches or restore working tree files", MAIN_PORCELAIN, "history"
    ),
    CommandHelp(
        "cherry-pick", "Apply the changes introduced by some existing commits", MAIN_PORCELAIN
    ),
    CommandHelp("clean", "Remove untracked files from the working tree", MAIN_PORCELAIN),
    CommandHelp("clone", "Clone a repository into a new directory", MAIN_PORCELAIN, "init"),
    CommandHelp("commit", "Record changes to the repository", MAIN_PORCELAIN, "history"),
    CommandHelp("config", "Get and set repository or global options", "ancillarymanipulators"),
    CommandHelp("describe", "Give an object a human readable name", MAIN_PORCELAIN),
    CommandHelp(
        "diff",
        "Show changes between commits, commit and working tree, etc",
        MAIN_PORCELAIN,
        "history",
    ),
    CommandHelp(
        "fetch", "Download objects and refs from another repository", MAIN_PORCELAIN, "remote"
    ),
    CommandHelp("format-patch", "Prepare patches for e-mail submission", MAIN_PORCELAIN),
    CommandHelp(
        "gc", "Cleanup unnecessary files and optimize the local repository", MAIN_PORCELAIN
    ),
    CommandHelp("grep", "Print lines matching a pattern", MAIN_PORCELAIN, "info"),
    CommandHelp(
        "init",
        "Create an empty repository or reinitialize an existing one",
        MAIN_PORCELAIN,
        "init",
    ),
    CommandHelp("log", "Show commit logs", MAIN_PORCELAIN, "info"),
    CommandHelp(
        "ls-files",
        "Show information about files in the index and the working tree",
        "plumbinginterrogators",
    ),
    CommandHelp(
        "merge", "Join two or more development histories together", MAIN_PORCELAIN, "history"
    ),
    CommandHelp(
        "mv", "Move or rename a file, a directory, or a symlink", MAIN_PORCELAIN, "worktree"
    ),
    CommandHelp("notes", "Add or inspect object notes", MAIN_PORCELAIN),
    CommandHelp(
        "pull",
        "Fetch from and integrate with another repository or a local branch",
        MAIN_PORCELAIN,
        "remote",
    ),
    CommandHelp(
        "push", "Update remote refs along with associated objects", MAIN_PORCELAIN, "remote"
    ),
    CommandHelp("rebase", "Reapply commits on top of another base tip", MAIN_PORCELAIN, "history"),
    CommandHelp("remote", "Manage set of tracked repositories", "ancillarymanipulators"),
    CommandHelp("reset", "Reset current HEAD to the specified state", MAIN_PORCELAIN, "worktree"),
    CommandHelp("rev-parse", "Pick out and massage parameters", "plumbinginterrogators"),
    CommandHelp("revert", "Revert some existing commits", MAIN_PORCELAIN),
    CommandHelp(
        "rm", "Remove files from the working tree and from the index", MAIN_PORCELAIN, "worktree"
    ),
    CommandHelp("shortlog", "Summarize log output", MAIN_PORCELAIN),
    CommandHelp("show", "Show various types of objects", MAIN_PORCELAIN, "info"),
    CommandHelp("stash", "Stash the changes in a dirty working directory away", MAIN_PORCELAIN),
    CommandHelp("status", "Show the working tree status", MAIN_PORCELAIN, "info"),
    CommandHelp("submodule", "Initialize, update or inspect submodules", MAIN_PORCELAIN),
    CommandHelp("tag", "Create, list, delete or verify a tag object", MAIN_PORCELAIN, "history"),
    CommandHelp("worktree", "Manage multiple working trees", MAIN_PORCELAIN),
)


def common_commands(table: tuple[CommandHelp, ...] = DEFAULT_TABLE) -> list[str]:
    """Names of grouped main porcelain commands, sorted by name."""
    return sorted(
        cmd.name for cmd in table if cmd.category == MAIN_PORCELAIN and cmd.group is not None
    )


def porcelain_commands(table: tuple[CommandHelp, ...] = DEFAULT_TABLE) -> list[str]:
    """Names of all main porcelain commands in table order."""
    return [cmd.name for cmd in table if cmd.category == MAIN_PORCELAIN]
