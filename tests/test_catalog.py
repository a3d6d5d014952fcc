"""Tests for command catalogs and directory scanning."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from cmdguess.catalog import (
    Catalog,
    NameEntry,
    list_commands_in_dir,
    load_command_list,
    locate_command,
    split_search_path,
)


def sorted_catalog(*names: str) -> Catalog:
    catalog = Catalog(names)
    catalog.sort()
    catalog.uniq()
    return catalog


class TestNameEntry:
    def test_tag_is_byte_length(self) -> None:
        assert NameEntry.of("status").tag == 6
        assert NameEntry.of("café").tag == 5

    def test_is_immutable(self) -> None:
        entry = NameEntry.of("log")
        with pytest.raises(AttributeError):
            entry.tag = 0  # type: ignore[misc]


class TestCatalog:
    def test_sort_orders_by_name(self) -> None:
        catalog = Catalog(["status", "add", "commit"])
        catalog.sort()
        assert catalog.names() == ["add", "commit", "status"]

    def test_uniq_collapses_runs(self) -> None:
        catalog = Catalog(["add", "add", "commit", "log", "log", "log"])
        catalog.uniq()
        assert catalog.names() == ["add", "commit", "log"]

    def test_uniq_keeps_first_entry(self) -> None:
        first = NameEntry("add", 1)
        catalog = Catalog()
        catalog._entries = [first, NameEntry("add", 2)]
        catalog.uniq()
        assert list(catalog) == [first]

    def test_uniq_is_idempotent(self) -> None:
        catalog = sorted_catalog("log", "add", "log", "status")
        before = list(catalog)
        catalog.uniq()
        assert list(catalog) == before

    def test_uniq_on_empty_catalog(self) -> None:
        catalog = Catalog()
        catalog.uniq()
        assert len(catalog) == 0

    def test_extend_moves_entries(self) -> None:
        catalog = Catalog(["add"])
        other = Catalog(["log"])
        catalog.extend(other)
        assert catalog.names() == ["add", "log"]
        assert len(other) == 0

    def test_contains(self) -> None:
        catalog = Catalog(["add", "log"])
        assert "log" in catalog
        assert "lo" not in catalog


class TestExclude:
    def test_removes_shared_names(self) -> None:
        cmds = sorted_catalog("add", "bisect", "commit", "log")
        excludes = sorted_catalog("bisect", "log", "zip")
        cmds.exclude(excludes)
        assert cmds.names() == ["add", "commit"]

    def test_keeps_everything_when_excludes_empty(self) -> None:
        cmds = sorted_catalog("add", "log")
        cmds.exclude(Catalog())
        assert cmds.names() == ["add", "log"]

    def test_empty_catalog_stays_empty(self) -> None:
        cmds = Catalog()
        cmds.exclude(sorted_catalog("add"))
        assert cmds.names() == []

    def test_removes_duplicates_of_excluded_name(self) -> None:
        cmds = Catalog(["add", "log", "log"])
        cmds.exclude(sorted_catalog("log"))
        assert cmds.names() == ["add"]

    @pytest.mark.parametrize(
        ("names", "excluded"),
        [
            ([], []),
            (["a"], []),
            ([], ["a"]),
            (["a", "b", "c"], ["a", "b", "c"]),
            (["a", "c", "e", "g"], ["b", "c", "d", "g", "h"]),
            (["x", "y"], ["a", "b"]),
            (["fetch", "pull", "push"], ["fetch-pack", "pull", "push-x"]),
        ],
    )
    def test_matches_naive_filter(self, names: list[str], excluded: list[str]) -> None:
        cmds = sorted_catalog(*names)
        excludes = sorted_catalog(*excluded)
        expected = [name for name in cmds.names() if name not in excludes.names()]
        cmds.exclude(excludes)
        assert cmds.names() == expected
        assert not set(cmds.names()) & set(excludes.names())


class TestListCommandsInDir:
    def test_collects_prefixed_executables(
        self, tmp_path: Path, make_commands: Callable[..., Path]
    ) -> None:
        bin_dir = make_commands(tmp_path / "bin", "status", "commit")
        (bin_dir / "unrelated").write_text("")
        catalog = Catalog()
        list_commands_in_dir(catalog, bin_dir)
        catalog.sort()
        assert catalog.names() == ["commit", "status"]

    def test_skips_non_executable_files(
        self, tmp_path: Path, make_commands: Callable[..., Path]
    ) -> None:
        bin_dir = make_commands(tmp_path / "bin", "status")
        make_commands(bin_dir, "notes", executable=False)
        catalog = Catalog()
        list_commands_in_dir(catalog, bin_dir)
        assert catalog.names() == ["status"]

    def test_skips_directories(self, tmp_path: Path) -> None:
        (tmp_path / "git-subdir").mkdir()
        catalog = Catalog()
        list_commands_in_dir(catalog, tmp_path)
        assert catalog.names() == []

    def test_strips_exe_suffix(self, tmp_path: Path, make_commands: Callable[..., Path]) -> None:
        make_commands(tmp_path, "gui.exe")
        catalog = Catalog()
        list_commands_in_dir(catalog, tmp_path)
        assert catalog.names() == ["gui"]

    def test_ignores_bare_prefix(self, tmp_path: Path, make_commands: Callable[..., Path]) -> None:
        make_commands(tmp_path, "")
        catalog = Catalog()
        list_commands_in_dir(catalog, tmp_path)
        assert catalog.names() == []

    def test_custom_prefix(self, tmp_path: Path, make_commands: Callable[..., Path]) -> None:
        make_commands(tmp_path, "deploy", prefix="tool-")
        make_commands(tmp_path, "status")
        catalog = Catalog()
        list_commands_in_dir(catalog, tmp_path, prefix="tool-")
        assert catalog.names() == ["deploy"]

    def test_missing_directory_is_silent(self, tmp_path: Path) -> None:
        catalog = Catalog()
        list_commands_in_dir(catalog, tmp_path / "nope")
        assert len(catalog) == 0


class TestLoadCommandList:
    def test_splits_main_and_other(
        self, tmp_path: Path, make_commands: Callable[..., Path]
    ) -> None:
        exec_dir = make_commands(tmp_path / "libexec", "status", "commit", "log")
        path_a = make_commands(tmp_path / "a", "status", "lfs")
        path_b = make_commands(tmp_path / "b", "lfs", "absorb")
        search_path = os.pathsep.join([str(path_a), str(exec_dir), str(path_b)])

        main_cmds, other_cmds = load_command_list(
            exec_path=str(exec_dir), search_path=search_path
        )

        assert main_cmds.names() == ["commit", "log", "status"]
        assert other_cmds.names() == ["absorb", "lfs"]

    def test_exec_path_on_search_path_is_not_other(
        self, tmp_path: Path, make_commands: Callable[..., Path]
    ) -> None:
        exec_dir = make_commands(tmp_path / "libexec", "status")
        main_cmds, other_cmds = load_command_list(
            exec_path=str(exec_dir), search_path=str(exec_dir)
        )
        assert main_cmds.names() == ["status"]
        assert other_cmds.names() == []

    def test_without_exec_path(self, tmp_path: Path, make_commands: Callable[..., Path]) -> None:
        path_a = make_commands(tmp_path / "a", "lfs")
        main_cmds, other_cmds = load_command_list(search_path=str(path_a))
        assert main_cmds.names() == []
        assert other_cmds.names() == ["lfs"]

    def test_without_search_path(self, tmp_path: Path, make_commands: Callable[..., Path]) -> None:
        exec_dir = make_commands(tmp_path / "libexec", "status")
        main_cmds, other_cmds = load_command_list(exec_path=str(exec_dir))
        assert main_cmds.names() == ["status"]
        assert other_cmds.names() == []

    def test_custom_separator(self, tmp_path: Path, make_commands: Callable[..., Path]) -> None:
        path_a = make_commands(tmp_path / "a", "lfs")
        path_b = make_commands(tmp_path / "b", "absorb")
        _, other_cmds = load_command_list(
            search_path=f"{path_a};{tmp_path / 'missing'};{path_b}", pathsep=";"
        )
        assert other_cmds.names() == ["absorb", "lfs"]


class TestLocateCommand:
    def test_prefers_exec_path(self, tmp_path: Path, make_commands: Callable[..., Path]) -> None:
        exec_dir = make_commands(tmp_path / "libexec", "status")
        path_a = make_commands(tmp_path / "a", "status")
        found = locate_command("status", exec_path=str(exec_dir), search_path=str(path_a))
        assert found == exec_dir / "git-status"

    def test_falls_back_to_search_path(
        self, tmp_path: Path, make_commands: Callable[..., Path]
    ) -> None:
        path_a = make_commands(tmp_path / "a", "lfs")
        found = locate_command("lfs", exec_path=str(tmp_path / "libexec"), search_path=str(path_a))
        assert found == path_a / "git-lfs"

    def test_returns_none_when_missing(self, tmp_path: Path) -> None:
        assert locate_command("status", search_path=str(tmp_path)) is None


def test_split_search_path_drops_empty_components() -> None:
    assert split_search_path("/a::/b:", ":") == ["/a", "/b"]
    assert split_search_path(None) == []
