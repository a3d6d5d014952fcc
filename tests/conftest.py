"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def make_commands() -> Callable[..., Path]:
    """Return a helper that creates `<prefix><name>` files in a directory."""

    def _make(
        directory: Path,
        *names: str,
        prefix: str = "git-",
        executable: bool = True,
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        for name in names:
            path = directory / f"{prefix}{name}"
            path.write_text("#!/bin/sh\n")
            path.chmod(0o755 if executable else 0o644)
        return directory

    return _make
