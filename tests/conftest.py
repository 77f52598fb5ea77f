from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_home(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Prevent developer machine `~/.localhistory/config.json` and env from influencing tests."""

    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in (
        "LOCALHISTORY_DIR",
        "LOCALHISTORY_EXCLUDE_PATHS",
        "LOCALHISTORY_EXCLUDE_FILES",
        "LOCALHISTORY_LOG_DIR",
        "LOCALHISTORY_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def repo_dir(tmp_path) -> Path:
    """An empty, writable repository location."""
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo


@pytest.fixture
def workspace(tmp_path) -> Path:
    """A directory holding a sample file and a symlink to it."""
    work = tmp_path / "work"
    (work / "assets").mkdir(parents=True)
    sample = work / "assets" / "sample_file.txt"
    sample.write_text("first line\n")
    (work / "assets" / "sample_file_symlink").symlink_to(sample)
    return work


@pytest.fixture
def git_revs():
    """List commits touching a source path inside a repository location."""

    def _git_revs(location: Path, path: Path | str) -> list[str]:
        key = os.path.abspath(path).lstrip("/")
        out = subprocess.run(
            ["git", "rev-list", "HEAD", "--", key],
            cwd=location,
            capture_output=True,
            text=True,
        )
        return out.stdout.split()

    return _git_revs


@pytest.fixture
def git_head():
    """Current HEAD of a repository location ("" when there is none)."""

    def _git_head(location: Path) -> str:
        out = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=location,
            capture_output=True,
            text=True,
        )
        return out.stdout.strip()

    return _git_head


@pytest.fixture
def change_file():
    """Append a line to a file."""

    def _change_file(path: Path, line: str = "Another line added\n") -> None:
        with open(path, "a") as f:
            f.write(line)

    return _change_file
