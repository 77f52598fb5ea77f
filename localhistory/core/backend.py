"""Git backend for LocalHistory.

Drives the `git` executable as a subprocess. The version store talks to the
backend only through this narrow interface (init, stage_and_commit_all,
list_revisions, log_records, show, checkout_path), so a library-backed
implementation could replace it without touching the engine.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..errors import BackendError
from ..utils.fs import ensure_dir
from ..utils.log import HistoryLog

GIT_DIR_NAME = ".git"

# Overrides any .gitattributes copied into the mirrored tree so snapshots are
# stored and restored byte for byte.
SNAPSHOT_ATTRIBUTES = "* -text -filter -diff -merge -ident -working-tree-encoding\n"

_RECORD_SEPARATOR = "\x1e"
_FIELD_SEPARATOR = "\x1f"

_IDENTITY = {
    "GIT_AUTHOR_NAME": "LocalHistory",
    "GIT_AUTHOR_EMAIL": "localhistory@localhost",
    "GIT_COMMITTER_NAME": "LocalHistory",
    "GIT_COMMITTER_EMAIL": "localhistory@localhost",
}


@dataclass
class GitResult:
    """Outcome of one git invocation."""
    returncode: int
    stdout: bytes
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    def raise_for(self, action: str, location: Path) -> None:
        if self.ok:
            return
        raise BackendError(
            f"{action} failed in {location}: {self.stderr.strip()}",
            returncode=self.returncode,
            stderr=self.stderr,
        )


class GitBackend:
    """Git repository rooted at a LocalHistory location."""

    def __init__(self, location: Path | str, log: HistoryLog | None = None, git: str = "git"):
        """Initialize backend.

        Args:
            location: Repository root (work tree)
            log: Log sink for backend failures
            git: git executable to run
        """
        self.location = Path(location)
        self.log = log or HistoryLog()
        self.git = git

    @property
    def git_dir(self) -> Path:
        return self.location / GIT_DIR_NAME

    def is_initialized(self) -> bool:
        return self.git_dir.exists()

    def init(self, message: str) -> None:
        """Create the repository and its initial empty commit.

        Content attributes are pinned to raw bytes before the first commit.

        Raises:
            BackendError: If git cannot create the repository
        """
        self._run("init", "-q", scoped=False).raise_for("git init", self.location)
        self.pin_attributes()
        self._run("commit", "-q", "--allow-empty", "-m", message).raise_for("initial commit", self.location)

    def pin_attributes(self) -> None:
        """Write `info/attributes` so in-tree attribute files cannot alter content."""
        attributes = self.git_dir / "info" / "attributes"
        if attributes.exists() and attributes.read_text(encoding="utf-8") == SNAPSHOT_ATTRIBUTES:
            return
        ensure_dir(attributes.parent)
        attributes.write_text(SNAPSHOT_ATTRIBUTES, encoding="utf-8")

    def stage_and_commit_all(self, message: str, allow_empty: bool = False) -> bool:
        """Stage every change under the location and commit it.

        Returns:
            True if a commit was created; False if there was nothing to
            commit or git failed (failures are logged, not raised)
        """
        # Ignore rules from copied .gitignore files never apply to snapshots.
        added = self._run("add", "-A", "-f", ".")
        if not added.ok:
            self.log.error(f"git add failed in {self.location}: {added.stderr.strip()}")
            return False

        if not allow_empty and self._run("diff", "--cached", "--quiet").ok:
            self.log.debug(f"Nothing to commit in {self.location}")
            return False

        args = ["commit", "-q", "-m", message]
        if allow_empty:
            args.insert(2, "--allow-empty")
        committed = self._run(*args)
        if not committed.ok:
            self.log.error(f"git commit failed in {self.location}: {committed.stderr.strip()}")
            return False
        return True

    def head(self) -> str | None:
        result = self._run("rev-parse", "--verify", "-q", "HEAD")
        if not result.ok:
            return None
        return result.text.strip() or None

    def list_revisions(self, key: str, max_count: int | None = None) -> list[str]:
        """Newest-first commit ids whose change set touched `key`."""
        args = ["rev-list"]
        if max_count is not None:
            args.append(f"--max-count={max_count}")
        args += ["HEAD", "--", key]

        result = self._run(*args)
        if not result.ok:
            self.log.debug(f"git rev-list failed for {key}: {result.stderr.strip()}")
            return []
        return result.text.split()

    def log_records(self, key: str, fields: Sequence[str], max_count: int | None = None) -> list[dict[str, str]]:
        """Newest-first records for commits touching `key`.

        Args:
            key: Repository-relative path
            fields: git pretty-format placeholders without the `%` (e.g. "ad", "s")
            max_count: Maximum number of records

        Returns:
            One dict per commit: "commit" first, then each field in order

        Raises:
            BackendError: If git log fails
        """
        names = [field.lstrip("%") for field in fields]
        placeholders = _FIELD_SEPARATOR.join(["%H", *(f"%{name}" for name in names)])

        args = ["log", "--date=iso-strict", f"--format={_RECORD_SEPARATOR}{placeholders}"]
        if max_count is not None:
            args.append(f"--max-count={max_count}")
        args += ["HEAD", "--", key]

        result = self._run(*args)
        result.raise_for("git log", self.location)

        records = []
        for chunk in result.text.split(_RECORD_SEPARATOR):
            chunk = chunk.strip("\n")
            if not chunk:
                continue
            values = chunk.split(_FIELD_SEPARATOR)
            record = {"commit": values[0]}
            for name, value in zip(names, values[1:]):
                record[name] = value
            records.append(record)
        return records

    def show(self, revision: str, key: str) -> bytes:
        """File content of `key` at `revision`.

        Raises:
            BackendError: If the revision or path does not exist
        """
        result = self._run("show", f"{revision}:{key}")
        result.raise_for(f"git show {revision}:{key}", self.location)
        return result.stdout

    def checkout_path(self, revision: str, key: str) -> None:
        """Restore `key` in the work tree to its content at `revision`.

        Raises:
            BackendError: If git checkout fails
        """
        self._run("checkout", "-q", revision, "--", key).raise_for(f"git checkout {revision}", self.location)

    def _run(self, *args: str, scoped: bool = True) -> GitResult:
        env = os.environ.copy()
        for name in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
            env.pop(name, None)
        for name, value in _IDENTITY.items():
            env.setdefault(name, value)
        env["GIT_LITERAL_PATHSPECS"] = "1"
        env["GIT_TERMINAL_PROMPT"] = "0"

        cmd = [
            self.git,
            "-c", "commit.gpgsign=false",
            "-c", f"core.excludesFile={os.devnull}",
            "-c", "core.autocrlf=false",
            "-c", f"safe.directory={self.location}",
        ]
        if scoped:
            # Never fall through to an enclosing repository.
            cmd += [f"--git-dir={self.git_dir}", f"--work-tree={self.location}"]
        cmd += list(args)

        try:
            proc = subprocess.run(cmd, cwd=self.location, capture_output=True, env=env)
        except FileNotFoundError as e:
            raise BackendError(f"git executable not found: {self.git}") from e

        return GitResult(
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr.decode("utf-8", errors="replace"),
        )

