"""Tests for path normalization."""

import os
from pathlib import Path

import pytest

from localhistory.core.paths import (
    is_unsupported_scheme,
    normalize,
    storage_key,
    storage_path,
)


class TestNormalize:
    def test_relative_path_is_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert normalize("a/b.txt") == os.path.join(os.getcwd(), "a", "b.txt")

    def test_dot_segments_collapse_to_same_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert normalize("./a/b.txt") == normalize("./a/./../a/b.txt")
        assert normalize("./a/b.txt") == normalize(os.path.join(os.getcwd(), "a", "b.txt"))

    def test_explicit_cwd(self, tmp_path):
        assert normalize("x/../y", cwd=tmp_path) == str(tmp_path / "y")

    def test_does_not_need_to_exist(self, tmp_path):
        missing = tmp_path / "nope" / "missing.txt"

        assert normalize(str(missing)) == str(missing)

    def test_symlinks_are_not_resolved(self, workspace):
        link = workspace / "assets" / "sample_file_symlink"

        assert normalize(str(link)) == str(link)
        assert normalize(str(link)) != os.path.realpath(link)

    def test_expands_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))

        assert normalize("~/notes.txt") == str(tmp_path / "notes.txt")

    def test_accepts_path_objects(self, tmp_path):
        assert normalize(tmp_path / "a" / ".." / "b") == str(tmp_path / "b")


class TestStorageLayout:
    def test_storage_key_strips_root(self):
        assert storage_key("/a/b/c") == "a/b/c"

    def test_storage_path_mirrors_absolute_path(self, tmp_path):
        assert storage_path(tmp_path, "/a/b/c") == tmp_path / "a" / "b" / "c"

    def test_storage_path_keeps_dotted_names(self, tmp_path):
        assert storage_path(tmp_path, "/x/.hidden/file.txt") == Path(tmp_path, "x", ".hidden", "file.txt")


class TestSchemes:
    @pytest.mark.parametrize("path", [
        "scp://host//home/user/file.txt",
        "sftp://host/file.txt",
        "ftp://host/file.txt",
    ])
    def test_remote_paths_are_unsupported(self, path):
        assert is_unsupported_scheme(path)

    @pytest.mark.parametrize("path", [
        "/home/user/scp://file",
        "scp:/file",
        "notes/scp.txt",
    ])
    def test_local_paths_are_supported(self, path):
        assert not is_unsupported_scheme(path)
