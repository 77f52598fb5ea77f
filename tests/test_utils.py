"""Tests for utility helpers."""

import logging

import pytest

from localhistory.errors import InvalidConfigurationError
from localhistory.utils.fs import copy_bytes, make_parents, safe_json_load
from localhistory.utils.log import HistoryLog
from localhistory.utils.text import ordinalize


class TestOrdinalize:
    @pytest.mark.parametrize("number, expected", [
        (1, "1st"),
        (2, "2nd"),
        (3, "3rd"),
        (4, "4th"),
        (10, "10th"),
        (11, "11th"),
        (12, "12th"),
        (13, "13th"),
        (21, "21st"),
        (22, "22nd"),
        (23, "23rd"),
        (101, "101st"),
        (111, "111th"),
        (112, "112th"),
        (0, "0th"),
    ])
    def test_suffixes(self, number, expected):
        assert ordinalize(number) == expected


class TestFs:
    def test_make_parents_reports_created_directories(self, tmp_path):
        target = tmp_path / "a" / "b" / "c" / "file.txt"

        created = make_parents(target)

        assert created == [tmp_path / "a", tmp_path / "a" / "b", tmp_path / "a" / "b" / "c"]
        assert target.parent.is_dir()

    def test_make_parents_when_parent_exists(self, tmp_path):
        assert make_parents(tmp_path / "file.txt") == []

    def test_copy_bytes_follows_source_symlink(self, tmp_path):
        src = tmp_path / "src.txt"
        src.write_text("content")
        link = tmp_path / "link.txt"
        link.symlink_to(src)
        dst = tmp_path / "dst.txt"

        copy_bytes(link, dst)

        assert not dst.is_symlink()
        assert dst.read_text() == "content"

    def test_copy_bytes_replaces_destination_symlink(self, tmp_path):
        other = tmp_path / "other.txt"
        other.write_text("untouched")
        dst = tmp_path / "dst.txt"
        dst.symlink_to(other)
        src = tmp_path / "src.txt"
        src.write_text("new")

        copy_bytes(src, dst)

        assert not dst.is_symlink()
        assert dst.read_text() == "new"
        assert other.read_text() == "untouched"

    def test_copy_bytes_missing_source(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            copy_bytes(tmp_path / "missing", tmp_path / "dst")

    def test_safe_json_load_defaults(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")

        assert safe_json_load(tmp_path / "missing.json", {"a": 1}) == {"a": 1}
        assert safe_json_load(bad) == {}


class TestHistoryLog:
    def test_without_directory_everything_is_a_no_op(self):
        log = HistoryLog()

        log.info("nothing happens")
        log.error("still nothing")

        assert not log.enabled
        assert log.path is None
        log.close()

    def test_writes_to_log_file(self, tmp_path):
        log = HistoryLog(tmp_path / "logs")

        log.info("hello")
        log.debug("details")
        log.close()

        content = (tmp_path / "logs" / "localhistory.log").read_text()
        assert "INFO | hello" in content
        assert "DEBUG | details" in content

    def test_instances_do_not_share_handlers(self, tmp_path):
        first = HistoryLog(tmp_path / "one")
        second = HistoryLog(tmp_path / "two")

        first.info("only in one")
        first.close()
        second.close()

        assert "only in one" in (tmp_path / "one" / "localhistory.log").read_text()
        assert "only in one" not in (tmp_path / "two" / "localhistory.log").read_text()

    def test_does_not_propagate_to_root_logger(self, tmp_path, caplog):
        log = HistoryLog(tmp_path / "logs")

        with caplog.at_level(logging.DEBUG):
            log.info("private")
        log.close()

        assert "private" not in caplog.text

    def test_unusable_directory_is_a_configuration_error(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        with pytest.raises(InvalidConfigurationError):
            HistoryLog(blocker / "logs")

    def test_debug_mode_echoes_to_stderr(self, monkeypatch, capsys):
        monkeypatch.setenv("LOCALHISTORY_DEBUG", "1")

        HistoryLog().info("visible")

        assert "[localhistory] visible" in capsys.readouterr().err

    def test_loggers_are_not_registered_globally(self, tmp_path):
        before = set(logging.Logger.manager.loggerDict)

        for i in range(3):
            HistoryLog(tmp_path / f"logs-{i}").close()
            HistoryLog().close()

        assert set(logging.Logger.manager.loggerDict) == before
