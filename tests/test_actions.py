# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0
"""Tests for the per-path action dispatcher."""

import io
import os
import stat

import pytest

from bank_cli.core.actions import parse_mode, process_batch, process_path
from bank_cli.core.prompt import FixedPrompt, TerminalPrompt
from bank_cli.core.types import EntryType, PathRequest, PathStatus, TimePair
from bank_cli.exceptions import ConfigurationConflictError, ParseError


def _request(path, times, **kwargs) -> PathRequest:
    return PathRequest(path=str(path), times=times, **kwargs)


def _perm(path) -> int:
    return stat.S_IMODE(os.stat(path).st_mode)


class TestParseMode:
    @pytest.mark.parametrize(
        "text,expected", [("755", 0o755), ("0644", 0o644), ("0o700", 0o700), ("1777", 0o1777)]
    )
    def test_valid(self, text, expected):
        assert parse_mode(text) == expected

    @pytest.mark.parametrize("text", ["", "999", "rwx", "17777", "0o"])
    def test_invalid(self, text):
        with pytest.raises(ParseError):
            parse_mode(text)


class TestCreateDirectory:
    def test_parents_chain(self, tmp_path, now_times):
        target = tmp_path / "a" / "b" / "c"
        result = process_path(_request(target, now_times, explicit_dir=True, parents=True))
        assert result.status == PathStatus.CREATED
        assert result.entry_type == EntryType.DIRECTORY
        assert (tmp_path / "a").is_dir()
        assert (tmp_path / "a" / "b").is_dir()
        assert target.is_dir()

    def test_parents_chain_partially_existing(self, tmp_path, now_times):
        (tmp_path / "a" / "b").mkdir(parents=True)
        target = tmp_path / "a" / "b" / "c"
        result = process_path(_request(target, now_times, explicit_dir=True, parents=True))
        assert result.status == PathStatus.CREATED
        assert target.is_dir()

    def test_existing_directory_is_updated(self, tmp_path, now_times):
        target = tmp_path / "exists"
        target.mkdir()
        result = process_path(_request(target, now_times, explicit_dir=True))
        assert result.status == PathStatus.UPDATED
        assert os.stat(target).st_mtime == pytest.approx(now_times.modification_time)

    def test_missing_parent_without_p_fails(self, tmp_path, now_times):
        target = tmp_path / "missing" / "child"
        result = process_path(_request(target, now_times, explicit_dir=True))
        assert result.status == PathStatus.FAILED
        assert result.error_code == "NOT_FOUND"
        assert not target.exists()

    def test_trailing_separator_creates_directory(self, tmp_path, now_times):
        result = process_path(_request(f"{tmp_path}/newdir/", now_times))
        assert result.status == PathStatus.CREATED
        assert (tmp_path / "newdir").is_dir()

    def test_mode_applied(self, tmp_path, now_times):
        target = tmp_path / "private"
        process_path(_request(target, now_times, explicit_dir=True, mode=0o700))
        assert _perm(target) == 0o700

    def test_mode_applied_to_existing_directory(self, tmp_path, now_times):
        target = tmp_path / "shared"
        target.mkdir(mode=0o755)
        process_path(_request(target, now_times, explicit_dir=True, mode=0o750))
        assert _perm(target) == 0o750

    def test_file_in_the_way(self, existing_file, now_times):
        result = process_path(_request(existing_file, now_times, explicit_dir=True))
        assert result.status == PathStatus.FAILED
        assert result.error_code == "IO_ERROR"
        assert "not a directory" in result.error


class TestCreateFile:
    def test_creates_empty_file(self, tmp_path, now_times):
        target = tmp_path / "new.txt"
        result = process_path(_request(target, now_times))
        assert result.status == PathStatus.CREATED
        assert result.entry_type == EntryType.FILE
        assert target.read_text() == ""
        assert os.stat(target).st_mtime == pytest.approx(now_times.modification_time)

    def test_existing_file_content_kept(self, existing_file, now_times):
        result = process_path(_request(existing_file, now_times))
        assert result.status == PathStatus.UPDATED
        assert existing_file.read_text() == "content"
        assert os.stat(existing_file).st_atime == pytest.approx(now_times.access_time)
        assert os.stat(existing_file).st_mtime == pytest.approx(now_times.modification_time)

    def test_mode_only_on_new_file(self, tmp_path, existing_file, now_times):
        os.chmod(existing_file, 0o644)
        process_path(_request(existing_file, now_times, mode=0o600))
        assert _perm(existing_file) == 0o644

        target = tmp_path / "secret.key"
        process_path(_request(target, now_times, mode=0o600))
        assert _perm(target) == 0o600

    def test_parents_for_file(self, tmp_path, now_times):
        target = tmp_path / "x" / "y" / "file.txt"
        result = process_path(_request(target, now_times, parents=True))
        assert result.status == PathStatus.CREATED
        assert target.is_file()

    def test_missing_parent_without_p_fails(self, tmp_path, now_times):
        result = process_path(_request(tmp_path / "nope" / "file.txt", now_times))
        assert result.status == PathStatus.FAILED
        assert result.error_code == "NOT_FOUND"

    def test_explicit_file_on_existing_directory_reports_directory(self, tmp_path, now_times):
        d = tmp_path / "build"
        d.mkdir()
        result = process_path(_request(d, now_times, explicit_file=True))
        assert result.status == PathStatus.UPDATED
        assert result.entry_type == EntryType.DIRECTORY
        assert d.is_dir()


class TestTimestamps:
    @pytest.mark.parametrize("value", [float("nan"), 1e20])
    def test_unrepresentable_time_fails_path(self, tmp_path, value):
        target = tmp_path / "a.txt"
        after = tmp_path / "b.txt"
        times = TimePair(value, value, now=value)

        results = process_batch([_request(target, times), _request(after, TimePair(5000.0, 5000.0))])

        assert results[0].status == PathStatus.FAILED
        assert results[0].error_code == "IO_ERROR"
        assert results[1].status == PathStatus.CREATED
        assert os.stat(after).st_mtime == pytest.approx(5000.0)

    def test_atime_only_keeps_mtime(self, existing_file):
        times = TimePair(5000.0, 5000.0, apply_access=True, apply_modification=False, now=9000.0)
        process_path(_request(existing_file, times))
        st = os.stat(existing_file)
        assert st.st_atime == pytest.approx(5000.0)
        assert st.st_mtime == pytest.approx(2000.0)

    def test_mtime_only_keeps_atime(self, existing_file):
        times = TimePair(5000.0, 5000.0, apply_access=False, apply_modification=True, now=9000.0)
        process_path(_request(existing_file, times))
        st = os.stat(existing_file)
        assert st.st_atime == pytest.approx(1000.0)
        assert st.st_mtime == pytest.approx(5000.0)

    def test_atime_only_on_new_file_uses_now_for_mtime(self, tmp_path):
        target = tmp_path / "fresh.txt"
        times = TimePair(5000.0, 5000.0, apply_access=True, apply_modification=False, now=9000.0)
        process_path(_request(target, times))
        st = os.stat(target)
        assert st.st_atime == pytest.approx(5000.0)
        assert st.st_mtime == pytest.approx(9000.0)

    @pytest.mark.skipif(
        os.utime not in os.supports_follow_symlinks, reason="lutimes not available"
    )
    def test_no_dereference_touches_link_only(self, existing_file, tmp_path):
        link = tmp_path / "link"
        link.symlink_to(existing_file)
        times = TimePair(7000.0, 7000.0, now=7000.0)

        result = process_path(_request(link, times, no_dereference=True))

        assert result.status == PathStatus.UPDATED
        assert os.lstat(link).st_mtime == pytest.approx(7000.0)
        assert os.stat(existing_file).st_mtime == pytest.approx(2000.0)

    def test_dereference_touches_target(self, existing_file, tmp_path):
        link = tmp_path / "link"
        link.symlink_to(existing_file)
        times = TimePair(7000.0, 7000.0, now=7000.0)

        process_path(_request(link, times))

        assert os.stat(existing_file).st_mtime == pytest.approx(7000.0)


class TestNoCreate:
    def test_missing_path_is_skipped(self, tmp_path, now_times):
        target = tmp_path / "missing.txt"
        result = process_path(_request(target, now_times, no_create=True))
        assert result.status == PathStatus.SKIPPED
        assert result.ok
        assert not target.exists()

    def test_existing_path_updated(self, existing_file, now_times):
        result = process_path(_request(existing_file, now_times, no_create=True))
        assert result.status == PathStatus.UPDATED
        assert os.stat(existing_file).st_mtime == pytest.approx(now_times.modification_time)

    def test_existing_directory_updated(self, tmp_path, now_times):
        d = tmp_path / "dir"
        d.mkdir()
        result = process_path(_request(d, now_times, no_create=True))
        assert result.entry_type == EntryType.DIRECTORY
        assert os.stat(d).st_mtime == pytest.approx(now_times.modification_time)


class TestInteractive:
    def test_prompt_answer_used(self, tmp_path, now_times):
        target = tmp_path / "ambiguous"
        result = process_path(
            _request(target, now_times, interactive=True), prompt=FixedPrompt(EntryType.DIRECTORY)
        )
        assert result.entry_type == EntryType.DIRECTORY
        assert target.is_dir()

    def test_no_terminal_fails_path(self, tmp_path, now_times):
        target = tmp_path / "ambiguous"
        result = process_path(
            _request(target, now_times, interactive=True),
            prompt=TerminalPrompt(stdin=io.StringIO("")),
        )
        assert result.status == PathStatus.FAILED
        assert result.error_code == "NOT_FOUND"
        assert not target.exists()


class TestProcessBatch:
    def test_failure_does_not_stop_batch(self, tmp_path, now_times):
        first = tmp_path / "missing" / "a.txt"
        second = tmp_path / "b.txt"
        results = process_batch([_request(first, now_times), _request(second, now_times)])

        assert [r.status for r in results] == [PathStatus.FAILED, PathStatus.CREATED]
        assert second.is_file()

    def test_results_in_order(self, tmp_path, now_times):
        names = ["c.txt", "a/", "b.md"]
        results = process_batch([_request(f"{tmp_path}/{n}", now_times) for n in names])
        assert [r.path for r in results] == [f"{tmp_path}/{n}" for n in names]
        assert [r.entry_type for r in results] == [
            EntryType.FILE,
            EntryType.DIRECTORY,
            EntryType.FILE,
        ]

    def test_conflicting_flags_abort_before_any_action(self, tmp_path, now_times):
        ok = tmp_path / "ok.txt"
        bad = tmp_path / "bad.txt"
        with pytest.raises(ConfigurationConflictError):
            process_batch(
                [
                    _request(ok, now_times),
                    _request(bad, now_times, explicit_file=True, explicit_dir=True),
                ]
            )
        assert not ok.exists()

    def test_to_dict(self, tmp_path, now_times):
        (result,) = process_batch([_request(tmp_path / "x.txt", now_times)])
        assert result.to_dict() == {
            "path": str(tmp_path / "x.txt"),
            "type": "file",
            "status": "created",
        }
