"""
Unit tests for DuplicateDeleter.

Tests:
- Every candidate removed, keeper untouched
- Per-file failures counted without blocking the rest
- Reporter lines
"""

import io
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from copysweep.dedup.deleter import DuplicateDeleter
from copysweep.dedup.models import DuplicateSet
from copysweep.dedup.reporter import ConsoleReporter
from copysweep.dedup.resolver import resolve


def _make_resolution(tmp_path: Path, names: list[str], record_factory, content: bytes = b"x" * 100):
    """Create real files; the first name is the earliest (keeper)."""
    records = []
    for i, name in enumerate(names):
        path = tmp_path / name
        path.write_bytes(content)
        records.append(record_factory(path, size=len(content), timestamp=float(i)))
    return resolve(DuplicateSet(normalized_name=names[0], size=len(content), records=tuple(records)))


class TestDeletion:
    def test_deletes_candidates_only(self, tmp_path, record_factory):
        resolution = _make_resolution(tmp_path, ["a.txt", "a (1).txt", "a copy.txt"], record_factory)

        result = DuplicateDeleter().delete_duplicates([resolution])

        assert result.total_to_delete == 2
        assert result.deleted == 2
        assert result.errors == 0
        assert result.space_reclaimed_bytes == 200
        assert (tmp_path / "a.txt").exists()
        assert not (tmp_path / "a (1).txt").exists()
        assert not (tmp_path / "a copy.txt").exists()

    def test_failure_does_not_block_others(self, tmp_path, record_factory):
        resolution = _make_resolution(tmp_path, ["a.txt", "a (1).txt", "a (2).txt"], record_factory)
        failing = tmp_path / "a (1).txt"

        def remover(path):
            if path == failing:
                raise PermissionError("Access denied")
            path.unlink()

        result = DuplicateDeleter(remover=remover).delete_duplicates([resolution])

        assert result.deleted == 1
        assert result.errors == 1
        assert result.error_details == [(str(failing), "Access denied")]
        assert failing.exists()
        assert not (tmp_path / "a (2).txt").exists()

    def test_missing_file_counted_as_error(self, tmp_path, record_factory):
        resolution = _make_resolution(tmp_path, ["a.txt", "a (1).txt"], record_factory)
        (tmp_path / "a (1).txt").unlink()

        result = DuplicateDeleter().delete_duplicates([resolution])

        assert result.deleted == 0
        assert result.errors == 1

    def test_multiple_sets(self, tmp_path, record_factory):
        first = _make_resolution(tmp_path, ["a.txt", "a (1).txt"], record_factory)
        second = _make_resolution(tmp_path, ["b.txt", "b (1).txt", "b (2).txt"], record_factory)
        remover = MagicMock()

        result = DuplicateDeleter(remover=remover).delete_duplicates([first, second])

        assert result.deleted == 3
        removed = [call.args[0].name for call in remover.call_args_list]
        assert removed == ["a (1).txt", "b (1).txt", "b (2).txt"]

    def test_nothing_to_delete(self):
        result = DuplicateDeleter(remover=MagicMock()).delete_duplicates([])
        assert result.total_to_delete == 0
        assert result.deleted == 0


class TestReporting:
    @pytest.fixture
    def streams(self):
        return io.StringIO(), io.StringIO()

    def test_lines_per_file(self, tmp_path, record_factory, streams):
        resolution = _make_resolution(tmp_path, ["a.txt", "a (1).txt", "a (2).txt"], record_factory)
        out, err = streams

        def remover(path):
            if path.name == "a (2).txt":
                raise OSError("Read-only file system")
            path.unlink()

        DuplicateDeleter(remover=remover, reporter=ConsoleReporter(out=out, err=err)).delete_duplicates(
            [resolution]
        )

        assert out.getvalue() == f"Deleted: {tmp_path / 'a (1).txt'}\n"
        assert err.getvalue() == f"Error deleting '{tmp_path / 'a (2).txt'}': Read-only file system\n"
