"""
Unit tests for ConsoleReporter.

Tests:
- Duplicate set block (dry-run and normal wording)
- Summary and terminal notices
- stderr for warnings and deletion errors
"""

import io
from pathlib import Path

import pytest

from copysweep.dedup.models import DeletionResult, DuplicateSet
from copysweep.dedup.reporter import ConsoleReporter, format_size
from copysweep.dedup.resolver import resolve


@pytest.fixture
def streams():
    return io.StringIO(), io.StringIO()


@pytest.fixture
def reporter(streams):
    out, err = streams
    return ConsoleReporter(out=out, err=err)


@pytest.fixture
def resolution(record_factory):
    return resolve(
        DuplicateSet(
            normalized_name="photo.jpg",
            size=1000,
            records=(
                record_factory("/d/photo.jpg", timestamp=1.0),
                record_factory("/d/photo (1).jpg", timestamp=2.0),
            ),
        )
    )


class TestDuplicateSet:
    def test_normal_mode_block(self, reporter, streams, resolution):
        reporter.duplicate_set(resolution, dry_run=False)

        assert streams[0].getvalue() == (
            "\n--- Duplicate Set ---\n"
            "Normalized filename: photo.jpg\n"
            "Size: 1000 bytes\n"
            "Keeping: /d/photo.jpg\n"
            "Will delete: /d/photo (1).jpg\n"
        )

    def test_dry_run_wording(self, reporter, streams, resolution):
        reporter.duplicate_set(resolution, dry_run=True)

        out = streams[0].getvalue()
        assert "Would delete: /d/photo (1).jpg" in out
        assert "Will delete" not in out


class TestNotices:
    def test_summary(self, reporter, streams):
        reporter.summary(duplicate_sets=2, files_to_delete=3, space_reclaimable_bytes=2048)

        out = streams[0].getvalue()
        assert "Summary: Found 2 duplicate set(s)" in out
        assert "Total files to delete: 3" in out
        assert "Space reclaimable: 2.00 KB" in out

    def test_no_duplicates(self, reporter, streams):
        reporter.no_duplicates()
        assert streams[0].getvalue() == "\nNo duplicates found!\n"

    def test_dry_run_done(self, reporter, streams):
        reporter.dry_run_done()
        out = streams[0].getvalue()
        assert "[DRY RUN MODE] No files were deleted." in out
        assert "Run without --dry-run to actually delete files." in out

    def test_cancelled(self, reporter, streams):
        reporter.cancelled()
        assert streams[0].getvalue() == "Deletion cancelled.\n"

    def test_dry_run_banner(self, reporter, streams):
        reporter.dry_run_banner()
        assert streams[0].getvalue().startswith("Running in DRY RUN mode - no files will be deleted")


class TestDeletionOutput:
    def test_deleted_line(self, reporter, streams):
        reporter.deleted(Path("/d/photo (1).jpg"))
        assert streams[0].getvalue() == "Deleted: /d/photo (1).jpg\n"

    def test_delete_failed_goes_to_stderr(self, reporter, streams):
        reporter.delete_failed(Path("/d/x.jpg"), "Permission denied")

        assert streams[0].getvalue() == ""
        assert streams[1].getvalue() == "Error deleting '/d/x.jpg': Permission denied\n"

    def test_completion_without_errors(self, reporter, streams):
        reporter.deletion_complete(DeletionResult(total_to_delete=2, deleted=2))

        out = streams[0].getvalue()
        assert "Deletion complete!" in out
        assert "Files deleted: 2" in out
        assert "Errors encountered" not in out

    def test_completion_with_errors(self, reporter, streams):
        reporter.deletion_complete(DeletionResult(total_to_delete=3, deleted=2, errors=1))
        assert "Errors encountered: 1" in streams[0].getvalue()

    def test_warning_goes_to_stderr(self, reporter, streams):
        reporter.warning("Warning: something")
        assert streams[1].getvalue() == "Warning: something\n"


def test_default_streams_follow_sys(capsys):
    """Without explicit streams, output goes to the current sys.stdout/stderr."""
    reporter = ConsoleReporter()
    reporter.no_duplicates()
    reporter.warning("careful")

    captured = capsys.readouterr()
    assert "No duplicates found!" in captured.out
    assert "careful" in captured.err


@pytest.mark.parametrize(
    "size,expected",
    [(0, "0.00 B"), (1023, "1023.00 B"), (1024, "1.00 KB"), (1536 * 1024, "1.50 MB")],
)
def test_format_size(size, expected):
    assert format_size(size) == expected
