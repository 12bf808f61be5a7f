"""
Console reporter for duplicate sets, summaries and deletion outcomes.

This is the user-facing report, not diagnostic logging: it always prints,
regardless of the configured log level. Regular output goes to stdout,
warnings and per-file errors to stderr.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, TextIO

from copysweep.dedup.models import DeletionResult, Resolution

SEPARATOR = "=" * 32
CONFIRMATION_PROMPT = "\nProceed with deletion? (y/N): "


def format_size(size_bytes: float) -> str:
    """Format a byte count in human-readable units."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"


class ConsoleReporter:
    """Print the dedup report line by line as the run progresses."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self._out = out
        self._err = err

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def _print(self, message: str = "") -> None:
        print(message, file=self.out)

    def _print_err(self, message: str) -> None:
        print(message, file=self.err)

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def dry_run_banner(self) -> None:
        self._print("Running in DRY RUN mode - no files will be deleted\n")

    def warning(self, message: str) -> None:
        self._print_err(message)

    def fatal(self, message: str) -> None:
        self._print_err(message)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def duplicate_set(self, resolution: Resolution, dry_run: bool) -> None:
        """Print one set: key, size, keeper, then one line per candidate."""
        duplicate_set = resolution.duplicate_set
        verb = "Would delete" if dry_run else "Will delete"

        self._print("\n--- Duplicate Set ---")
        self._print(f"Normalized filename: {duplicate_set.normalized_name}")
        self._print(f"Size: {duplicate_set.size} bytes")
        self._print(f"Keeping: {resolution.keeper.path}")
        for record in resolution.to_delete:
            self._print(f"{verb}: {record.path}")

    def no_duplicates(self) -> None:
        self._print("\nNo duplicates found!")

    def summary(self, duplicate_sets: int, files_to_delete: int, space_reclaimable_bytes: int) -> None:
        self._print(f"\n{SEPARATOR}")
        self._print(f"Summary: Found {duplicate_sets} duplicate set(s)")
        self._print(f"Total files to delete: {files_to_delete}")
        self._print(f"Space reclaimable: {format_size(space_reclaimable_bytes)}")

    def report_written(self, path: Path) -> None:
        self._print(f"Report saved to: {path}")

    def dry_run_done(self) -> None:
        self._print("\n[DRY RUN MODE] No files were deleted.")
        self._print("Run without --dry-run to actually delete files.")

    def cancelled(self) -> None:
        self._print("Deletion cancelled.")

    # ------------------------------------------------------------------
    # Deleting
    # ------------------------------------------------------------------

    def deletion_started(self) -> None:
        self._print("\nDeleting files...")

    def deleted(self, path: Path) -> None:
        self._print(f"Deleted: {path}")

    def delete_failed(self, path: Path, error: str) -> None:
        self._print_err(f"Error deleting '{path}': {error}")

    def deletion_complete(self, result: DeletionResult) -> None:
        self._print(f"\n{SEPARATOR}")
        self._print("Deletion complete!")
        self._print(f"Files deleted: {result.deleted}")
        if result.errors > 0:
            self._print(f"Errors encountered: {result.errors}")
