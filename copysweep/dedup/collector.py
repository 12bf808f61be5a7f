"""
Directory entry collector.

Turns the filesystem layer's entries into immutable FileRecord values.

Fail-soft: an entry whose metadata is unreadable, whose filename cannot be
decoded, or that has neither a creation nor a modification time is skipped
with a warning. One bad entry never aborts the scan.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

import structlog

from copysweep.dedup.models import (
    CollectionResult,
    DirectoryEntry,
    EntryFailure,
    EntryMetadata,
    FileRecord,
    TimestampSource,
)

logger = structlog.get_logger(__name__)


def resolve_timestamp(entry: EntryMetadata) -> Optional[tuple[float, TimestampSource]]:
    """
    Pick the ordering timestamp for an entry.

    Ordered attempt: creation time, else modification time, else None.
    """
    if entry.created is not None:
        return entry.created, TimestampSource.created
    if entry.modified is not None:
        return entry.modified, TimestampSource.modified
    return None


def is_decodable(name: str) -> bool:
    """False for names carrying undecodable bytes (surrogate-escaped by os)."""
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class FileCollector:
    """
    Build FileRecords from directory entries.

    Non-regular files are ignored silently. Every other rejected entry
    produces one warning, passed to `warning_callback` as it happens and
    kept in the CollectionResult.
    """

    def __init__(self, warning_callback: Optional[Callable[[str], None]] = None):
        self.warning_callback = warning_callback

    def collect(self, entries: Iterable[DirectoryEntry]) -> CollectionResult:
        result = CollectionResult()

        for entry in entries:
            if isinstance(entry, EntryFailure):
                self._warn(
                    result,
                    f"Error reading metadata for '{entry.path}': {entry.error}",
                    path=entry.path,
                    reason="metadata",
                )
                continue

            if not entry.is_file:
                result.not_files += 1
                continue

            if not entry.path.name or not is_decodable(entry.path.name):
                self._warn(
                    result,
                    f"Warning: Could not decode filename for '{entry.path}'",
                    path=entry.path,
                    reason="filename",
                )
                continue

            timestamp = resolve_timestamp(entry)
            if timestamp is None:
                self._warn(
                    result,
                    f"Warning: Could not get creation or modified time for '{entry.path}'",
                    path=entry.path,
                    reason="timestamp",
                )
                continue

            value, source = timestamp
            result.records.append(
                FileRecord(
                    path=entry.path,
                    size=entry.size,
                    timestamp=value,
                    timestamp_source=source,
                )
            )

        logger.info(
            "dedup_collection_completed",
            records=len(result.records),
            skipped=result.skipped,
            not_files=result.not_files,
        )
        return result

    def _warn(self, result: CollectionResult, message: str, path, reason: str) -> None:
        result.warnings.append(message)
        logger.debug("dedup_entry_skipped", file_path=str(path), reason=reason)
        if self.warning_callback:
            self.warning_callback(message)
