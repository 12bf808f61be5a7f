"""
Deletion of duplicate candidates.

Each removal is independent: a failure is reported and counted, and the
remaining candidates are still attempted. There is no global abort once
deletion has started.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from copysweep.dedup.filesystem import remove_file
from copysweep.dedup.models import DeletionResult, Resolution
from copysweep.dedup.reporter import ConsoleReporter

logger = structlog.get_logger(__name__)


class DuplicateDeleter:
    """
    Remove every deletion candidate of already-resolved duplicate sets.

    Keepers are never touched: only `Resolution.to_delete` is iterated.
    """

    def __init__(
        self,
        remover: Callable[[Path], None] = remove_file,
        reporter: Optional[ConsoleReporter] = None,
    ):
        """
        Initialize deleter.

        Args:
            remover: Removes one path, raising OSError on failure
            reporter: Receives one line per deleted or failed file
        """
        self.remover = remover
        self.reporter = reporter

    def delete_duplicates(self, resolutions: Iterable[Resolution]) -> DeletionResult:
        """
        Delete all candidates of `resolutions`.

        Returns:
            DeletionResult with counts and details
        """
        resolutions = list(resolutions)
        result = DeletionResult(
            total_to_delete=sum(len(r.to_delete) for r in resolutions),
        )

        logger.info(
            "dedup_deletion_started",
            total_to_delete=result.total_to_delete,
            groups=len(resolutions),
        )

        for resolution in resolutions:
            for record in resolution.to_delete:
                try:
                    self.remover(record.path)
                except OSError as e:
                    result.errors += 1
                    result.error_details.append((str(record.path), str(e)))
                    logger.warning(
                        "dedup_delete_failed",
                        file_path=str(record.path),
                        error=str(e),
                    )
                    if self.reporter:
                        self.reporter.delete_failed(record.path, str(e))
                    continue

                result.deleted += 1
                result.space_reclaimed_bytes += record.size
                logger.info(
                    "dedup_file_deleted",
                    file_path=str(record.path),
                    size_bytes=record.size,
                )
                if self.reporter:
                    self.reporter.deleted(record.path)

        logger.info(
            "dedup_deletion_completed",
            deleted=result.deleted,
            errors=result.errors,
            space_reclaimed_bytes=result.space_reclaimed_bytes,
        )

        return result
