"""
CSV report generator for resolved duplicate sets.

Generates CSV report with:
- Header statistics (comments)
- Columns: set_id, normalized_name, file_path, size, action, timestamp, source
- UTF-8 encoding (accents in filenames)
"""

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Sequence, TextIO

import structlog

from copysweep.dedup.models import Resolution
from copysweep.dedup.resolver import action_for

logger = structlog.get_logger(__name__)


class ReportGenerator:
    """
    Write resolved duplicate sets as CSV.

    The timestamp_source column tells whether the timestamp is a creation
    time or a modification-time fallback.
    """

    CSV_COLUMNS = [
        "set_id",
        "normalized_name",
        "file_path",
        "size_bytes",
        "action",
        "timestamp",
        "timestamp_source",
    ]

    def generate_csv(
        self,
        resolutions: Sequence[Resolution],
        output_path: Path,
        generated_at: Optional[datetime] = None,
    ) -> Path:
        """
        Generate CSV report file.

        Args:
            resolutions: Resolved duplicate sets
            output_path: Where to save the CSV file
            generated_at: Date written in the header (default: now, UTC)

        Returns:
            Path to generated CSV file
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            self._write(f, resolutions, generated_at)

        logger.info(
            "dedup_report_generated",
            output_path=str(output_path),
            groups=len(resolutions),
        )

        return output_path

    def generate_csv_string(
        self,
        resolutions: Sequence[Resolution],
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Generate CSV content as string."""
        output = io.StringIO()
        self._write(output, resolutions, generated_at)
        return output.getvalue()

    def _write(
        self,
        f: TextIO,
        resolutions: Sequence[Resolution],
        generated_at: Optional[datetime],
    ) -> None:
        self._write_header_stats(f, resolutions, generated_at or datetime.now(timezone.utc))

        writer = csv.DictWriter(f, fieldnames=self.CSV_COLUMNS)
        writer.writeheader()

        for set_id, resolution in enumerate(resolutions, start=1):
            for record in resolution.duplicate_set.records:
                writer.writerow(
                    {
                        "set_id": set_id,
                        "normalized_name": resolution.duplicate_set.normalized_name,
                        "file_path": str(record.path),
                        "size_bytes": record.size,
                        "action": action_for(resolution, record).value,
                        "timestamp": record.timestamp_datetime.isoformat(),
                        "timestamp_source": record.timestamp_source.value,
                    }
                )

    @staticmethod
    def _write_header_stats(
        f: TextIO,
        resolutions: Sequence[Resolution],
        generated_at: datetime,
    ) -> None:
        """Write header statistics as CSV comments."""
        total_delete = sum(len(r.to_delete) for r in resolutions)
        space = sum(r.space_reclaimable_bytes for r in resolutions)

        f.write(f"# Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"# Duplicate Sets: {len(resolutions):,}\n")
        f.write(f"# Files To Delete: {total_delete:,}\n")
        f.write(f"# Space Reclaimable: {space:,} bytes\n")
