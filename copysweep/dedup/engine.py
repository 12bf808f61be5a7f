"""
Dedup engine: the run state machine.

    SCANNING -> GROUPING -> REPORTING -> DRY_RUN_DONE
                                      -> AWAITING_CONFIRMATION -> CANCELLED
                                                               -> DELETING -> DONE
    GROUPING -> DONE (no duplicates, no confirmation offered)

Duplicate sets are grouped and resolved once. The same list of resolutions
feeds the preview and, after confirmation, the deletion, so what is deleted
is exactly what was shown.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

import structlog

from copysweep.dedup.collector import FileCollector
from copysweep.dedup.deleter import DuplicateDeleter
from copysweep.dedup.filesystem import list_directory, prompt_yes_no, remove_file
from copysweep.dedup.grouper import find_duplicate_sets
from copysweep.dedup.models import DedupRun, DirectoryEntry, RunState
from copysweep.dedup.report_generator import ReportGenerator
from copysweep.dedup.reporter import CONFIRMATION_PROMPT, ConsoleReporter
from copysweep.dedup.resolver import resolve_all
from copysweep.exceptions import DirectoryReadError

logger = structlog.get_logger(__name__)


class DedupEngine:
    """
    Find copy-suffix duplicates in one directory and remove all but the
    earliest file of each set.

    Every I/O collaborator is injectable: the directory lister, the
    confirmation prompt and the file remover. The target directory is always
    passed explicitly to run().
    """

    def __init__(
        self,
        lister: Callable[[Path], Iterable[DirectoryEntry]] = list_directory,
        prompt: Callable[[str], bool] = prompt_yes_no,
        remover: Callable[[Path], None] = remove_file,
        reporter: Optional[ConsoleReporter] = None,
        report_csv: Optional[Path] = None,
        report_generator: Optional[ReportGenerator] = None,
    ):
        """
        Initialize engine.

        Args:
            lister: Enumerates a directory; raises DirectoryReadError if it cannot
            prompt: Asks the confirmation question, True for yes
            remover: Removes one file, raising OSError on failure
            reporter: Console reporter (default: stdout/stderr)
            report_csv: Optional CSV report destination
            report_generator: CSV writer used when report_csv is set
        """
        self.lister = lister
        self.prompt = prompt
        self.reporter = reporter or ConsoleReporter()
        self.deleter = DuplicateDeleter(remover=remover, reporter=self.reporter)
        self.report_csv = report_csv
        self.report_generator = report_generator or ReportGenerator()

    def run(self, target_directory: Path, dry_run: bool = False) -> DedupRun:
        """
        Execute one full run against `target_directory`.

        Returns:
            DedupRun with final status and totals

        Raises:
            DirectoryReadError: If the directory cannot be enumerated
        """
        run = DedupRun(target_directory=target_directory, dry_run=dry_run)

        logger.info("dedup_scan_started", target_directory=str(target_directory), dry_run=dry_run)

        if dry_run:
            self.reporter.dry_run_banner()

        # SCANNING
        try:
            entries = self.lister(target_directory)
        except DirectoryReadError as e:
            self.reporter.fatal(str(e))
            raise

        collection = FileCollector(warning_callback=self.reporter.warning).collect(entries)
        run.files_collected = len(collection.records)
        run.entries_skipped = collection.skipped

        # GROUPING
        run.transition(RunState.grouping)
        resolutions = resolve_all(find_duplicate_sets(collection.records))

        if not resolutions:
            self.reporter.no_duplicates()
            run.transition(RunState.done)
            self._log_completed(run)
            return run

        # REPORTING
        run.transition(RunState.reporting)
        run.resolutions = resolutions
        for resolution in resolutions:
            self.reporter.duplicate_set(resolution, dry_run)
            run.duplicate_sets += 1
            run.files_to_delete += len(resolution.duplicate_set.records) - 1
            run.space_reclaimable_bytes += resolution.space_reclaimable_bytes

        self.reporter.summary(run.duplicate_sets, run.files_to_delete, run.space_reclaimable_bytes)

        if self.report_csv is not None:
            self._write_report(resolutions)

        if dry_run:
            self.reporter.dry_run_done()
            run.transition(RunState.dry_run_done)
            self._log_completed(run)
            return run

        # AWAITING_CONFIRMATION
        run.transition(RunState.awaiting_confirmation)
        if not self.prompt(CONFIRMATION_PROMPT):
            self.reporter.cancelled()
            run.transition(RunState.cancelled)
            self._log_completed(run)
            return run

        # DELETING
        run.transition(RunState.deleting)
        self.reporter.deletion_started()
        result = self.deleter.delete_duplicates(resolutions)
        run.files_deleted = result.deleted
        run.errors = result.errors
        self.reporter.deletion_complete(result)

        run.transition(RunState.done)
        self._log_completed(run)
        return run

    def _write_report(self, resolutions) -> None:
        try:
            path = self.report_generator.generate_csv(resolutions, self.report_csv)
        except OSError as e:
            logger.warning("dedup_report_failed", output_path=str(self.report_csv), error=str(e))
            self.reporter.warning(f"Warning: Could not write report '{self.report_csv}': {e}")
            return
        self.reporter.report_written(path)

    @staticmethod
    def _log_completed(run: DedupRun) -> None:
        logger.info(
            "dedup_run_completed",
            status=run.status.value,
            duplicate_sets=run.duplicate_sets,
            files_to_delete=run.files_to_delete,
            files_deleted=run.files_deleted,
            errors=run.errors,
            elapsed_seconds=round(run.elapsed_seconds, 3),
        )
