"""
copysweep command line.

Usage:
    copysweep             # scan the working directory, confirm, delete
    copysweep --dry-run   # report only, never delete

--dry-run is detected anywhere in the arguments; other arguments are ignored.
Further settings come from COPYSWEEP_* environment variables.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional, Sequence

import structlog
from pydantic import ValidationError

from copysweep.config.logging import configure_logging
from copysweep.config.settings import CopySweepSettings, get_settings
from copysweep.dedup.engine import DedupEngine
from copysweep.exceptions import ConfigurationError, CopySweepError, DirectoryReadError


DRY_RUN_FLAG = "--dry-run"


def parse_arguments(argv: Sequence[str]) -> tuple[bool, list[str]]:
    """
    Split raw arguments into (dry_run, ignored).

    The flag is matched by exact presence anywhere, including after "--".
    There is no --help and no abbreviation: every other argument is ignored.
    """
    dry_run = DRY_RUN_FLAG in argv
    ignored = [arg for arg in argv if arg != DRY_RUN_FLAG]
    return dry_run, ignored


def load_settings() -> CopySweepSettings:
    try:
        return get_settings()
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid COPYSWEEP_* configuration: {exc}") from exc


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point. Returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    dry_run, ignored = parse_arguments(list(argv))

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    configure_logging(
        level=settings.log_level,
        json_format=settings.log_format == "json",
        enable_colors=settings.log_colors,
    )
    log = structlog.get_logger(service="copysweep")

    if ignored:
        log.warning("arguments ignored", arguments=ignored)

    target_directory = settings.target_directory or Path(os.getcwd())
    engine = DedupEngine(report_csv=settings.report_csv)

    try:
        engine.run(target_directory, dry_run=dry_run)
    except DirectoryReadError:
        # Already reported by the engine
        return 1
    except KeyboardInterrupt:
        log.warning("interrupted by user")
        return 1
    except CopySweepError as exc:
        log.error("copysweep error", error=str(exc), error_type=type(exc).__name__)
        return 1

    return 0
