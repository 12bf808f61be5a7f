"""
Dedup engine.

Modules:
- normalizer: Copy-suffix filename normalization
- filesystem: Directory listing, file removal, confirmation prompt
- collector: Directory entries -> FileRecords (fail-soft)
- grouper: Normalized name, then size, grouping
- resolver: Keeper selection (earliest timestamp)
- reporter: Console report
- report_generator: CSV report
- deleter: Per-file deletion with error tally
- engine: Run state machine
- models: Pydantic data models
"""

from copysweep.dedup.engine import DedupEngine
from copysweep.dedup.models import (
    DedupRun,
    DuplicateSet,
    FileRecord,
    Resolution,
    RunState,
)
from copysweep.dedup.normalizer import normalize_filename

__all__ = [
    "DedupEngine",
    "DedupRun",
    "DuplicateSet",
    "FileRecord",
    "Resolution",
    "RunState",
    "normalize_filename",
]
