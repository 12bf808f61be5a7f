"""
Pydantic models for the copysweep dedup engine.

Models:
- EntryMetadata: One directory entry as reported by the filesystem layer
- EntryFailure: A directory entry whose metadata could not be read
- FileRecord: A regular file considered for deduplication (immutable)
- DuplicateSet: Records sharing a normalized name and an exact size
- Resolution: Keeper and deletion candidates of one DuplicateSet
- CollectionResult: Records plus per-entry warnings from collection
- DeletionResult: Counts and details of the DELETING phase
- DedupRun: Outcome of one engine run
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class TimestampSource(str, Enum):
    """Which metadata field a FileRecord timestamp came from."""

    created = "created"
    modified = "modified"


class DedupAction(str, Enum):
    """Action to take on a file in a duplicate set."""

    keep = "keep"
    delete = "delete"


class RunState(str, Enum):
    """States of one engine run."""

    scanning = "scanning"
    grouping = "grouping"
    reporting = "reporting"
    dry_run_done = "dry_run_done"
    awaiting_confirmation = "awaiting_confirmation"
    cancelled = "cancelled"
    deleting = "deleting"
    done = "done"


TERMINAL_STATES = frozenset({RunState.dry_run_done, RunState.cancelled, RunState.done})


class EntryMetadata(BaseModel):
    """Directory entry with the metadata the collector needs."""

    model_config = ConfigDict(frozen=True)

    path: Path
    is_file: bool
    size: int = Field(default=0, ge=0)
    created: Optional[float] = None
    modified: Optional[float] = None


class EntryFailure(BaseModel):
    """Directory entry whose metadata could not be read."""

    model_config = ConfigDict(frozen=True)

    path: Path
    error: str


DirectoryEntry = Union[EntryMetadata, EntryFailure]


class FileRecord(BaseModel):
    """Single regular file considered for deduplication."""

    model_config = ConfigDict(frozen=True)

    path: Path
    size: int = Field(ge=0)
    timestamp: float
    timestamp_source: TimestampSource = TimestampSource.created

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def timestamp_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)


class DuplicateSet(BaseModel):
    """Two or more records sharing a normalized filename and an exact size."""

    model_config = ConfigDict(frozen=True)

    normalized_name: str
    size: int
    records: tuple[FileRecord, ...] = Field(min_length=2)


class Resolution(BaseModel):
    """Keeper selection for one DuplicateSet."""

    model_config = ConfigDict(frozen=True)

    duplicate_set: DuplicateSet
    keeper: FileRecord
    to_delete: tuple[FileRecord, ...]

    @property
    def space_reclaimable_bytes(self) -> int:
        return sum(record.size for record in self.to_delete)


class CollectionResult(BaseModel):
    """Output of the collector: usable records plus skip warnings."""

    records: list[FileRecord] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    not_files: int = 0

    @property
    def skipped(self) -> int:
        return len(self.warnings)


class DeletionResult(BaseModel):
    """Result of the DELETING phase."""

    total_to_delete: int = 0
    deleted: int = 0
    errors: int = 0
    space_reclaimed_bytes: int = 0
    error_details: list[tuple[str, str]] = Field(default_factory=list)  # (file_path, error)


class DedupRun(BaseModel):
    """Outcome of one engine run."""

    target_directory: Path
    dry_run: bool = False
    status: RunState = RunState.scanning
    history: list[RunState] = Field(default_factory=lambda: [RunState.scanning])
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    files_collected: int = 0
    entries_skipped: int = 0
    duplicate_sets: int = 0
    files_to_delete: int = 0
    space_reclaimable_bytes: int = 0
    files_deleted: int = 0
    errors: int = 0
    resolutions: list[Resolution] = Field(default_factory=list)

    @property
    def elapsed_seconds(self) -> float:
        return (datetime.now(timezone.utc) - self.started_at).total_seconds()

    def transition(self, state: RunState) -> None:
        """Move to `state`, recording it in the history."""
        if self.status in TERMINAL_STATES:
            raise ValueError(f"Run already finished in state {self.status.value}")
        self.status = state
        self.history.append(state)
