"""
Keeper selection for duplicate sets.

The keeper is the record with the earliest timestamp. Among equal
timestamps the first record in set order wins, so resolving the same set
twice always yields the same keeper.
"""

from __future__ import annotations

from typing import Iterable

from copysweep.dedup.models import DedupAction, DuplicateSet, FileRecord, Resolution


def select_keeper(duplicate_set: DuplicateSet) -> FileRecord:
    """Return the earliest record of the set (first one on ties)."""
    # min() returns the first minimal element, which fixes the tie-break.
    return min(duplicate_set.records, key=lambda record: record.timestamp)


def resolve(duplicate_set: DuplicateSet) -> Resolution:
    """
    Split a set into exactly one keeper and its deletion candidates.

    Pure: no filesystem access, no mutation of the input.
    """
    keeper = select_keeper(duplicate_set)
    to_delete = tuple(record for record in duplicate_set.records if record.path != keeper.path)
    return Resolution(duplicate_set=duplicate_set, keeper=keeper, to_delete=to_delete)


def resolve_all(duplicate_sets: Iterable[DuplicateSet]) -> list[Resolution]:
    """Resolve every set, preserving order."""
    return [resolve(duplicate_set) for duplicate_set in duplicate_sets]


def action_for(resolution: Resolution, record: FileRecord) -> DedupAction:
    """Keep or delete, for one member of a resolved set."""
    return DedupAction.keep if record.path == resolution.keeper.path else DedupAction.delete
