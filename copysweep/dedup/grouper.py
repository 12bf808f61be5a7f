"""
Two-level duplicate grouping: normalized filename, then exact byte size.

Records sharing a normalized name but not a size are different files under
this heuristic and never share a DuplicateSet.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

import structlog

from copysweep.dedup.models import DuplicateSet, FileRecord
from copysweep.dedup.normalizer import normalize_filename

logger = structlog.get_logger(__name__)


def group_by_normalized_name(records: Iterable[FileRecord]) -> dict[str, list[FileRecord]]:
    """Map each normalized filename to the records that share it."""
    name_groups: dict[str, list[FileRecord]] = defaultdict(list)
    for record in records:
        name_groups[normalize_filename(record.name)].append(record)
    return dict(name_groups)


def partition_by_size(records: Iterable[FileRecord]) -> dict[int, list[FileRecord]]:
    """Map each exact size to the records that have it."""
    size_groups: dict[int, list[FileRecord]] = defaultdict(list)
    for record in records:
        size_groups[record.size].append(record)
    return dict(size_groups)


def find_duplicate_sets(records: Iterable[FileRecord]) -> list[DuplicateSet]:
    """
    Build every DuplicateSet from `records` in one pass.

    Only name groups with 2+ records are sub-partitioned by size, and only
    size groups with 2+ records are kept. Sets come back ordered by
    (normalized name, size); members keep their input order.
    """
    duplicate_sets = []

    for normalized_name, name_group in group_by_normalized_name(records).items():
        if len(name_group) < 2:
            continue

        for size, size_group in partition_by_size(name_group).items():
            if len(size_group) < 2:
                continue

            duplicate_sets.append(
                DuplicateSet(
                    normalized_name=normalized_name,
                    size=size,
                    records=tuple(size_group),
                )
            )

    duplicate_sets.sort(key=lambda s: (s.normalized_name, s.size))

    logger.info(
        "dedup_grouping_completed",
        duplicate_sets=len(duplicate_sets),
        total_duplicates=sum(len(s.records) - 1 for s in duplicate_sets),
    )
    return duplicate_sets
