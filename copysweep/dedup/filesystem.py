"""
Thin I/O collaborators around the dedup engine.

- list_directory: non-recursive enumeration with per-entry metadata
- remove_file: single file removal
- prompt_yes_no: one-line interactive confirmation

The engine receives these as plain callables so tests can substitute fakes.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Callable, Optional

import structlog

from copysweep.dedup.models import DirectoryEntry, EntryFailure, EntryMetadata
from copysweep.exceptions import DirectoryReadError

logger = structlog.get_logger(__name__)

AFFIRMATIVE_ANSWERS = frozenset({"y", "yes"})


def list_directory(directory: Path) -> list[DirectoryEntry]:
    """
    Enumerate the direct children of `directory` in sorted path order.

    Metadata follows symlinks. Creation time comes from st_birthtime where
    the platform exposes it and is None otherwise.

    Raises:
        DirectoryReadError: If the directory itself cannot be enumerated
    """
    try:
        with os.scandir(directory) as it:
            dir_entries = sorted(it, key=lambda e: e.path)
    except OSError as e:
        logger.error("dedup_directory_unreadable", directory=str(directory), error=str(e))
        raise DirectoryReadError(directory, e) from e

    entries: list[DirectoryEntry] = []
    for dir_entry in dir_entries:
        path = Path(dir_entry.path)
        try:
            st = dir_entry.stat()
        except OSError as e:
            entries.append(EntryFailure(path=path, error=str(e)))
            continue

        entries.append(
            EntryMetadata(
                path=path,
                is_file=stat.S_ISREG(st.st_mode),
                size=st.st_size,
                created=getattr(st, "st_birthtime", None),
                modified=st.st_mtime,
            )
        )

    logger.debug("dedup_directory_listed", directory=str(directory), entries=len(entries))
    return entries


def remove_file(path: Path) -> None:
    """Remove one file. Raises OSError on failure."""
    Path(path).unlink()


def prompt_yes_no(question: str, input_fn: Optional[Callable[[str], str]] = None) -> bool:
    """
    Ask `question` and read one line of input.

    Only "y" and "yes" (any case) are affirmative. Empty input and end of
    input are a decline.
    """
    try:
        answer = (input_fn or input)(question)
    except EOFError:
        return False
    return answer.strip().lower() in AFFIRMATIVE_ANSWERS
