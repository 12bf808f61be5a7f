"""
Filename normalization for copy-suffix duplicates.

Maps a filename to a canonical form by stripping the suffixes operating
systems and file managers append when copying a file:

    "notes copy.txt"          -> "notes.txt"      (macOS Finder)
    "notes copy 3.txt"        -> "notes.txt"      (macOS Finder)
    "report - Copy (2).pdf"   -> "report.pdf"     (Windows Explorer)
    "report - Copy.pdf"       -> "report.pdf"     (Windows Explorer)
    "photo (1).jpg"           -> "photo.jpg"      (browsers, Windows)
    "photo(1).jpg"            -> "photo.jpg"

Matching is case-sensitive and only the stem is touched: the extension is
everything after the last dot. A deliberate name ending in "(2)" is stripped
too; the heuristic cannot tell the difference.
"""

from __future__ import annotations

import re
from typing import Optional

# Longer patterns first: " - Copy (2)" must win over the bare " (2)".
COPY_SUFFIX_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r" copy \d+\Z"),
    re.compile(r" copy\Z"),
    re.compile(r" - Copy \(\d+\)\Z"),
    re.compile(r" - Copy\Z"),
    re.compile(r" \(\d+\)\Z"),
    re.compile(r"\(\d+\)\Z"),
)


def split_extension(filename: str) -> tuple[str, Optional[str]]:
    """
    Split `filename` at its last dot.

    Returns:
        (stem, extension) with extension None when there is no dot
    """
    stem, dot, extension = filename.rpartition(".")
    if not dot:
        return filename, None
    return stem, extension


def strip_copy_suffix(stem: str) -> str:
    """Remove the first matching copy suffix from `stem`, if any."""
    for pattern in COPY_SUFFIX_PATTERNS:
        if pattern.search(stem):
            return pattern.sub("", stem, count=1)
    return stem


def normalize_filename(filename: str) -> str:
    """
    Return the canonical form of `filename`.

    Two files differing only by an OS-generated copy suffix normalize to the
    same value. Only one suffix is removed per call.
    """
    stem, extension = split_extension(filename)
    normalized = strip_copy_suffix(stem)

    if extension is None:
        return normalized
    return f"{normalized}.{extension}"
