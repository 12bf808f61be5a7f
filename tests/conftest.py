"""
Shared pytest fixtures for copysweep.

- Logging: structlog configured once, WARNING level, stderr
- Settings: get_settings() cache cleared around each test
- Records: small factories for FileRecord / DirectoryEntry values
"""

import sys
from pathlib import Path

import pytest

# Add repo root to PYTHONPATH (once for every test module)
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from copysweep.config.logging import configure_logging  # noqa: E402
from copysweep.config.settings import get_settings  # noqa: E402
from copysweep.dedup.models import EntryMetadata, FileRecord, TimestampSource  # noqa: E402


@pytest.fixture(autouse=True)
def quiet_logging():
    """
    Diagnostic logs at WARNING on stderr, so stdout holds only the report.

    Reconfigured after each test: a test that configures logging under capsys
    would otherwise leave the root handler bound to a closed capture stream.
    """
    configure_logging(level="WARNING", json_format=False)
    yield
    configure_logging(level="WARNING", json_format=False)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """get_settings() is lru_cached; environment changes need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_record(
    path,
    size: int = 1000,
    timestamp: float = 1_700_000_000.0,
    source: TimestampSource = TimestampSource.created,
) -> FileRecord:
    """Build a FileRecord without touching the filesystem."""
    return FileRecord(path=Path(path), size=size, timestamp=timestamp, timestamp_source=source)


def make_entry(
    path,
    size: int = 1000,
    created=1_700_000_000.0,
    modified=1_700_000_000.0,
    is_file: bool = True,
) -> EntryMetadata:
    """Build a directory entry as the filesystem layer would report it."""
    return EntryMetadata(
        path=Path(path),
        is_file=is_file,
        size=size,
        created=created,
        modified=modified,
    )


@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def entry_factory():
    return make_entry
