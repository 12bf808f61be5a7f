"""
copysweep - Canonical exception hierarchy.

Per-entry failures (metadata, filename, timestamps, single deletions) are
reported and counted by the engine, never raised through it. Only failures
that make the whole run meaningless surface as exceptions.
"""


class CopySweepError(Exception):
    """Base exception copysweep."""


class DirectoryReadError(CopySweepError):
    """Target directory cannot be enumerated at all (fatal for the run)."""

    def __init__(self, directory, error):
        self.directory = directory
        self.error = error
        super().__init__(f"Error reading directory '{directory}': {error}")


class ConfigurationError(CopySweepError):
    """Invalid or incomplete configuration."""
