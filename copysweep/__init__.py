"""copysweep - remove copy-suffix duplicates from a directory."""

__version__ = "0.1.0"
