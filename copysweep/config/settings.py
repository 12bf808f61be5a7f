"""
copysweep - configuration via Pydantic Settings.

All values come from COPYSWEEP_* environment variables. The only command-line
flag is --dry-run; everything else is ambient configuration.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CopySweepSettings(BaseSettings):
    """copysweep configuration loaded from environment variables."""

    # Logging
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"
    log_colors: bool = False

    # Optional CSV report of the resolved duplicate sets
    report_csv: Optional[Path] = None

    # Scan target; the CLI falls back to the working directory when unset
    target_directory: Optional[Path] = None

    model_config = SettingsConfigDict(env_prefix="COPYSWEEP_", case_sensitive=False)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept only stdlib logging level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> CopySweepSettings:
    """Factory for settings (cached singleton)."""
    return CopySweepSettings()
