"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from the environment (and a
.env file) or passed explicitly in tests. Invalid values raise ValueError
at construction time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from remissio.domain.models import Language

_BACKENDS = ("sqlite", "memory")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for Remissio.

    No module-level globals; construct via from_env() or pass explicitly.
    """
    # Storage
    # "sqlite" keeps state in db_path across runs; "memory" lasts one process.
    storage_backend: str = "sqlite"
    db_path: str = "remissio.db"

    # Logging
    log_level: str = "WARNING"

    # Views
    timeline_days: int = 7
    # Used when a profile has no language of its own.
    default_language: str = "de"

    def __post_init__(self) -> None:
        if self.storage_backend not in _BACKENDS:
            raise ValueError(
                f"storage_backend must be one of {_BACKENDS}, got {self.storage_backend!r}"
            )
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {_LOG_LEVELS}, got {self.log_level!r}")
        if self.timeline_days <= 0:
            raise ValueError("timeline_days must be positive")
        if self.default_language not in {lang.value for lang in Language}:
            raise ValueError(f"Unsupported default_language {self.default_language!r}")

    @property
    def db_file(self) -> Path:
        return Path(self.db_path).expanduser()

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> Settings:
        """Build Settings from REMISSIO_* environment variables.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        from dotenv import load_dotenv
        load_dotenv(dotenv_path=env_file)

        raw_days = os.getenv("REMISSIO_TIMELINE_DAYS", "7")
        try:
            timeline_days = int(raw_days)
        except ValueError:
            raise ValueError(
                f"REMISSIO_TIMELINE_DAYS must be a whole number, got {raw_days!r}"
            ) from None

        return cls(
            storage_backend=os.getenv("REMISSIO_STORAGE_BACKEND", "sqlite"),
            db_path=os.getenv("REMISSIO_DB_PATH", "remissio.db"),
            log_level=os.getenv("REMISSIO_LOG_LEVEL", "WARNING").upper(),
            timeline_days=timeline_days,
            default_language=os.getenv("REMISSIO_LANGUAGE", "de"),
        )
