"""
Memory host configuration.
Single source of truth for environment and host settings.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def get_settings():
    """Return host settings read from the current environment."""
    return Settings()


class Settings:
    """Host settings loaded from environment."""

    # Host
    APP_TITLE: str = "memory-host"
    LOG_LEVEL: int = logging.INFO

    # Storage: JSON file backing the memory
    MEMORY_PATH: Path

    def __init__(self):
        self.APP_TITLE = (os.environ.get("APP_TITLE") or "memory-host").strip()
        self.MEMORY_PATH = Path(os.environ.get("MEMORY_PATH") or "data/memory.json")
        level = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
        resolved = logging.getLevelName(level)
        self.LOG_LEVEL = resolved if isinstance(resolved, int) else logging.INFO
