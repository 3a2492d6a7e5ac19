"""Pydantic models for memory configuration and snapshots."""

from .options import MemoryOptions, Snapshot

__all__ = [
    "MemoryOptions",
    "Snapshot",
]
