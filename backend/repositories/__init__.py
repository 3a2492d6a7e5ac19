"""Persistence layer: abstract interface and implementations."""

from .base import MemoryProtocol
from .errors import (
    ClosedError,
    DecodeError,
    EncodeError,
    FileOpenError,
    FlushError,
    StoreError,
)
from .file_store import FileMemory, new_memory

__all__ = [
    "MemoryProtocol",
    "FileMemory",
    "new_memory",
    "StoreError",
    "ClosedError",
    "FileOpenError",
    "DecodeError",
    "EncodeError",
    "FlushError",
]
