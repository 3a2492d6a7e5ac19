"""Errors raised by memory backends."""


class StoreError(Exception):
    """Base class for all memory store failures."""


class ClosedError(StoreError):
    """The memory was used after close()."""

    def __init__(self, message: str = "memory was already closed"):
        super().__init__(message)


class FileOpenError(StoreError):
    """The backing file could not be opened for reading or writing."""


class DecodeError(StoreError):
    """The backing file does not contain a JSON object of strings."""


class EncodeError(StoreError):
    """The in-memory data could not be serialized as JSON."""


class FlushError(StoreError):
    """The backing file could not be closed after writing; data may be lost."""
