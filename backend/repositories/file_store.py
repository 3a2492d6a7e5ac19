"""
File-based implementation of MemoryProtocol.
Keeps all values in a dict and mirrors it to a single JSON file on every change.
"""

import enum
import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from pydantic import ValidationError

from schemas import MemoryOptions, Snapshot

from .errors import ClosedError, DecodeError, EncodeError, FileOpenError, FlushError

logger = logging.getLogger(__name__)

FILE_MODE = 0o660


class _State(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class _ReadWriteLock:
    """Many concurrent readers or a single writer."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writers_waiting = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            # new readers queue behind waiting writers
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class FileMemory:
    """
    Memory that stores all values as a JSON encoded file.

    If there is already a JSON file at the configured path it is loaded to serve
    future requests. Every set() or delete() that changes the data rewrites the
    whole file. If that write fails the error is raised but the in-memory change
    is kept: the memory is then ahead of the file.
    """

    def __init__(self, options: MemoryOptions):
        self._path = Path(options.path)
        self._log = options.logger or logger
        self._lock = _ReadWriteLock()
        self._state = _State.OPEN
        self._data: dict[str, str] = self._load()
        self._log.info(
            "Memory initialized successfully path=%s num_memories=%d",
            self._path,
            len(self._data),
        )

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        with self._lock.read():
            return self._state is _State.CLOSED

    def __enter__(self) -> "FileMemory":
        return self

    def __exit__(self, *exc_info) -> None:
        with self._lock.write():
            if self._state is _State.OPEN:
                self._release()

    # Lifecycle

    def _load(self) -> dict[str, str]:
        self._log.debug("Opening memory file path=%s", self._path)
        try:
            f = open(self._path, "r", encoding="utf-8")
        except FileNotFoundError:
            self._log.debug("File does not exist. Continuing with empty memory path=%s", self._path)
            return {}
        except OSError as e:
            raise FileOpenError(f"failed to open file {self._path}") from e

        self._log.debug("Decoding JSON from memory file path=%s", self._path)
        with f:
            try:
                raw = json.load(f)
            except OSError as e:
                raise FileOpenError(f"failed to read file {self._path}") from e
            except (ValueError, RecursionError) as e:
                raise DecodeError("failed to decode data as JSON") from e
        try:
            return Snapshot.validate_python(raw, strict=True)
        except ValidationError as e:
            raise DecodeError("memory file must contain a JSON object of strings") from e

    def _check_open(self) -> None:
        if self._state is _State.CLOSED:
            raise ClosedError()

    def _release(self) -> None:
        self._data = {}
        self._state = _State.CLOSED

    # Reads

    def get(self, key: str) -> tuple[str, bool]:
        """Return the value for key and whether the key exists."""
        with self._lock.read():
            self._check_open()
            if key in self._data:
                return self._data[key], True
            return "", False

    def keys(self) -> list[str]:
        """Return every key in lexicographic order."""
        with self._lock.read():
            self._check_open()
            return sorted(self._data)

    def memories(self) -> dict[str, str]:
        """Return a copy of all key-value pairs."""
        with self._lock.read():
            self._check_open()
            return dict(self._data)

    # Writes

    def set(self, key: str, value: str) -> None:
        """Assign value to key and persist the whole memory."""
        with self._lock.write():
            self._check_open()
            if not isinstance(key, str) or not isinstance(value, str):
                raise TypeError(
                    f"memory keys and values must be str, got {type(key).__name__} and {type(value).__name__}"
                )
            self._data[key] = value
            self._persist()

    def delete(self, key: str) -> bool:
        """
        Remove key and persist the memory.

        Returns False without touching the file when the key does not exist.
        """
        with self._lock.write():
            self._check_open()
            if key not in self._data:
                return False
            del self._data[key]
            self._persist()
            return True

    def close(self) -> None:
        """Drop all data. Every later call, including close(), raises ClosedError."""
        with self._lock.write():
            self._check_open()
            self._release()

    def _persist(self) -> None:
        # Encoded before the file is opened so a failed encode leaves the old snapshot.
        try:
            payload = (json.dumps(self._data) + "\n").encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodeError("failed to encode data as JSON") from e

        # Truncate and rewrite in place; an interrupted write can leave a short file.
        try:
            fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
        except OSError as e:
            raise FileOpenError(f"failed to open file {self._path} to persist data") from e

        f = os.fdopen(fd, "wb")
        try:
            f.write(payload)
        except OSError as e:
            try:
                f.close()
            except OSError:
                pass
            raise FlushError(
                "failed to write file; data might not have been fully persisted to disk"
            ) from e

        try:
            f.close()
        except OSError as e:
            raise FlushError(
                "failed to close file; data might not have been fully persisted to disk"
            ) from e


def new_memory(path: Union[str, Path], logger: Optional[logging.Logger] = None) -> FileMemory:
    """Build a FileMemory for path. Raises StoreError if an existing file cannot be loaded."""
    return FileMemory(MemoryOptions(path=path, logger=logger))
