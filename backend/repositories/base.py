"""Memory backend protocol: the contract a host relies on."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MemoryProtocol(Protocol):
    """Key-value memory of string keys to string values."""

    def get(self, key: str) -> tuple[str, bool]:
        """Return (value, found). Missing keys give ("", False)."""
        ...

    def set(self, key: str, value: str) -> None:
        """Assign value to key."""
        ...

    def delete(self, key: str) -> bool:
        """Remove key. Returns whether it existed."""
        ...

    def keys(self) -> list[str]:
        """All keys, sorted."""
        ...

    def memories(self) -> dict[str, str]:
        """Copy of all key-value pairs."""
        ...

    def close(self) -> None:
        """Release all data; every later call fails."""
        ...
