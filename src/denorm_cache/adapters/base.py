"""Storage adapter protocol for cache backends."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StorageAdapter(Protocol):
    """Flat key -> value store backing a DenormCache."""

    def get(self, key: str) -> Any | None:
        """Get a cached value by key."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""
        ...

    def has(self, key: str) -> bool:
        """Check whether a key is present."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...
