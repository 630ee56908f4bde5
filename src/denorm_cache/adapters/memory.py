"""In-memory storage adapter."""

from typing import Any


class MemoryAdapter:
    """Dict-backed storage. Values are kept by reference, never copied."""

    def __init__(self) -> None:
        self._cache: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        """Get a cached value by key."""
        return self._cache.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""
        self._cache[key] = value

    def has(self, key: str) -> bool:
        """Check whether a key is present."""
        return key in self._cache

    def clear(self) -> None:
        """Remove every entry."""
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
