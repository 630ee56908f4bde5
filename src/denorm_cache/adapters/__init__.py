"""Storage adapters for denorm_cache."""

from denorm_cache.adapters.base import StorageAdapter
from denorm_cache.adapters.memory import MemoryAdapter

__all__ = [
    "MemoryAdapter",
    "StorageAdapter",
]
