"""Shared pytest fixtures."""

from typing import Any

import pytest

from denorm_cache import DenormCache, Item, ItemRef, MemoryAdapter, create_cache


class Store(dict[tuple[str, Any], Item]):
    """Normalized state: items by (schema, id)."""

    def put(self, item: Item) -> Item:
        self[(item.schema, item.id)] = item
        return item

    def resolve(self, descriptor: Any) -> Item:
        if isinstance(descriptor, Item):
            return self[(descriptor.schema, descriptor.id)]
        if isinstance(descriptor, ItemRef):
            return self[(descriptor.schema, descriptor.id)]
        return self[(descriptor["type"], descriptor["id"])]


@pytest.fixture
def adapter() -> MemoryAdapter:
    """Create a fresh MemoryAdapter for each test."""
    return MemoryAdapter()


@pytest.fixture
def store() -> Store:
    """Create an empty normalized store."""
    return Store()


@pytest.fixture
def cache(store: Store, adapter: MemoryAdapter) -> DenormCache:
    """Create a cache resolving descriptors against the store."""
    return create_cache(resolve=store.resolve, adapter=adapter)
