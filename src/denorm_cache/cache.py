"""Validity-checking cache for denormalized items and collections.

The cache stores the last denormalized value of every item (keyed by
``"{schema}.{id}"``) and collection (keyed by ``"{schema}.{tag}"``) and answers
one question: is the value cached for this freshly normalized descriptor still
usable? An item is stale when its own timestamp advanced, when anything it
relates to is stale, or when a to-many relationship gained or lost members.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar

from denorm_cache.adapters.base import StorageAdapter
from denorm_cache.adapters.memory import MemoryAdapter
from denorm_cache.errors import UnknownRelationshipFormatError
from denorm_cache.keys import collection_key, item_key
from denorm_cache.relationships import Absent, Many, Single, classify_relationship
from denorm_cache.status import (
    get_cached_relationship,
    get_collection_description,
    get_collection_items,
    get_item_id,
    get_modification_time,
    get_relationships,
)
from denorm_cache.types import (
    CollectionDescriber,
    Resolver,
    Timestamp,
    TimestampGetter,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Items and collections live in separate namespaces of the adapter so that
# "posts.1" the item never shadows "posts.1" the collection tagged 1
ITEM_NAMESPACE = "item"
COLLECTION_NAMESPACE = "collection"


def is_cache_valid(cached: Timestamp, current: Timestamp) -> bool:
    """Cached data is valid unless the current timestamp progressed past it.

    A missing timestamp on either side counts as modified.
    """
    if cached is None or current is None:
        return False
    return cached >= current


def _is_member(members: Sequence[Any], item: Any) -> bool:
    item_id = get_item_id(item)
    return any(get_item_id(member) == item_id for member in members)


class DenormCache:
    """Cache of denormalized items and collections with recursive validation."""

    def __init__(
        self,
        resolve: Resolver,
        *,
        timestamp_of: TimestampGetter = get_modification_time,
        describe: CollectionDescriber = get_collection_description,
        adapter: StorageAdapter | None = None,
        guard_cycles: bool = True,
    ) -> None:
        self._resolve = resolve
        self._timestamp_of = timestamp_of
        self._describe = describe
        self._adapter: StorageAdapter = (
            adapter if adapter is not None else MemoryAdapter()
        )
        self._guard_cycles = guard_cycles
        # Item keys already walked in the current validation pass
        self._visited: set[str] | None = None

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def flush(self) -> None:
        """Drop every cached item and collection."""
        self._adapter.clear()

    def _item_storage_key(self, item: Any) -> str:
        return f"{ITEM_NAMESPACE}:{item_key(item)}"

    def _collection_storage_key(self, collection: Any) -> str:
        key = collection_key(collection, self._describe)
        return f"{COLLECTION_NAMESPACE}:{key}"

    def get_item(self, item: Any) -> Any | None:
        return self._adapter.get(self._item_storage_key(item))

    def get_collection(self, collection: Any) -> Any | None:
        return self._adapter.get(self._collection_storage_key(collection))

    def has_item(self, item: Any) -> bool:
        return self._adapter.has(self._item_storage_key(item))

    def has_collection(self, collection: Any) -> bool:
        return self._adapter.has(self._collection_storage_key(collection))

    def cache_item(self, item: T) -> T:
        """Store a denormalized item by reference and return it."""
        key = self._item_storage_key(item)
        self._adapter.set(key, item)
        return self._adapter.get(key)

    def cache_collection(self, collection: T) -> T:
        """Store a denormalized collection by reference and return it."""
        key = self._collection_storage_key(collection)
        self._adapter.set(key, collection)
        return self._adapter.get(key)

    # -------------------------------------------------------------------------
    # Modification checks
    # -------------------------------------------------------------------------

    def _is_entity_updated(self, entity: Any, cached_entity: Any) -> bool:
        return is_cache_valid(
            self._timestamp_of(cached_entity), self._timestamp_of(entity)
        )

    def is_item_modified(self, item: Any) -> bool:
        """True when the item is not cached or its timestamp moved forward."""
        if not self.has_item(item):
            logger.debug("Cache miss for item %s", item_key(item))
            return True
        if not self._is_entity_updated(item, self.get_item(item)):
            logger.debug("Item %s was modified", item_key(item))
            return True
        return False

    def is_collection_modified(self, collection: Any) -> bool:
        """True when the collection is not cached or its timestamp moved forward.

        Only the collection's own timestamp is compared; members are checked
        by ``are_collection_items_changed``.
        """
        key = self._collection_storage_key(collection)
        if not self._adapter.has(key):
            logger.debug("Cache miss for collection %s", key)
            return True
        if not self._is_entity_updated(collection, self._adapter.get(key)):
            logger.debug("Collection %s was modified", key)
            return True
        return False

    # -------------------------------------------------------------------------
    # Validity
    # -------------------------------------------------------------------------

    @contextmanager
    def _validation_pass(self) -> Iterator[None]:
        """Share one visited set across a top-level check and its recursion."""
        if self._visited is not None:
            yield
            return
        self._visited = set()
        try:
            yield
        finally:
            self._visited = None

    def is_item_cache_valid(self, descriptor: Any) -> bool:
        """Check whether the cached copy of an item can be reused.

        The descriptor is resolved to its normalized item first. The item is
        valid when it is not modified and none of its relationships changed,
        recursively.
        """
        with self._validation_pass():
            item = self._resolve(descriptor)
            if self._guard_cycles and self._visited is not None:
                key = item_key(item)
                if key in self._visited:
                    logger.debug("Item %s already checked in this pass", key)
                    return True
                self._visited.add(key)

            if self.is_item_modified(item):
                return False
            return self.are_cached_item_relationships_valid(item)

    def is_collection_cache_valid(self, collection: Any) -> bool:
        """Check whether the cached copy of a collection can be reused."""
        with self._validation_pass():
            if self.is_collection_modified(collection):
                return False
            cached_collection = self.get_collection(collection)
            return not self.are_collection_items_changed(
                get_collection_items(collection),
                get_collection_items(cached_collection),
            )

    def are_collection_items_changed(
        self,
        items: Sequence[Any],
        cached_items: Sequence[Any] | None = None,
    ) -> bool:
        """Compare fresh collection members against the cached ones.

        Members are matched by id. Any member that is new or no longer valid
        counts as a change, and so does any cached member missing from the
        fresh list.
        """
        if cached_items is None:
            cached_items = []

        with self._validation_pass():
            matched = 0
            for item in items:
                if not _is_member(cached_items, item):
                    logger.debug("Member %r was added", get_item_id(item))
                    return True
                if not self.is_item_cache_valid(item):
                    return True
                matched += 1

        if matched != len(cached_items):
            logger.debug(
                "Members were removed (%d cached, %d matched)",
                len(cached_items),
                matched,
            )
            return True
        return False

    def are_cached_item_relationships_valid(self, item: Any) -> bool:
        """Check every relationship present on the fresh item.

        Relationships that only exist on the cached copy are not checked, so
        dropping a relationship altogether does not invalidate the item.
        """
        with self._validation_pass():
            for name in get_relationships(item):
                if self.is_relationship_changed(item, name):
                    logger.debug(
                        "Relationship %r of %s changed", name, item_key(item)
                    )
                    return False
        return True

    def is_relationship_changed(self, item: Any, name: str) -> bool:
        """Check one relationship of a fresh item against its cached parent.

        An empty to-one relationship is changed iff the cached parent still
        holds a value for it.

        Raises:
            UnknownRelationshipFormatError: the relationship data has an
                unsupported shape.
        """
        data = get_relationships(item).get(name)
        relationship = classify_relationship(name, data)

        with self._validation_pass():
            match relationship:
                case Single(descriptor=descriptor):
                    return not self.is_item_cache_valid(descriptor)
                case Many(descriptors=descriptors):
                    cached = get_cached_relationship(self.get_item(item), name)
                    if not isinstance(cached, (list, tuple)):
                        cached = None
                    return self.are_collection_items_changed(descriptors, cached)
                case Absent():
                    cached = get_cached_relationship(self.get_item(item), name)
                    return cached is not None
        raise UnknownRelationshipFormatError(name, data)


def create_cache(
    *,
    resolve: Resolver,
    timestamp_of: TimestampGetter = get_modification_time,
    describe: CollectionDescriber = get_collection_description,
    adapter: StorageAdapter | None = None,
    guard_cycles: bool = True,
) -> DenormCache:
    """Create a denormalization cache.

    Args:
        resolve: Maps a descriptor to its normalized item
        timestamp_of: Extracts the modification timestamp of an entity
        describe: Returns the (schema, tag) of a collection
        adapter: Storage backend (default: a fresh MemoryAdapter)
        guard_cycles: Track visited items so cyclic graphs terminate

    Returns:
        DenormCache instance
    """
    for name, fn in (
        ("resolve", resolve),
        ("timestamp_of", timestamp_of),
        ("describe", describe),
    ):
        if not callable(fn):
            raise ValueError(f"{name} must be callable")
    if adapter is not None and not isinstance(adapter, StorageAdapter):
        raise ValueError("adapter must implement StorageAdapter")

    return DenormCache(
        resolve,
        timestamp_of=timestamp_of,
        describe=describe,
        adapter=adapter,
        guard_cycles=guard_cycles,
    )


__all__ = ["DenormCache", "create_cache", "is_cache_valid"]
