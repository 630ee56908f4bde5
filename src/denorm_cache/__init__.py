"""denorm_cache - validity-checking cache for denormalized API resources."""

from denorm_cache.adapters import MemoryAdapter, StorageAdapter
from denorm_cache.cache import DenormCache, create_cache, is_cache_valid
from denorm_cache.errors import (
    DenormCacheError,
    InvalidEntityError,
    UnknownRelationshipFormatError,
)
from denorm_cache.keys import collection_key, item_key
from denorm_cache.relationships import (
    Absent,
    Many,
    RelationshipData,
    Single,
    classify_relationship,
)
from denorm_cache.status import get_collection_description, get_modification_time
from denorm_cache.types import (
    Collection,
    CollectionDescription,
    Item,
    ItemRef,
    Timestamp,
)

__version__ = "0.1.0"

__all__ = [
    "Absent",
    "Collection",
    "CollectionDescription",
    "DenormCache",
    "DenormCacheError",
    "InvalidEntityError",
    "Item",
    "ItemRef",
    "Many",
    "MemoryAdapter",
    "RelationshipData",
    "Single",
    "StorageAdapter",
    "Timestamp",
    "UnknownRelationshipFormatError",
    "classify_relationship",
    "collection_key",
    "create_cache",
    "get_collection_description",
    "get_modification_time",
    "is_cache_valid",
    "item_key",
]
