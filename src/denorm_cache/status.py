"""Accessors for status metadata and relationships on items and collections.

Entities come in two shapes: the dataclasses from ``denorm_cache.types`` and
plain JSON:API style mappings, where status metadata lives under ``_status``::

    {
        "type": "posts",
        "id": "1",
        "relationships": {"author": {"data": {"type": "users", "id": "9"}}},
        "_status": {"modificationTimestamp": 5},
    }

Collections given as mappings carry ``schema``/``tag`` (or
``_status.description``) and their members under ``items`` or ``data``.
"""

from collections.abc import Mapping
from typing import Any

from denorm_cache.errors import InvalidEntityError
from denorm_cache.types import (
    Collection,
    CollectionDescription,
    Item,
    ItemRef,
    Timestamp,
)

STATUS = "_status"
MODIFICATION_TIMESTAMP = "modificationTimestamp"
DESCRIPTION = "description"

# Members of a JSON:API resource object; a relationship with one of these
# names is never hoisted to a top-level key of a denormalized mapping
RESERVED_MEMBERS = frozenset(
    {
        "type",
        "id",
        "schema",
        "attributes",
        "relationships",
        "links",
        "meta",
        "timestamp",
        STATUS,
    }
)


def _status_of(entity: Mapping[str, Any]) -> Mapping[str, Any]:
    status = entity.get(STATUS)
    return status if isinstance(status, Mapping) else {}


def get_modification_time(entity: Any) -> Timestamp:
    """Return the modification timestamp of an item or collection."""
    if isinstance(entity, (Item, Collection)):
        return entity.timestamp
    if isinstance(entity, Mapping):
        if "timestamp" in entity:
            return entity["timestamp"]
        return _status_of(entity).get(MODIFICATION_TIMESTAMP)
    return getattr(entity, "timestamp", None)


def get_collection_description(collection: Any) -> CollectionDescription:
    """Return the (schema, tag) pair identifying a collection."""
    if isinstance(collection, Collection):
        return CollectionDescription(collection.schema, collection.tag)
    if isinstance(collection, Mapping):
        if "schema" in collection and "tag" in collection:
            return CollectionDescription(collection["schema"], collection["tag"])
        description = _status_of(collection).get(DESCRIPTION)
        if isinstance(description, Mapping):
            try:
                return CollectionDescription(
                    description["schema"], description["tag"]
                )
            except KeyError as e:
                raise InvalidEntityError(
                    f"Collection description is missing {e.args[0]!r}"
                ) from e
    raise InvalidEntityError(f"Cannot describe collection: {collection!r}")


def get_collection_items(collection: Any) -> list[Any]:
    """Return the ordered members of a collection."""
    if isinstance(collection, Collection):
        return list(collection.items)
    if isinstance(collection, Mapping):
        members = collection.get("items", collection.get("data"))
        return list(members) if members is not None else []
    if isinstance(collection, (list, tuple)):
        return list(collection)
    raise InvalidEntityError(f"Cannot read members of collection: {collection!r}")


def unwrap_relationship(value: Any) -> Any:
    """Strip the JSON:API ``{"data": ...}`` envelope if present."""
    if isinstance(value, Mapping) and "data" in value:
        return value["data"]
    return value


def get_relationships(item: Any) -> dict[str, Any]:
    """Return relationship name -> relationship data for a fresh item."""
    if isinstance(item, Item):
        relationships: Mapping[str, Any] = item.relationships
    elif isinstance(item, Mapping):
        relationships = item.get("relationships") or {}
    else:
        relationships = {}
    return {name: unwrap_relationship(value) for name, value in relationships.items()}


def get_cached_relationship(cached_item: Any, name: str) -> Any:
    """Return the value a cached (denormalized) item holds for a relationship.

    Denormalized mappings hoist relationships to top-level keys, so those win
    over the ``relationships`` block, except for names in ``RESERVED_MEMBERS``.
    """
    if cached_item is None:
        return None
    if isinstance(cached_item, Item):
        return unwrap_relationship(cached_item.relationships.get(name))
    if isinstance(cached_item, Mapping):
        if name in RESERVED_MEMBERS:
            return get_relationships(cached_item).get(name)
        if name in cached_item:
            return unwrap_relationship(cached_item[name])
        return get_relationships(cached_item).get(name)
    return getattr(cached_item, name, None)


def get_item_id(item: Any) -> Any:
    """Return the id of an item, item reference or item mapping."""
    if isinstance(item, (Item, ItemRef)):
        return item.id
    if isinstance(item, Mapping):
        return item.get("id")
    return getattr(item, "id", None)


def get_item_schema(item: Any) -> Any:
    """Return the schema (JSON:API ``type``) of an item."""
    if isinstance(item, (Item, ItemRef)):
        return item.schema
    if isinstance(item, Mapping):
        return item.get("type", item.get("schema"))
    return getattr(item, "schema", None)
