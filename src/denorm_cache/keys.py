"""Cache key derivation.

Items are keyed ``"{schema}.{id}"`` and collections ``"{schema}.{tag}"``.
"""

from collections.abc import Mapping
from typing import Any

from denorm_cache.errors import InvalidEntityError
from denorm_cache.status import (
    get_collection_description,
    get_item_id,
    get_item_schema,
)
from denorm_cache.types import CollectionDescriber, CollectionDescription


def item_key(item: Any) -> str:
    """Derive the cache key of an item from its schema and id."""
    schema = get_item_schema(item)
    item_id = get_item_id(item)
    if schema is None or item_id is None:
        raise InvalidEntityError(f"Item needs a schema and an id: {item!r}")
    return f"{schema}.{item_id}"


def collection_key(
    collection: Any,
    describe: CollectionDescriber = get_collection_description,
) -> str:
    """Derive the cache key of a collection from its schema and tag."""
    description = describe(collection)
    if isinstance(description, Mapping):
        description = CollectionDescription(
            description.get("schema"), description.get("tag")
        )
    elif isinstance(description, tuple) and len(description) == 2:
        description = CollectionDescription(*description)
    elif not isinstance(description, CollectionDescription):
        raise InvalidEntityError(
            f"Collection description must be a (schema, tag) pair: {description!r}"
        )
    if description.schema is None or description.tag is None:
        raise InvalidEntityError(
            f"Collection needs a schema and a tag: {collection!r}"
        )
    return f"{description.schema}.{description.tag}"
