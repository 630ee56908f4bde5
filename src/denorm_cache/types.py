"""Core types for denorm_cache."""

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import Any

# Opaque, totally ordered modification stamp (logical version or wall clock)
Timestamp = Any

EntityId = str | int


@dataclass(frozen=True, slots=True)
class ItemRef:
    """A reference to an item by schema and id."""

    schema: str
    id: EntityId


@dataclass(slots=True)
class Item:
    """A normalized (or denormalized, once cached) entity."""

    schema: str
    id: EntityId
    timestamp: Timestamp = None
    relationships: dict[str, Any] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Collection:
    """An ordered, tagged list of items sharing one schema."""

    schema: str
    tag: Hashable
    items: list[Any] = field(default_factory=list)
    timestamp: Timestamp = None


@dataclass(frozen=True, slots=True)
class CollectionDescription:
    """Schema and tag identifying a logical collection."""

    schema: str
    tag: Hashable


# Injected collaborators
Resolver = Callable[[Any], Any]
TimestampGetter = Callable[[Any], Timestamp]
CollectionDescriber = Callable[[Any], CollectionDescription | tuple[str, Hashable]]
