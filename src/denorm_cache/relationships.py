"""Relationship data as a tagged variant: Absent, Single or Many."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from denorm_cache.errors import UnknownRelationshipFormatError
from denorm_cache.types import Item, ItemRef


def _is_descriptor(data: Any) -> bool:
    if isinstance(data, (Item, ItemRef, Mapping)):
        return True
    return hasattr(data, "schema") and hasattr(data, "id")


@dataclass(frozen=True, slots=True)
class Absent:
    """An empty to-one relationship (``None``)."""


@dataclass(frozen=True, slots=True)
class Single:
    """A to-one relationship pointing at one item descriptor."""

    descriptor: Any


@dataclass(frozen=True, slots=True)
class Many:
    """A to-many relationship: an ordered list of item descriptors."""

    descriptors: tuple[Any, ...]


RelationshipData = Absent | Single | Many


def classify_relationship(name: str, data: Any) -> RelationshipData:
    """Classify raw relationship data.

    Raises:
        UnknownRelationshipFormatError: data is not None, an item descriptor,
            or a list/tuple of descriptors.
    """
    if data is None:
        return Absent()
    if _is_descriptor(data):
        return Single(data)
    if isinstance(data, (list, tuple)):
        return Many(tuple(data))
    raise UnknownRelationshipFormatError(name, data)
