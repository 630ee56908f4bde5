"""Exceptions raised by denorm_cache."""


class DenormCacheError(Exception):
    """Base class for all denorm_cache errors."""


class InvalidEntityError(DenormCacheError, ValueError):
    """An entity is missing the fields needed to derive its cache key."""


class UnknownRelationshipFormatError(DenormCacheError, TypeError):
    """Relationship data is neither a single item, None, nor a sequence."""

    def __init__(self, name: str, data: object) -> None:
        super().__init__(
            f"Unknown relationship format for {name!r}: {type(data).__name__}"
        )
        self.name = name
        self.data = data
