"""Tests for package exports."""


def test_public_api_available() -> None:
    """Test that the public API is importable from the package root."""
    from denorm_cache import (
        Collection,
        DenormCache,
        Item,
        ItemRef,
        MemoryAdapter,
        StorageAdapter,
        UnknownRelationshipFormatError,
        collection_key,
        create_cache,
        item_key,
    )

    # Just verify they're importable
    assert DenormCache is not None
    assert create_cache is not None
    assert Item is not None
    assert ItemRef is not None
    assert Collection is not None
    assert MemoryAdapter is not None
    assert StorageAdapter is not None
    assert UnknownRelationshipFormatError is not None
    assert item_key is not None
    assert collection_key is not None


def test_cache_surface() -> None:
    """Test that DenormCache exposes the documented operations."""
    from denorm_cache import DenormCache

    for name in (
        "flush",
        "cache_item",
        "cache_collection",
        "is_item_cache_valid",
        "is_collection_cache_valid",
        "get_item",
        "get_collection",
        "has_item",
        "has_collection",
    ):
        assert callable(getattr(DenormCache, name))
