"""Tests for relationship classification."""

from dataclasses import dataclass

import pytest

from denorm_cache import (
    Absent,
    Item,
    ItemRef,
    Many,
    Single,
    UnknownRelationshipFormatError,
    classify_relationship,
)


class TestClassifyRelationship:
    """Tests for classify_relationship."""

    def test_none_is_absent(self) -> None:
        assert classify_relationship("author", None) == Absent()

    def test_item_ref_is_single(self) -> None:
        ref = ItemRef("users", 9)
        assert classify_relationship("author", ref) == Single(ref)

    def test_item_is_single(self) -> None:
        item = Item("users", 9)
        assert classify_relationship("author", item) == Single(item)

    def test_mapping_is_single(self) -> None:
        data = {"type": "users", "id": "9"}
        assert classify_relationship("author", data) == Single(data)

    def test_list_is_many(self) -> None:
        refs = [ItemRef("tags", 1), ItemRef("tags", 2)]
        assert classify_relationship("tags", refs) == Many(tuple(refs))

    def test_empty_list_is_many(self) -> None:
        assert classify_relationship("tags", []) == Many(())

    @pytest.mark.parametrize("data", ["users.9", 9, 1.5, {1, 2}])
    def test_unknown_format_raises(self, data: object) -> None:
        """Test that strings, numbers and sets are rejected."""
        with pytest.raises(UnknownRelationshipFormatError) as exc_info:
            classify_relationship("author", data)
        assert exc_info.value.name == "author"
        assert exc_info.value.data == data
        assert isinstance(exc_info.value, TypeError)

    def test_object_with_schema_and_id_is_single(self) -> None:
        """Test that any object exposing schema and id is a descriptor."""

        @dataclass
        class Post:
            schema: str
            id: int

        post = Post("posts", 1)
        assert classify_relationship("post", post) == Single(post)
