"""Tests for knowledge base management."""

import pytest

from smart_recall.errors import InvalidInputError, NotFoundError, UnauthenticatedError
from smart_recall.knowledge import KnowledgeService, parse_tags
from smart_recall.storage.models import ContentType


class TestParseTags:
    """Test tag normalization."""

    def test_comma_separated_string(self):
        assert parse_tags(" work, ai ,, slides ") == ["work", "ai", "slides"]

    def test_list_and_duplicates(self):
        assert parse_tags(["work", " work", "ai", ""]) == ["work", "ai"]

    def test_none(self):
        assert parse_tags(None) == []

    @pytest.mark.parametrize("tags", [5, {"a": 1}, ["work", 3]])
    def test_rejects_other_types(self, tags):
        with pytest.raises(InvalidInputError, match="Tags must be"):
            parse_tags(tags)


class TestKnowledgeService:
    """Test CRUD validation."""

    @pytest.fixture
    def service(self, store):
        return KnowledgeService(store)

    @pytest.mark.asyncio
    async def test_add_item(self, service):
        item = await service.add_item(
            "user-1", title="Q3 Deck", content="marketing", content_type="presentation", tags="work, q3"
        )

        assert item.id
        assert item.content_type == ContentType.PRESENTATION
        assert item.tags == ["work", "q3"]

    @pytest.mark.asyncio
    async def test_add_item_defaults_to_document(self, service):
        item = await service.add_item("user-1", title="T", content="C")
        assert item.content_type == ContentType.DOCUMENT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,content", [("", "C"), ("T", "  "), (None, "C"), ("T", None)])
    async def test_title_and_content_required(self, service, store, title, content):
        """Test that blank title or content is rejected without a write."""
        with pytest.raises(InvalidInputError, match="is required"):
            await service.add_item("user-1", title=title, content=content)

        assert await store.list_knowledge_items("user-1") == []

    @pytest.mark.asyncio
    async def test_unknown_content_type(self, service):
        with pytest.raises(InvalidInputError, match="Unknown content type"):
            await service.add_item("user-1", title="T", content="C", content_type="podcast")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("metadata", ["x", [1, 2, 3]])
    async def test_metadata_must_be_object(self, service, store, metadata):
        with pytest.raises(InvalidInputError, match="Metadata must be"):
            await service.add_item("user-1", title="T", content="C", metadata=metadata)

        assert await store.list_knowledge_items("user-1") == []

    @pytest.mark.asyncio
    async def test_requires_owner(self, service):
        with pytest.raises(UnauthenticatedError):
            await service.add_item(None, title="T", content="C")
        with pytest.raises(UnauthenticatedError):
            await service.list_items("")

    @pytest.mark.asyncio
    async def test_update_item(self, service):
        item = await service.add_item("user-1", title="T", content="C", tags="a")

        updated = await service.update_item("user-1", item.id, title="New title", tags=["b", "c"])

        assert updated.title == "New title"
        assert updated.content == "C"
        assert updated.tags == ["b", "c"]

    @pytest.mark.asyncio
    async def test_update_requires_changes(self, service):
        item = await service.add_item("user-1", title="T", content="C")

        with pytest.raises(InvalidInputError, match="No fields"):
            await service.update_item("user-1", item.id)

    @pytest.mark.asyncio
    async def test_update_other_owners_item(self, service):
        item = await service.add_item("user-1", title="T", content="C")

        with pytest.raises(NotFoundError):
            await service.update_item("user-2", item.id, title="Stolen")

    @pytest.mark.asyncio
    async def test_delete_item(self, service):
        item = await service.add_item("user-1", title="T", content="C")

        await service.delete_item("user-1", item.id)

        with pytest.raises(NotFoundError):
            await service.get_item("user-1", item.id)
        with pytest.raises(NotFoundError):
            await service.delete_item("user-1", item.id)

    @pytest.mark.asyncio
    async def test_list_items_newest_first(self, service):
        for title in ["first", "second"]:
            await service.add_item("user-1", title=title, content="C")
        await service.add_item("user-2", title="other", content="C")

        items = await service.list_items("user-1")

        assert [i.title for i in items] == ["second", "first"]
