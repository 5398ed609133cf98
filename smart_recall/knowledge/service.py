"""Knowledge base management with input validation."""

import logging
from typing import Any

from smart_recall.errors import InvalidInputError, NotFoundError, UnauthenticatedError
from smart_recall.storage.base import KnowledgeStore
from smart_recall.storage.models import ContentType, KnowledgeItem

logger = logging.getLogger(__name__)


def parse_tags(tags: str | list[str] | None) -> list[str]:
    """Normalize tags given as a comma separated string or a list.

    Whitespace is trimmed, empty tags dropped and duplicates removed while
    keeping the first occurrence.
    """
    if tags is None:
        return []
    if isinstance(tags, str):
        raw = tags.split(",")
    elif isinstance(tags, list) and all(isinstance(tag, str) for tag in tags):
        raw = tags
    else:
        raise InvalidInputError("Tags must be a comma separated string or a list of strings")

    parsed: list[str] = []
    for tag in raw:
        tag = tag.strip()
        if tag and tag not in parsed:
            parsed.append(tag)
    return parsed


def parse_content_type(value: str | ContentType | None) -> ContentType:
    if value is None or value == "":
        return ContentType.DOCUMENT
    try:
        return ContentType(value)
    except (ValueError, TypeError):
        allowed = ", ".join(content_type.value for content_type in ContentType)
        raise InvalidInputError(f"Unknown content type '{value}'. Allowed: {allowed}")


def _require_owner(owner_id: str | None) -> str:
    if not owner_id:
        raise UnauthenticatedError("Caller identity is required")
    return owner_id


def _require_text(name: str, value: str | None) -> str:
    if value is not None and not isinstance(value, str):
        raise InvalidInputError(f"{name} must be a string")
    if value is None or not value.strip():
        raise InvalidInputError(f"{name} is required")
    return value


def _parse_metadata(metadata: dict[str, Any] | None) -> dict[str, Any]:
    if metadata is None:
        return {}
    if not isinstance(metadata, dict):
        raise InvalidInputError("Metadata must be a JSON object")
    return dict(metadata)


class KnowledgeService:
    """Create, edit, delete and list an owner's knowledge items."""

    def __init__(self, store: KnowledgeStore):
        self.store = store

    async def add_item(
        self,
        owner_id: str | None,
        title: str | None,
        content: str | None,
        content_type: str | ContentType | None = None,
        tags: str | list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> KnowledgeItem:
        """Add an item to the owner's knowledge base.

        Raises:
            UnauthenticatedError: If no owner is given
            InvalidInputError: If title or content is blank or the content type is unknown
        """
        owner_id = _require_owner(owner_id)
        item = KnowledgeItem(
            owner_id=owner_id,
            title=_require_text("Title", title),
            content=_require_text("Content", content),
            content_type=parse_content_type(content_type),
            tags=parse_tags(tags),
            metadata=_parse_metadata(metadata),
        )
        created = await self.store.create_knowledge_item(item)
        logger.info(f"Added knowledge item {created.id} for owner {owner_id}")
        return created

    async def update_item(
        self,
        owner_id: str | None,
        item_id: str,
        title: str | None = None,
        content: str | None = None,
        content_type: str | ContentType | None = None,
        tags: str | list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> KnowledgeItem:
        """Edit one of the owner's items. Omitted fields are left unchanged.

        Raises:
            UnauthenticatedError: If no owner is given
            InvalidInputError: If a given field is invalid or nothing is changed
            NotFoundError: If the item does not exist for this owner
        """
        owner_id = _require_owner(owner_id)

        changes: dict[str, Any] = {}
        if title is not None:
            changes["title"] = _require_text("Title", title)
        if content is not None:
            changes["content"] = _require_text("Content", content)
        if content_type is not None:
            changes["content_type"] = parse_content_type(content_type).value
        if tags is not None:
            changes["tags"] = parse_tags(tags)
        if metadata is not None:
            changes["metadata"] = _parse_metadata(metadata)
        if not changes:
            raise InvalidInputError("No fields to update")

        updated = await self.store.update_knowledge_item(owner_id, item_id, changes)
        if updated is None:
            raise NotFoundError(f"Knowledge item {item_id} not found")
        logger.info(f"Updated knowledge item {item_id}")
        return updated

    async def delete_item(self, owner_id: str | None, item_id: str) -> None:
        owner_id = _require_owner(owner_id)
        if not await self.store.delete_knowledge_item(owner_id, item_id):
            raise NotFoundError(f"Knowledge item {item_id} not found")
        logger.info(f"Deleted knowledge item {item_id}")

    async def get_item(self, owner_id: str | None, item_id: str) -> KnowledgeItem:
        owner_id = _require_owner(owner_id)
        item = await self.store.get_knowledge_item(owner_id, item_id)
        if item is None:
            raise NotFoundError(f"Knowledge item {item_id} not found")
        return item

    async def list_items(self, owner_id: str | None) -> list[KnowledgeItem]:
        """List the owner's items, newest first."""
        return await self.store.list_knowledge_items(_require_owner(owner_id))
