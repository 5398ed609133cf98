"""In-process store for local development and tests."""

import copy
import re
import uuid
from datetime import datetime, timezone
from typing import Any

from smart_recall.storage.base import KnowledgeStore
from smart_recall.storage.models import KnowledgeItem, SearchQuery, SearchResult

# Dropped from search terms, roughly what the Postgres english dictionary ignores
STOP_WORDS = frozenset(
    {
        "a", "about", "an", "and", "are", "as", "at", "be", "by", "for", "from",
        "in", "is", "it", "of", "on", "or", "something", "that", "the", "this",
        "to", "was", "with",
    }
)

UPDATABLE_FIELDS = ("title", "content", "content_type", "tags", "metadata")


def search_terms(query: str) -> list[str]:
    """Split a query into lowercase search terms."""
    return [term for term in re.findall(r"\w+", query.lower()) if term not in STOP_WORDS]


class InMemoryKnowledgeStore(KnowledgeStore):
    """Dictionary-backed store with the same ownership rules as Supabase.

    Search requires every term to occur in the item content, the way an
    unquoted websearch query ANDs its words.
    """

    def __init__(self) -> None:
        self._items: dict[str, KnowledgeItem] = {}
        self._queries: dict[str, SearchQuery] = {}
        self._results: dict[str, SearchResult] = {}
        self._sequence: dict[str, int] = {}

    def _stamp(self, record_id: str) -> datetime:
        self._sequence[record_id] = len(self._sequence)
        return datetime.now(timezone.utc)

    def _newest_first(self, records: list[Any]) -> list[Any]:
        return sorted(
            records,
            key=lambda record: (record.created_at, self._sequence[record.id]),
            reverse=True,
        )

    async def create_knowledge_item(self, item: KnowledgeItem) -> KnowledgeItem:
        stored = copy.deepcopy(item)
        stored.id = str(uuid.uuid4())
        stored.created_at = stored.updated_at = self._stamp(stored.id)
        self._items[stored.id] = stored
        return copy.deepcopy(stored)

    async def update_knowledge_item(
        self, owner_id: str, item_id: str, changes: dict[str, Any]
    ) -> KnowledgeItem | None:
        item = self._items.get(item_id)
        if item is None or item.owner_id != owner_id:
            return None
        for name in UPDATABLE_FIELDS:
            if name in changes:
                setattr(item, name, copy.deepcopy(changes[name]))
        item.updated_at = datetime.now(timezone.utc)
        return copy.deepcopy(item)

    async def delete_knowledge_item(self, owner_id: str, item_id: str) -> bool:
        item = self._items.get(item_id)
        if item is None or item.owner_id != owner_id:
            return False
        del self._items[item_id]
        return True

    async def get_knowledge_item(self, owner_id: str, item_id: str) -> KnowledgeItem | None:
        item = self._items.get(item_id)
        if item is None or item.owner_id != owner_id:
            return None
        return copy.deepcopy(item)

    async def list_knowledge_items(self, owner_id: str) -> list[KnowledgeItem]:
        owned = [item for item in self._items.values() if item.owner_id == owner_id]
        return [copy.deepcopy(item) for item in self._newest_first(owned)]

    async def search_knowledge(
        self, owner_id: str, query: str, limit: int = 5
    ) -> list[KnowledgeItem]:
        terms = search_terms(query)
        if not terms:
            return []

        scored = []
        for item in await self.list_knowledge_items(owner_id):
            content = item.content.lower()
            if all(term in content for term in terms):
                hits = sum(content.count(term) for term in terms)
                scored.append((hits, item))

        # sorted() is stable, so equal hit counts stay newest first
        scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
        return [item for _, item in scored[:limit]]

    async def create_search_query(self, query: SearchQuery) -> SearchQuery:
        stored = copy.deepcopy(query)
        stored.id = str(uuid.uuid4())
        stored.created_at = self._stamp(stored.id)
        self._queries[stored.id] = stored
        return copy.deepcopy(stored)

    async def list_search_queries(self, owner_id: str, limit: int = 5) -> list[SearchQuery]:
        owned = [query for query in self._queries.values() if query.owner_id == owner_id]
        return [copy.deepcopy(query) for query in self._newest_first(owned)[:limit]]

    async def create_search_result(self, result: SearchResult) -> SearchResult:
        stored = copy.deepcopy(result)
        stored.id = str(uuid.uuid4())
        stored.created_at = self._stamp(stored.id)
        self._results[stored.id] = stored
        return copy.deepcopy(stored)

    async def list_search_results(self, owner_id: str, query_id: str) -> list[SearchResult]:
        query = self._queries.get(query_id)
        if query is None or query.owner_id != owner_id:
            return []
        results = [result for result in self._results.values() if result.query_id == query_id]
        return [copy.deepcopy(result) for result in self._newest_first(results)]

    async def health_check(self) -> bool:
        return True
