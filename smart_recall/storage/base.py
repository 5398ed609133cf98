"""Abstract interface for the persistent knowledge store."""

from abc import ABC, abstractmethod
from typing import Any

from smart_recall.storage.models import KnowledgeItem, SearchQuery, SearchResult


class KnowledgeStore(ABC):
    """Abstract base class for knowledge, query and result persistence.

    Every owner-scoped method only ever sees rows belonging to ``owner_id``.
    Implementations raise ``StorageError`` when the backend fails.
    """

    @abstractmethod
    async def create_knowledge_item(self, item: KnowledgeItem) -> KnowledgeItem:
        """Insert a knowledge item and return it with id and timestamps."""
        pass

    @abstractmethod
    async def update_knowledge_item(
        self, owner_id: str, item_id: str, changes: dict[str, Any]
    ) -> KnowledgeItem | None:
        """Apply column changes to one of the owner's items. None if it does not exist."""
        pass

    @abstractmethod
    async def delete_knowledge_item(self, owner_id: str, item_id: str) -> bool:
        """Delete one of the owner's items. False if it does not exist."""
        pass

    @abstractmethod
    async def get_knowledge_item(self, owner_id: str, item_id: str) -> KnowledgeItem | None:
        """Fetch one of the owner's items."""
        pass

    @abstractmethod
    async def list_knowledge_items(self, owner_id: str) -> list[KnowledgeItem]:
        """List the owner's items, newest first."""
        pass

    @abstractmethod
    async def search_knowledge(
        self, owner_id: str, query: str, limit: int = 5
    ) -> list[KnowledgeItem]:
        """Full-text search over the content of the owner's items."""
        pass

    @abstractmethod
    async def create_search_query(self, query: SearchQuery) -> SearchQuery:
        """Record a search submission."""
        pass

    @abstractmethod
    async def list_search_queries(self, owner_id: str, limit: int = 5) -> list[SearchQuery]:
        """List the owner's most recent searches, newest first."""
        pass

    @abstractmethod
    async def create_search_result(self, result: SearchResult) -> SearchResult:
        """Record the answer for a search. Allowed regardless of row ownership."""
        pass

    @abstractmethod
    async def list_search_results(self, owner_id: str, query_id: str) -> list[SearchResult]:
        """List results of a query, if that query belongs to the owner."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the store is reachable."""
        pass

    async def close(self) -> None:
        """Release any network resources held by the store."""
        return None
