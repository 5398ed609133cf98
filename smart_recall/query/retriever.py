"""Owner-scoped knowledge retrieval."""

import logging

from smart_recall.query.models import KnowledgeMatch
from smart_recall.storage.base import KnowledgeStore

logger = logging.getLogger(__name__)


class KnowledgeRetriever:
    """Looks up the owner's knowledge items whose content matches a query."""

    def __init__(self, store: KnowledgeStore, limit: int = 5):
        """Initialize the retriever.

        Args:
            store: Knowledge store to search
            limit: Maximum number of matches returned
        """
        self.store = store
        self.limit = limit

    async def retrieve(self, query: str, owner_id: str) -> list[KnowledgeMatch]:
        """Search the owner's knowledge base.

        Args:
            query: Search text
            owner_id: Owner whose items are searched

        Returns:
            Matches in store ranking order, possibly empty

        Raises:
            StorageError: If the store lookup fails
        """
        items = await self.store.search_knowledge(owner_id, query, limit=self.limit)
        matches = [KnowledgeMatch.from_item(item) for item in items[: self.limit]]
        logger.debug(f"Retrieved {len(matches)} knowledge matches for owner {owner_id}")
        return matches
