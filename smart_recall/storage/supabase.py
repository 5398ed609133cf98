"""Supabase persistence over the PostgREST HTTP API."""

import logging
from typing import Any

import httpx

from smart_recall.config import get_settings
from smart_recall.errors import StorageError
from smart_recall.storage.base import KnowledgeStore
from smart_recall.storage.models import KnowledgeItem, SearchQuery, SearchResult

logger = logging.getLogger(__name__)

KNOWLEDGE_TABLE = "knowledge_base"
QUERIES_TABLE = "search_queries"
RESULTS_TABLE = "search_results"

RETURN_REPRESENTATION = "return=representation"


class SupabaseKnowledgeStore(KnowledgeStore):
    """Supabase implementation of the knowledge store.

    Requests are made with the service role key, which bypasses row level
    security, so every owner-scoped request filters on ``user_id`` itself.
    """

    def __init__(
        self,
        url: str | None = None,
        service_role_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the PostgREST client.

        Args:
            url: Supabase project URL (optional, uses config if not provided)
            service_role_key: Service role key (optional, uses config if not provided)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used to stub the API in tests
        """
        if url is None or service_role_key is None or timeout is None:
            settings = get_settings()
            url = url or settings.supabase_url
            service_role_key = service_role_key or settings.supabase_service_role_key
            timeout = timeout or settings.request_timeout

        if not url or not service_role_key:
            raise ValueError("Supabase URL and service role key are required")

        self.rest_url = f"{url.rstrip('/')}/rest/v1"
        self.client = httpx.AsyncClient(
            base_url=self.rest_url,
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": service_role_key,
                "Authorization": f"Bearer {service_role_key}",
                "Content-Type": "application/json",
            },
        )
        logger.info(f"Using Supabase store at {self.rest_url}")

    async def _request(
        self,
        method: str,
        table: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> list[dict[str, Any]]:
        """Send a PostgREST request and return the rows in the response body."""
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await self.client.request(
                method, f"/{table}", params=params, json=json, headers=headers
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Supabase {method} {table} failed: {e.response.status_code} {e.response.text}"
            )
            raise StorageError(
                f"{method} {table} failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Supabase {method} {table} request failed: {e}")
            raise StorageError(f"{method} {table} request failed: {e}") from e

        if not response.content:
            return []
        data = response.json()
        return data if isinstance(data, list) else [data]

    async def create_knowledge_item(self, item: KnowledgeItem) -> KnowledgeItem:
        rows = await self._request(
            "POST", KNOWLEDGE_TABLE, json=item.to_row(), prefer=RETURN_REPRESENTATION
        )
        if not rows:
            raise StorageError("Insert into knowledge_base returned no row")
        return KnowledgeItem.from_row(rows[0])

    async def update_knowledge_item(
        self, owner_id: str, item_id: str, changes: dict[str, Any]
    ) -> KnowledgeItem | None:
        rows = await self._request(
            "PATCH",
            KNOWLEDGE_TABLE,
            params={"id": f"eq.{item_id}", "user_id": f"eq.{owner_id}"},
            json=changes,
            prefer=RETURN_REPRESENTATION,
        )
        return KnowledgeItem.from_row(rows[0]) if rows else None

    async def delete_knowledge_item(self, owner_id: str, item_id: str) -> bool:
        rows = await self._request(
            "DELETE",
            KNOWLEDGE_TABLE,
            params={"id": f"eq.{item_id}", "user_id": f"eq.{owner_id}"},
            prefer=RETURN_REPRESENTATION,
        )
        return bool(rows)

    async def get_knowledge_item(self, owner_id: str, item_id: str) -> KnowledgeItem | None:
        rows = await self._request(
            "GET",
            KNOWLEDGE_TABLE,
            params={
                "select": "*",
                "id": f"eq.{item_id}",
                "user_id": f"eq.{owner_id}",
                "limit": 1,
            },
        )
        return KnowledgeItem.from_row(rows[0]) if rows else None

    async def list_knowledge_items(self, owner_id: str) -> list[KnowledgeItem]:
        rows = await self._request(
            "GET",
            KNOWLEDGE_TABLE,
            params={"select": "*", "user_id": f"eq.{owner_id}", "order": "created_at.desc"},
        )
        return [KnowledgeItem.from_row(row) for row in rows]

    async def search_knowledge(
        self, owner_id: str, query: str, limit: int = 5
    ) -> list[KnowledgeItem]:
        """Search content with Postgres websearch_to_tsquery semantics."""
        rows = await self._request(
            "GET",
            KNOWLEDGE_TABLE,
            params={
                "select": "*",
                "user_id": f"eq.{owner_id}",
                "content": f"wfts.{query}",
                "limit": limit,
            },
        )
        return [KnowledgeItem.from_row(row) for row in rows]

    async def create_search_query(self, query: SearchQuery) -> SearchQuery:
        rows = await self._request(
            "POST", QUERIES_TABLE, json=query.to_row(), prefer=RETURN_REPRESENTATION
        )
        if not rows:
            raise StorageError("Insert into search_queries returned no row")
        return SearchQuery.from_row(rows[0])

    async def list_search_queries(self, owner_id: str, limit: int = 5) -> list[SearchQuery]:
        rows = await self._request(
            "GET",
            QUERIES_TABLE,
            params={
                "select": "*",
                "user_id": f"eq.{owner_id}",
                "order": "created_at.desc",
                "limit": limit,
            },
        )
        return [SearchQuery.from_row(row) for row in rows]

    async def create_search_result(self, result: SearchResult) -> SearchResult:
        rows = await self._request(
            "POST", RESULTS_TABLE, json=result.to_row(), prefer=RETURN_REPRESENTATION
        )
        if not rows:
            raise StorageError("Insert into search_results returned no row")
        return SearchResult.from_row(rows[0])

    async def list_search_results(self, owner_id: str, query_id: str) -> list[SearchResult]:
        owned = await self._request(
            "GET",
            QUERIES_TABLE,
            params={"select": "id", "id": f"eq.{query_id}", "user_id": f"eq.{owner_id}"},
        )
        if not owned:
            return []

        rows = await self._request(
            "GET",
            RESULTS_TABLE,
            params={"select": "*", "query_id": f"eq.{query_id}", "order": "created_at.desc"},
        )
        return [SearchResult.from_row(row) for row in rows]

    async def health_check(self) -> bool:
        try:
            response = await self.client.get(
                f"/{KNOWLEDGE_TABLE}", params={"select": "id", "limit": 1}
            )
            return response.status_code == 200
        except Exception as e:
            logger.warning(f"Supabase health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
