"""Tests for the Supabase PostgREST store."""

import json

import httpx
import pytest

from smart_recall.errors import StorageError
from smart_recall.storage.models import ContentType, KnowledgeItem, SearchQuery, SearchResult
from smart_recall.storage.supabase import SupabaseKnowledgeStore

ITEM_ROW = {
    "id": "6f34cd5d-0000-0000-0000-000000000001",
    "user_id": "user-1",
    "title": "Q3 Marketing Deck",
    "content": "presentation about marketing strategy",
    "content_type": "presentation",
    "tags": ["work"],
    "metadata": {},
    "created_at": "2025-08-20T10:32:32.123456+00:00",
    "updated_at": "2025-08-20T10:32:32.123456+00:00",
}


class RecordingTransport:
    """Collects requests and answers them with a handler."""

    def __init__(self, handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def make_store(handler) -> tuple[SupabaseKnowledgeStore, RecordingTransport]:
    recorder = RecordingTransport(handler)
    store = SupabaseKnowledgeStore(
        url="https://abc.supabase.co",
        service_role_key="service-key",
        timeout=5,
        transport=httpx.MockTransport(recorder),
    )
    return store, recorder


class TestSupabaseKnowledgeStore:
    """Test request shapes and row mapping."""

    @pytest.mark.asyncio
    async def test_search_knowledge_request(self):
        """Test the full-text search request is owner scoped and limited."""
        store, recorder = make_store(lambda request: httpx.Response(200, json=[ITEM_ROW]))

        items = await store.search_knowledge("user-1", "marketing presentation", limit=5)

        request = recorder.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/knowledge_base"
        assert request.url.params["user_id"] == "eq.user-1"
        assert request.url.params["content"] == "wfts.marketing presentation"
        assert request.url.params["limit"] == "5"
        assert request.headers["apikey"] == "service-key"
        assert request.headers["authorization"] == "Bearer service-key"

        assert len(items) == 1
        assert items[0].title == "Q3 Marketing Deck"
        assert items[0].content_type == ContentType.PRESENTATION
        assert items[0].created_at.year == 2025

    @pytest.mark.asyncio
    async def test_create_search_query(self):
        """Test inserting a query returns the stored row."""

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            return httpx.Response(
                201,
                json=[{**body, "id": "q-1", "created_at": "2025-08-20T10:32:32Z"}],
            )

        store, recorder = make_store(handler)

        saved = await store.create_search_query(
            SearchQuery(owner_id="user-1", query_text="blue, folder", fragments=["blue", "folder"])
        )

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/rest/v1/search_queries"
        assert request.headers["prefer"] == "return=representation"
        assert json.loads(request.content) == {
            "user_id": "user-1",
            "query_text": "blue, folder",
            "query_fragments": ["blue", "folder"],
            "search_context": {},
        }
        assert saved.id == "q-1"
        assert saved.fragments == ["blue", "folder"]

    @pytest.mark.asyncio
    async def test_create_search_result_row_shape(self):
        """Test the result row keeps answer and matches under result_data."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json=[{**json.loads(request.content), "id": "r-1"}])

        store, recorder = make_store(handler)

        saved = await store.create_search_result(
            SearchResult(
                query_id="q-1",
                response_text="answer",
                knowledge_matches=[{"title": "T"}],
                fragments=["marketing"],
                confidence=0.954,
                processing_time_ms=120,
            )
        )

        body = json.loads(recorder.requests[0].content)
        assert body["result_data"] == {
            "ai_response": "answer",
            "knowledge_matches": [{"title": "T"}],
            "fragments": ["marketing"],
        }
        assert body["confidence_score"] == 0.95
        assert body["processing_time_ms"] == 120
        assert saved.response_text == "answer"

    @pytest.mark.asyncio
    async def test_update_missing_item_returns_none(self):
        """Test that updating a row the owner does not have returns None."""
        store, recorder = make_store(lambda request: httpx.Response(200, json=[]))

        updated = await store.update_knowledge_item("user-1", "missing", {"title": "New"})

        assert updated is None
        assert recorder.requests[0].method == "PATCH"
        assert recorder.requests[0].url.params["id"] == "eq.missing"
        assert recorder.requests[0].url.params["user_id"] == "eq.user-1"

    @pytest.mark.asyncio
    async def test_delete_item(self):
        store, _ = make_store(lambda request: httpx.Response(200, json=[ITEM_ROW]))

        assert await store.delete_knowledge_item("user-1", ITEM_ROW["id"]) is True

    @pytest.mark.asyncio
    async def test_list_results_checks_query_owner(self):
        """Test that results are only read after the query ownership check."""
        store, recorder = make_store(lambda request: httpx.Response(200, json=[]))

        results = await store.list_search_results("user-2", "q-1")

        assert results == []
        assert len(recorder.requests) == 1
        assert recorder.requests[0].url.path == "/rest/v1/search_queries"

    @pytest.mark.asyncio
    async def test_http_error_raises_storage_error(self):
        """Test that non-2xx responses become StorageError."""
        store, _ = make_store(lambda request: httpx.Response(503, json={"message": "unavailable"}))

        with pytest.raises(StorageError, match="503"):
            await store.create_knowledge_item(
                KnowledgeItem(owner_id="user-1", title="T", content="C")
            )

    @pytest.mark.asyncio
    async def test_connection_error_raises_storage_error(self):
        """Test that network failures become StorageError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        store, _ = make_store(handler)

        with pytest.raises(StorageError, match="request failed"):
            await store.list_knowledge_items("user-1")

    @pytest.mark.asyncio
    async def test_health_check(self):
        store, _ = make_store(lambda request: httpx.Response(200, json=[]))
        assert await store.health_check() is True

    def test_requires_credentials(self):
        """Test that the store refuses to start without credentials."""
        with pytest.raises(ValueError, match="required"):
            SupabaseKnowledgeStore(url="", service_role_key="", timeout=5)
