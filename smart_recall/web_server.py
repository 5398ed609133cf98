"""HTTP server exposing smart search and the knowledge base."""

import json
import logging
from typing import Any, Awaitable, Callable

from aiohttp import web

from smart_recall.errors import InvalidInputError, SmartRecallError
from smart_recall.knowledge import KnowledgeService
from smart_recall.query import QueryContext, QueryProcessor

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
}

SEARCH_FAILED = "Search failed, please try again."
KNOWLEDGE_FAILED = "Knowledge base request failed, please try again."

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Answer preflight requests and add CORS headers to every response."""
    if request.method == "OPTIONS":
        return web.Response(headers=CORS_HEADERS)
    response = await handler(request)
    response.headers.update(CORS_HEADERS)
    return response


def error_response(error: SmartRecallError, message: str) -> web.Response:
    """Build a failure response carrying only a message and a category label."""
    return web.json_response(
        {"error": message, "category": error.category}, status=error.status_code
    )


async def read_json(request: web.Request) -> dict[str, Any]:
    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidInputError(f"Malformed JSON body: {e}")
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return data


class WebServer:
    """HTTP server for search and knowledge base endpoints."""

    def __init__(
        self,
        processor: QueryProcessor,
        knowledge: KnowledgeService,
        host: str = "0.0.0.0",
        port: int = 3000,
    ):
        """Initialize web server."""
        self.processor = processor
        self.knowledge = knowledge
        self.host = host
        self.port = port
        self.app = web.Application(middlewares=[cors_middleware])
        self._setup_routes()
        logger.info(f"Web server initialized on port {port}")

    def _setup_routes(self):
        """Set up HTTP routes."""
        self.app.router.add_get("/", self._handle_health)
        self.app.router.add_get("/health", self._handle_health)
        self.app.router.add_post("/api/search", self._handle_search)
        self.app.router.add_get("/api/search/history", self._handle_search_history)
        self.app.router.add_get("/api/search/{query_id}", self._handle_search_results)
        self.app.router.add_get("/api/knowledge", self._handle_list_knowledge)
        self.app.router.add_post("/api/knowledge", self._handle_create_knowledge)
        self.app.router.add_get("/api/knowledge/{item_id}", self._handle_get_knowledge)
        self.app.router.add_put("/api/knowledge/{item_id}", self._handle_update_knowledge)
        self.app.router.add_delete("/api/knowledge/{item_id}", self._handle_delete_knowledge)
        logger.info("Routes configured: /, /health, /api/search, /api/knowledge")

    async def _handle_health(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        health = await self.processor.health_check()
        status = "healthy" if health["overall"] else "degraded"
        return web.json_response({"status": status, "service": "Smart Recall", "checks": health})

    async def _handle_search(self, request: web.Request) -> web.Response:
        """
        Handle smart search requests.

        Expects JSON: {"query": "...", "userId": "..."}
        """
        try:
            data = await read_json(request)
            query = data.get("query")
            if query is not None and not isinstance(query, str):
                raise InvalidInputError("Query must be a string")
            context = QueryContext(owner_id=data.get("userId"))
            result = await self.processor.process_query(query or "", context)
            return web.json_response(result.to_dict())

        except SmartRecallError as e:
            logger.warning(f"Search request failed ({e.category}): {e}")
            return error_response(e, SEARCH_FAILED)
        except Exception as e:
            logger.error(f"Error handling search request: {e}", exc_info=True)
            return web.json_response({"error": SEARCH_FAILED, "category": "error"}, status=500)

    async def _handle_search_history(self, request: web.Request) -> web.Response:
        try:
            limit = int(request.query.get("limit", "5"))
        except ValueError:
            error = InvalidInputError("limit must be an integer")
            return error_response(error, str(error))
        if limit < 1:
            error = InvalidInputError("limit must be at least 1")
            return error_response(error, str(error))

        try:
            queries = await self.processor.recent_queries(request.query.get("userId"), limit=limit)
            return web.json_response({"queries": [query.to_dict() for query in queries]})
        except SmartRecallError as e:
            logger.warning(f"History request failed ({e.category}): {e}")
            return error_response(e, SEARCH_FAILED)

    async def _handle_search_results(self, request: web.Request) -> web.Response:
        try:
            results = await self.processor.query_results(
                request.query.get("userId"), request.match_info["query_id"]
            )
            return web.json_response({"results": [result.to_dict() for result in results]})
        except SmartRecallError as e:
            logger.warning(f"Result lookup failed ({e.category}): {e}")
            return error_response(e, SEARCH_FAILED)

    async def _knowledge_call(self, call: Callable[[], Awaitable[Any]]) -> web.Response:
        """Run a knowledge base operation and map its errors to responses."""
        try:
            return await call()
        except SmartRecallError as e:
            logger.warning(f"Knowledge request failed ({e.category}): {e}")
            message = str(e) if e.status_code < 500 else KNOWLEDGE_FAILED
            return error_response(e, message)
        except Exception as e:
            logger.error(f"Error handling knowledge request: {e}", exc_info=True)
            return web.json_response({"error": KNOWLEDGE_FAILED, "category": "error"}, status=500)

    async def _handle_list_knowledge(self, request: web.Request) -> web.Response:
        async def call():
            items = await self.knowledge.list_items(request.query.get("userId"))
            return web.json_response({"items": [item.to_dict() for item in items]})

        return await self._knowledge_call(call)

    async def _handle_get_knowledge(self, request: web.Request) -> web.Response:
        async def call():
            item = await self.knowledge.get_item(
                request.query.get("userId"), request.match_info["item_id"]
            )
            return web.json_response(item.to_dict())

        return await self._knowledge_call(call)

    async def _handle_create_knowledge(self, request: web.Request) -> web.Response:
        async def call():
            data = await read_json(request)
            item = await self.knowledge.add_item(
                data.get("userId"),
                title=data.get("title"),
                content=data.get("content"),
                content_type=data.get("content_type"),
                tags=data.get("tags"),
                metadata=data.get("metadata"),
            )
            return web.json_response(item.to_dict(), status=201)

        return await self._knowledge_call(call)

    async def _handle_update_knowledge(self, request: web.Request) -> web.Response:
        async def call():
            data = await read_json(request)
            item = await self.knowledge.update_item(
                data.get("userId"),
                request.match_info["item_id"],
                title=data.get("title"),
                content=data.get("content"),
                content_type=data.get("content_type"),
                tags=data.get("tags"),
                metadata=data.get("metadata"),
            )
            return web.json_response(item.to_dict())

        return await self._knowledge_call(call)

    async def _handle_delete_knowledge(self, request: web.Request) -> web.Response:
        async def call():
            await self.knowledge.delete_item(
                request.query.get("userId"), request.match_info["item_id"]
            )
            return web.Response(status=204)

        return await self._knowledge_call(call)

    async def start(self):
        """Start the web server."""
        runner = web.AppRunner(self.app)
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()
        logger.info(f"Web server started on {self.host}:{self.port}")
        logger.info(f"Search endpoint: http://localhost:{self.port}/api/search")
        return runner

    async def stop(self, runner):
        """Stop the web server."""
        await runner.cleanup()
        logger.info("Web server stopped")
