"""Query-to-answer pipeline for fragment-based recall."""

import logging
import time
from datetime import datetime, timezone

from smart_recall.config import Settings, get_settings
from smart_recall.errors import (
    InvalidInputError,
    ModelUnavailableError,
    NotFoundError,
    SmartRecallError,
    StorageError,
    UnauthenticatedError,
)
from smart_recall.llm.base import GenerationParams, LLMProvider
from smart_recall.llm.factory import create_llm_provider
from smart_recall.storage.base import KnowledgeStore
from smart_recall.storage.models import SearchQuery, SearchResult
from .fragments import extract_fragments
from .models import KnowledgeMatch, PipelineStage, QueryContext, QueryResult
from .prompt import build_prompt
from .retriever import KnowledgeRetriever
from .scoring import calculate_confidence

logger = logging.getLogger(__name__)


class QueryProcessor:
    """Runs a search from the raw query to a persisted, answered result.

    The query row is written before anything else, so a failed model call still
    leaves an auditable record. Retrieval failures and result-write failures do
    not fail the search; they are reported in ``QueryResult.warnings``. Every
    external call is attempted exactly once.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        llm_provider: LLMProvider | None = None,
        retriever: KnowledgeRetriever | None = None,
        generation_params: GenerationParams | None = None,
        settings: Settings | None = None,
    ):
        """Initialize query processor.

        Args:
            store: Store for queries, results and knowledge lookups
            llm_provider: LLM provider, created from settings on first use if None
            retriever: Knowledge retriever, built on ``store`` if None
            generation_params: Sampling parameters, read from settings if None
            settings: Settings to use instead of the global settings
        """
        self.settings = settings or get_settings()
        self.store = store
        self.llm_provider = llm_provider
        self.retriever = retriever or KnowledgeRetriever(
            store, limit=self.settings.search_result_limit
        )
        self.generation_params = generation_params or GenerationParams(
            **self.settings.generation_params()
        )

    def _ensure_provider(self) -> LLMProvider:
        """Create the LLM provider on first use."""
        if self.llm_provider is None:
            try:
                self.llm_provider = create_llm_provider(settings=self.settings)
            except ValueError as e:
                raise ModelUnavailableError(f"Language model is not configured: {e}") from e
        return self.llm_provider

    @staticmethod
    def _failed(stage: PipelineStage, error: SmartRecallError) -> SmartRecallError:
        error.stage = stage.value
        logger.error(f"Search failed at {stage.value}: {error}")
        return error

    async def process_query(self, query: str, context: QueryContext | None) -> QueryResult:
        """Process a complete search.

        Args:
            query: Raw user query
            context: Caller identity and optional extra context

        Returns:
            Answered query result

        Raises:
            UnauthenticatedError: If no owner is given
            InvalidInputError: If the query is empty
            StorageError: If the query cannot be recorded
            ModelUnavailableError: If the language model cannot answer
        """
        start_time = time.monotonic()
        warnings: list[str] = []

        # Received
        owner_id = context.owner_id if context else None
        if not owner_id:
            raise self._failed(
                PipelineStage.RECEIVED, UnauthenticatedError("Caller identity is required")
            )
        if not query or not query.strip():
            raise self._failed(PipelineStage.RECEIVED, InvalidInputError("Query must not be empty"))

        logger.info(f"Processing query for owner {owner_id}: {query}")

        # Query persisted
        fragments = extract_fragments(query)
        search_context = {"timestamp": datetime.now(timezone.utc).isoformat()}
        search_context.update(context.extra)
        try:
            saved_query = await self.store.create_search_query(
                SearchQuery(
                    owner_id=owner_id,
                    query_text=query,
                    fragments=fragments,
                    context=search_context,
                )
            )
        except StorageError as e:
            raise self._failed(PipelineStage.QUERY_PERSISTED, e)
        except Exception as e:
            raise self._failed(
                PipelineStage.QUERY_PERSISTED, StorageError(f"Failed to store query: {e}")
            ) from e
        query_id = saved_query.id
        logger.debug(f"Stored query {query_id} with fragments {fragments}")

        # Retrieved
        matches: list[KnowledgeMatch]
        try:
            matches = await self.retriever.retrieve(query, owner_id)
        except Exception as e:
            logger.warning(f"Knowledge retrieval failed for query {query_id}, continuing without matches: {e}")
            warnings.append(f"knowledge retrieval failed: {e}")
            matches = []
        logger.info(f"Found {len(matches)} knowledge matches")

        # Scored
        confidence = calculate_confidence(query, matches)

        # Prompt built
        prompt = build_prompt(query, matches)

        # Model invoked
        try:
            provider = self._ensure_provider()
            response = await provider.generate_response(prompt, self.generation_params)
        except ModelUnavailableError as e:
            raise self._failed(PipelineStage.MODEL_INVOKED, e)
        except Exception as e:
            raise self._failed(
                PipelineStage.MODEL_INVOKED, ModelUnavailableError(f"Language model error: {e}")
            ) from e

        answer = response.content or "No response generated"
        processing_time_ms = max(0, int((time.monotonic() - start_time) * 1000))

        # Result persisted
        try:
            await self.store.create_search_result(
                SearchResult(
                    query_id=query_id,
                    response_text=answer,
                    knowledge_matches=[match.to_dict() for match in matches],
                    fragments=fragments,
                    confidence=confidence,
                    processing_time_ms=processing_time_ms,
                )
            )
        except Exception as e:
            logger.error(f"Error storing result for query {query_id}: {e}")
            warnings.append(f"result could not be stored: {e}")

        # Responded
        logger.info(
            f"Query {query_id} processed in {processing_time_ms}ms with {confidence:.0%} confidence"
        )
        return QueryResult(
            query_id=query_id,
            query=query,
            response_text=answer,
            knowledge_matches=matches,
            confidence=confidence,
            processing_time_ms=processing_time_ms,
            fragments=fragments,
            warnings=warnings,
        )

    async def recent_queries(self, owner_id: str | None, limit: int = 5) -> list[SearchQuery]:
        """Get the owner's search history, newest first."""
        if not owner_id:
            raise UnauthenticatedError("Caller identity is required")
        if limit < 1:
            raise InvalidInputError("limit must be at least 1")
        return await self.store.list_search_queries(owner_id, limit=limit)

    async def query_results(self, owner_id: str | None, query_id: str) -> list[SearchResult]:
        """Get the stored results of one of the owner's queries."""
        if not owner_id:
            raise UnauthenticatedError("Caller identity is required")
        results = await self.store.list_search_results(owner_id, query_id)
        if not results:
            raise NotFoundError(f"No results for query {query_id}")
        return results

    async def health_check(self) -> dict[str, bool]:
        """Check health of query processing components.

        Returns:
            Health status dictionary
        """
        health = {"store": await self.store.health_check()}

        try:
            health["llm"] = await self._ensure_provider().health_check()
        except ModelUnavailableError as e:
            logger.warning(f"LLM provider unavailable: {e}")
            health["llm"] = False

        health["overall"] = all(health.values())
        return health
