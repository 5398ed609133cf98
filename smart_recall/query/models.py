"""Query processing models and data structures."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from smart_recall.storage.models import KnowledgeItem, format_timestamp


class PipelineStage(str, Enum):
    """Stages a search passes through, in order."""

    RECEIVED = "received"
    QUERY_PERSISTED = "query_persisted"
    RETRIEVED = "retrieved"
    SCORED = "scored"
    PROMPT_BUILT = "prompt_built"
    MODEL_INVOKED = "model_invoked"
    RESULT_PERSISTED = "result_persisted"
    RESPONDED = "responded"
    FAILED = "failed"


@dataclass
class QueryContext:
    """Context information for a query."""

    owner_id: str | None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class KnowledgeMatch:
    """Lightweight projection of a retrieved knowledge item."""

    title: str
    content: str
    tags: list[str]
    created_at: datetime | None = None

    @classmethod
    def from_item(cls, item: KnowledgeItem) -> "KnowledgeMatch":
        return cls(
            title=item.title,
            content=item.content,
            tags=list(item.tags),
            created_at=item.created_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "created_at": format_timestamp(self.created_at),
        }


@dataclass
class QueryResult:
    """Complete result of query processing."""

    query_id: str
    query: str
    response_text: str
    knowledge_matches: list[KnowledgeMatch]
    confidence: float
    processing_time_ms: int
    fragments: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True when a non-fatal step failed along the way."""
        return bool(self.warnings)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the search endpoint's response body."""
        return {
            "response": self.response_text,
            "knowledgeMatches": [match.to_dict() for match in self.knowledge_matches],
            "processingTime": self.processing_time_ms,
            "queryId": self.query_id,
            "confidence": self.confidence,
            "fragments": list(self.fragments),
            "warnings": list(self.warnings),
        }
