"""Persisted record types and their row mappings."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ContentType(str, Enum):
    """Kinds of knowledge a user can store."""

    DOCUMENT = "document"
    NOTE = "note"
    PRESENTATION = "presentation"
    SPREADSHEET = "spreadsheet"
    IMAGE = "image"
    VIDEO = "video"
    OTHER = "other"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp as returned by PostgREST."""
    if value is None or isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class KnowledgeItem:
    """A note or document owned by exactly one user."""

    owner_id: str
    title: str
    content: str
    content_type: ContentType = ContentType.DOCUMENT
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_row(self) -> dict[str, Any]:
        """Columns written on insert; id and timestamps are assigned by the store."""
        return {
            "user_id": self.owner_id,
            "title": self.title,
            "content": self.content,
            "content_type": ContentType(self.content_type).value,
            "tags": list(self.tags),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "KnowledgeItem":
        content_type = row.get("content_type") or ContentType.DOCUMENT.value
        try:
            content_type = ContentType(content_type)
        except ValueError:
            content_type = ContentType.OTHER
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            owner_id=str(row.get("user_id") or ""),
            title=row.get("title") or "",
            content=row.get("content") or "",
            content_type=content_type,
            tags=list(row.get("tags") or []),
            metadata=dict(row.get("metadata") or {}),
            created_at=parse_timestamp(row.get("created_at")),
            updated_at=parse_timestamp(row.get("updated_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "content_type": ContentType(self.content_type).value,
            "tags": list(self.tags),
            "metadata": dict(self.metadata),
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }


@dataclass
class SearchQuery:
    """One search submission. Never modified after it is written."""

    owner_id: str
    query_text: str
    fragments: list[str] = field(default_factory=list)
    context: dict[str, Any] = field(default_factory=dict)
    id: str | None = None
    created_at: datetime | None = None

    def to_row(self) -> dict[str, Any]:
        return {
            "user_id": self.owner_id,
            "query_text": self.query_text,
            "query_fragments": list(self.fragments),
            "search_context": dict(self.context),
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "SearchQuery":
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            owner_id=str(row.get("user_id") or ""),
            query_text=row.get("query_text") or "",
            fragments=list(row.get("query_fragments") or []),
            context=dict(row.get("search_context") or {}),
            created_at=parse_timestamp(row.get("created_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "query": self.query_text,
            "fragments": list(self.fragments),
            "context": dict(self.context),
            "created_at": format_timestamp(self.created_at),
        }


@dataclass
class SearchResult:
    """The answer produced for a SearchQuery. Written once, never mutated."""

    query_id: str
    response_text: str
    knowledge_matches: list[dict[str, Any]] = field(default_factory=list)
    fragments: list[str] = field(default_factory=list)
    confidence: float = 0.0
    processing_time_ms: int = 0
    result_type: str = "text"
    id: str | None = None
    created_at: datetime | None = None

    def to_row(self) -> dict[str, Any]:
        return {
            "query_id": self.query_id,
            "result_data": {
                "ai_response": self.response_text,
                "knowledge_matches": list(self.knowledge_matches),
                "fragments": list(self.fragments),
            },
            "confidence_score": round(self.confidence, 2),
            "result_type": self.result_type,
            "processing_time_ms": self.processing_time_ms,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "SearchResult":
        data = row.get("result_data") or {}
        return cls(
            id=str(row["id"]) if row.get("id") is not None else None,
            query_id=str(row.get("query_id") or ""),
            response_text=data.get("ai_response") or "",
            knowledge_matches=list(data.get("knowledge_matches") or []),
            fragments=list(data.get("fragments") or []),
            confidence=float(row.get("confidence_score") or 0.0),
            processing_time_ms=int(row.get("processing_time_ms") or 0),
            result_type=row.get("result_type") or "text",
            created_at=parse_timestamp(row.get("created_at")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "queryId": self.query_id,
            "response": self.response_text,
            "knowledgeMatches": list(self.knowledge_matches),
            "fragments": list(self.fragments),
            "confidence": self.confidence,
            "processingTime": self.processing_time_ms,
            "created_at": format_timestamp(self.created_at),
        }
