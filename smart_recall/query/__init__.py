"""Query processing pipeline module."""

from .fragments import extract_fragments
from .models import KnowledgeMatch, PipelineStage, QueryContext, QueryResult
from .processor import QueryProcessor
from .prompt import build_prompt
from .retriever import KnowledgeRetriever
from .scoring import calculate_confidence

__all__ = [
    "KnowledgeMatch",
    "KnowledgeRetriever",
    "PipelineStage",
    "QueryContext",
    "QueryProcessor",
    "QueryResult",
    "build_prompt",
    "calculate_confidence",
    "extract_fragments",
]
