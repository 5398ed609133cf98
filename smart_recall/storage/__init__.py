"""Persistence for knowledge items, search queries and search results."""

from .base import KnowledgeStore
from .memory import InMemoryKnowledgeStore
from .models import ContentType, KnowledgeItem, SearchQuery, SearchResult
from .supabase import SupabaseKnowledgeStore


def create_store(settings=None) -> KnowledgeStore:
    """Create the store selected by ``settings.storage_backend``."""
    from smart_recall.config import StorageBackend, get_settings

    settings = settings or get_settings()
    if settings.storage_backend == StorageBackend.MEMORY:
        return InMemoryKnowledgeStore()
    return SupabaseKnowledgeStore(
        url=settings.supabase_url,
        service_role_key=settings.supabase_service_role_key,
        timeout=settings.request_timeout,
    )


__all__ = [
    "ContentType",
    "InMemoryKnowledgeStore",
    "KnowledgeItem",
    "KnowledgeStore",
    "SearchQuery",
    "SearchResult",
    "SupabaseKnowledgeStore",
    "create_store",
]
