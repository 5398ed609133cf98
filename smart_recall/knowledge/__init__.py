"""Knowledge base management module."""

from .service import KnowledgeService, parse_content_type, parse_tags

__all__ = ["KnowledgeService", "parse_content_type", "parse_tags"]
