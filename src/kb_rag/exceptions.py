from __future__ import annotations


class KnowledgeBaseQueryError(Exception):
    """Raised when answering a knowledge-base question fails after retrieval."""

    code = "KNOWLEDGE_BASE_QUERY_FAILED"


class ConfigurationError(Exception):
    """Raised for invalid or missing configuration."""
