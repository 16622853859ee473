from .answer_question import KnowledgeBaseQueryUseCase, QueryResponse
from .retrieve_context import RetrievalOrchestrator
from .rewrite_query import QueryRewriter

__all__ = [
    "KnowledgeBaseQueryUseCase",
    "QueryResponse",
    "RetrievalOrchestrator",
    "QueryRewriter",
]
