from .llm_port import LLMPort
from .scope_port import KnowledgeScopePort
from .similarity_search_port import SimilaritySearchPort

__all__ = [
    "SimilaritySearchPort",
    "LLMPort",
    "KnowledgeScopePort",
]
