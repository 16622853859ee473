from .chroma_search import ChromaScopeRegistry, ChromaSimilaritySearch

__all__ = ["ChromaSimilaritySearch", "ChromaScopeRegistry"]
