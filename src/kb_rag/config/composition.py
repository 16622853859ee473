from __future__ import annotations

"""Composition helpers building the query use case with configured adapters.

Keeps environment/settings handling out of the interface layer.
"""

from kb_rag.application.ports.llm_port import LLMPort  # noqa: E402
from kb_rag.application.ports.scope_port import KnowledgeScopePort  # noqa: E402
from kb_rag.application.ports.similarity_search_port import SimilaritySearchPort  # noqa: E402
from kb_rag.application.streaming import StreamNormalizer  # noqa: E402
from kb_rag.application.use_cases import (  # noqa: E402
    KnowledgeBaseQueryUseCase,
    QueryRewriter,
    RetrievalOrchestrator,
)
from kb_rag.config.llm import build_llm_from_env  # noqa: E402
from kb_rag.core.settings import (  # noqa: E402
    RagSettings,
    VectorStoreSettings,
    get_rag_settings,
    get_vector_store_settings,
)
from kb_rag.infrastructure.embeddings.factory import build_embeddings  # noqa: E402
from kb_rag.infrastructure.vectorstore.chroma_search import (  # noqa: E402
    ChromaScopeRegistry,
    ChromaSimilaritySearch,
)


def build_chroma_adapters(
    vs: VectorStoreSettings | None = None,
) -> tuple[ChromaSimilaritySearch, ChromaScopeRegistry]:
    vs = vs or get_vector_store_settings()
    embedder = build_embeddings(vs.embed_provider, vs.embed_model)
    search = ChromaSimilaritySearch(
        vs.collection_name, vs.persist_dir, embedder, scope_key=vs.scope_metadata_key
    )
    scopes = ChromaScopeRegistry(
        search.db, scope_key=vs.scope_metadata_key, name_key=vs.scope_name_key
    )
    return search, scopes


def build_query_use_case(
    *,
    search: SimilaritySearchPort | None = None,
    scopes: KnowledgeScopePort | None = None,
    llm: LLMPort | None = None,
    settings: RagSettings | None = None,
) -> KnowledgeBaseQueryUseCase:
    """Wire settings and adapters; any collaborator can be injected instead."""
    cfg = settings or get_rag_settings()
    if search is None or scopes is None:
        chroma_search, chroma_scopes = build_chroma_adapters()
        search = search or chroma_search
        scopes = scopes or chroma_scopes
    llm = llm or build_llm_from_env()

    rewriter = QueryRewriter(llm=llm, enabled=cfg.rewrite_enabled)
    retriever = RetrievalOrchestrator(
        search=search,
        rewriter=rewriter,
        tiers=cfg.tiers,
        original_first=(cfg.candidate_order == "original_first"),
    )
    return KnowledgeBaseQueryUseCase(
        retriever=retriever,
        llm=llm,
        scopes=scopes,
        normalizer=StreamNormalizer(cfg.stream_probe_chars),
    )


__all__ = ["build_chroma_adapters", "build_query_use_case"]
