from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from kb_rag.application.ports.similarity_search_port import SimilaritySearchPort
from kb_rag.application.use_cases.rewrite_query import QueryRewriter
from kb_rag.domain.document import Document
from kb_rag.domain.hits import is_effective_hit
from kb_rag.domain.query import (
    QueryContext,
    SearchTiers,
    build_candidates,
    normalize_question,
    resolve_search_params,
)
from kb_rag.infra.observability.retrieval_log import log_candidate_event

log = logging.getLogger(__name__)


@dataclass
class RetrievalOrchestrator:
    search: SimilaritySearchPort
    rewriter: QueryRewriter
    tiers: SearchTiers = field(default_factory=SearchTiers)
    # Search the raw question before the rewritten one
    original_first: bool = False

    def build_query_context(self, question: str | None) -> QueryContext:
        normalized = normalize_question(question)
        rewritten = self.rewriter.rewrite(normalized)
        if self.original_first:
            candidates = build_candidates(normalized, rewritten)
        else:
            candidates = build_candidates(rewritten, normalized)
        # Parameters come from the user's own wording, not from the rewrite
        params = resolve_search_params(normalized, self.tiers)
        return QueryContext(normalized, candidates, params)

    def retrieve(self, ctx: QueryContext, scope_ids: Sequence[int]) -> list[Document]:
        """Search candidates in order and return the first effective result set.

        Candidates are tried one after another; later candidates are only searched when
        the earlier ones produced nothing usable. A failing search counts as no hit.
        """
        params = ctx.search_params
        for candidate in ctx.candidate_queries:
            if not candidate.strip():
                continue
            try:
                docs = self.search.similarity_search(
                    candidate, scope_ids, params.top_k, params.min_score
                )
            except Exception as e:  # noqa: BLE001
                log.warning("Similarity search failed for candidate %r: %s", candidate, e)
                continue
            effective = is_effective_hit(candidate, docs)
            log_candidate_event(
                candidate,
                len(docs or []),
                effective,
                top_k=params.top_k,
                min_score=params.min_score,
            )
            if effective:
                return list(docs)
        return []

    def build_context(self, question: str | None, scope_ids: Sequence[int]) -> list[Document]:
        if not normalize_question(question):
            return []
        return self.retrieve(self.build_query_context(question), scope_ids)
