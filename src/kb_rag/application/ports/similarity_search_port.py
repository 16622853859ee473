from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from kb_rag.domain.document import Document


class SimilaritySearchPort(Protocol):
    """Vector similarity search restricted to a set of knowledge bases.

    Implementations apply `min_score` themselves and may return an empty list.
    """

    def similarity_search(
        self, query: str, scope_ids: Sequence[int], top_k: int, min_score: float
    ) -> list[Document]:  # pragma: no cover - interface
        ...
