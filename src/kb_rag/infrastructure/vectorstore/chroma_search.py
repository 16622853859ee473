from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from kb_rag.domain.document import Document

log = logging.getLogger(__name__)


def scope_filter(key: str, scope_ids: Sequence[int]) -> dict[str, Any]:
    """Chroma `where` clause restricting hits to the given knowledge bases."""
    return {key: {"$in": [int(i) for i in scope_ids]}}


class ChromaSimilaritySearch:
    """SimilaritySearchPort adapter backed by LangChain-Chroma.

    Reads an existing collection; chunks are expected to carry the owning knowledge base
    id under `scope_key` in their metadata.
    """

    def __init__(
        self,
        collection: str,
        persist_dir: Path,
        embedder: Any,
        *,
        scope_key: str = "kb_id",
        db: Any | None = None,
    ) -> None:
        self.scope_key = scope_key
        if db is None:
            from langchain_chroma import Chroma

            db = Chroma(
                collection_name=collection,
                persist_directory=str(persist_dir),
                embedding_function=embedder,
            )
        self._db = db

    @property
    def db(self) -> Any:
        return self._db

    @staticmethod
    def _to_domain(d: Any, score: float) -> Document:
        # LC Document has .page_content and .metadata
        txt = getattr(d, "page_content", None) or ""
        md = getattr(d, "metadata", None) or {}
        return Document(text=txt, metadata=dict(md), score=float(score))

    def similarity_search(
        self, query: str, scope_ids: Sequence[int], top_k: int, min_score: float
    ) -> list[Document]:
        pairs = self._db.similarity_search_with_relevance_scores(
            query, k=int(top_k), filter=scope_filter(self.scope_key, scope_ids)
        )
        kept = [(d, s) for (d, s) in pairs if s >= float(min_score)]
        log.debug(
            "chroma.search k=%d min_score=%.2f raw=%d kept=%d",
            top_k,
            min_score,
            len(pairs),
            len(kept),
        )
        return [self._to_domain(d, s) for (d, s) in kept]


class ChromaScopeRegistry:
    """KnowledgeScopePort over the same Chroma collection.

    Access counts are kept per process; display names are read from chunk metadata and
    fall back to the id.
    """

    def __init__(self, db: Any, *, scope_key: str = "kb_id", name_key: str = "kb_name") -> None:
        self._db = db
        self.scope_key = scope_key
        self.name_key = name_key
        self.access_counts: Counter[int] = Counter()

    def record_access(self, scope_ids: Sequence[int]) -> None:
        self.access_counts.update(int(i) for i in scope_ids)
        log.info("Knowledge base question counts updated: kb_ids=%s", list(scope_ids))

    def _lookup_name(self, scope_id: int) -> str | None:
        raw = getattr(self._db, "_collection", None)
        if raw is None:
            return None
        got = raw.get(where={self.scope_key: int(scope_id)}, limit=1, include=["metadatas"])
        metas = (got or {}).get("metadatas") or []
        if not metas or not metas[0]:
            return None
        name = metas[0].get(self.name_key)
        return str(name) if name else None

    def get_names(self, scope_ids: Sequence[int]) -> list[str]:
        names: list[str] = []
        for i in scope_ids:
            try:
                name = self._lookup_name(i)
            except Exception as e:  # noqa: BLE001
                log.warning("Knowledge base name lookup failed for %s: %s", i, e)
                name = None
            names.append(name or str(i))
        return names
