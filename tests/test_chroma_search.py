from __future__ import annotations

from pathlib import Path
from typing import Any

from kb_rag.infrastructure.vectorstore.chroma_search import (
    ChromaScopeRegistry,
    ChromaSimilaritySearch,
    scope_filter,
)

# --- Fakes -------------------------------------------------------------------


class LCDoc:
    def __init__(self, page_content: str, metadata: dict[str, Any]) -> None:
        self.page_content = page_content
        self.metadata = metadata


class FakeCollection:
    def __init__(self, metas: dict[int, dict[str, Any]]) -> None:
        self.metas = metas

    def get(self, *, where: dict[str, Any], limit: int, include: list[str]) -> dict[str, Any]:
        (key, value), = where.items()
        meta = self.metas.get(value)
        return {"ids": ["x"] if meta else [], "metadatas": [meta] if meta else []}


class FakeChroma:
    def __init__(self, pairs: list[tuple[LCDoc, float]], metas: dict | None = None) -> None:
        self.pairs = pairs
        self.calls: list[dict[str, Any]] = []
        self._collection = FakeCollection(metas or {})

    def similarity_search_with_relevance_scores(
        self, query: str, k: int, filter: dict[str, Any]
    ) -> list[tuple[LCDoc, float]]:
        self.calls.append({"query": query, "k": k, "filter": filter})
        return self.pairs[:k]


# --- Tests -------------------------------------------------------------------


def test_scope_filter_uses_in_operator() -> None:
    assert scope_filter("kb_id", [3, "4"]) == {"kb_id": {"$in": [3, 4]}}  # type: ignore[list-item]


def test_similarity_search_applies_filter_and_min_score() -> None:
    db = FakeChroma(
        [
            (LCDoc("strong", {"kb_id": 1}), 0.9),
            (LCDoc("weak", {"kb_id": 1}), 0.2),
            (LCDoc("borderline", {"kb_id": 2}), 0.28),
        ]
    )
    search = ChromaSimilaritySearch("kb", Path("unused"), None, db=db)

    docs = search.similarity_search("重试机制", [1, 2], 8, 0.28)

    assert [d.text for d in docs] == ["strong", "borderline"]
    assert docs[0].score == 0.9 and docs[0].metadata == {"kb_id": 1}
    assert db.calls == [{"query": "重试机制", "k": 8, "filter": {"kb_id": {"$in": [1, 2]}}}]


def test_scope_registry_counts_and_names() -> None:
    db = FakeChroma([], metas={1: {"kb_id": 1, "kb_name": "架构手册"}})
    scopes = ChromaScopeRegistry(db)

    scopes.record_access([1, 2])
    scopes.record_access([1])

    assert scopes.access_counts[1] == 2 and scopes.access_counts[2] == 1
    assert scopes.get_names([1, 2]) == ["架构手册", "2"]
