from __future__ import annotations

from collections.abc import Sequence

from kb_rag.config.composition import build_query_use_case
from kb_rag.core.settings import RagSettings
from kb_rag.domain.document import Document
from kb_rag.infrastructure.llm.providers import DummyLLM


class FakeSearch:
    def __init__(self) -> None:
        self.calls: list[tuple[str, int, float]] = []

    def similarity_search(
        self, query: str, scope_ids: Sequence[int], top_k: int, min_score: float
    ) -> list[Document]:
        self.calls.append((query, top_k, min_score))
        return [Document(text=f"关于{query}的说明", metadata={"kb_id": scope_ids[0]})]


class FakeScopes:
    def record_access(self, scope_ids: Sequence[int]) -> None:
        pass

    def get_names(self, scope_ids: Sequence[int]) -> list[str]:
        return [str(i) for i in scope_ids]


def test_settings_flow_into_wired_use_case() -> None:
    settings = RagSettings(
        rewrite_enabled=False,
        topk_long=5,
        min_score_default=0.5,
        stream_probe_chars=32,
        candidate_order="original_first",
    )
    uc = build_query_use_case(
        search=FakeSearch(), scopes=FakeScopes(), llm=DummyLLM(), settings=settings
    )

    assert uc.normalizer.probe_window_chars == 32
    assert uc.retriever.original_first is True
    assert uc.retriever.rewriter.enabled is False
    assert uc.retriever.tiers.topk_long == 5


def test_injected_collaborators_answer_end_to_end() -> None:
    search = FakeSearch()
    settings = RagSettings(rewrite_enabled=False)
    uc = build_query_use_case(search=search, scopes=FakeScopes(), llm=DummyLLM(), settings=settings)

    resp = uc.query([7], "分布式锁怎么实现？")

    # DummyLLM echoes the filled user prompt, so the retrieved context shows up in the answer
    assert "关于分布式锁怎么实现？的说明" in resp.answer
    assert resp.knowledge_base_names == "7"
    assert search.calls == [("分布式锁怎么实现？", 12, 0.28)]
