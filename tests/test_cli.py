from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence

import pytest
from typer.testing import CliRunner

from kb_rag.application.use_cases.answer_question import QueryResponse
from kb_rag.exceptions import KnowledgeBaseQueryError
from kb_rag.interface import cli

runner = CliRunner()


class StubUseCase:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[list[int], str]] = []

    def query(self, scope_ids: Sequence[int], question: str) -> QueryResponse:
        self.calls.append((list(scope_ids), question))
        if self.fail:
            raise KnowledgeBaseQueryError("知识库查询失败：model down")
        return QueryResponse("使用指数退避重试。", scope_ids[0], "消息队列手册")

    async def answer_stream(self, scope_ids: Sequence[int], question: str) -> AsyncIterator[str]:
        self.calls.append((list(scope_ids), question))
        for chunk in ("使用", "指数退避", "重试。"):
            yield chunk


@pytest.fixture
def stub(monkeypatch: pytest.MonkeyPatch) -> StubUseCase:
    uc = StubUseCase()
    monkeypatch.setattr(cli, "_build_query_use_case", lambda: uc)
    return uc


def test_ask_prints_names_and_answer(stub: StubUseCase) -> None:
    result = runner.invoke(cli.app, ["ask", "Kafka重试机制是什么？", "--kb", "1", "--kb", "2"])
    assert result.exit_code == 0, result.output
    assert "[消息队列手册]" in result.output
    assert "使用指数退避重试。" in result.output
    assert stub.calls == [([1, 2], "Kafka重试机制是什么？")]


def test_ask_stream_echoes_chunks(stub: StubUseCase) -> None:
    result = runner.invoke(cli.app, ["ask", "重试机制", "--kb", "3", "--stream"])
    assert result.exit_code == 0, result.output
    assert "使用指数退避重试。" in result.output
    assert stub.calls == [([3], "重试机制")]


def test_ask_failure_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "_build_query_use_case", lambda: StubUseCase(fail=True))
    result = runner.invoke(cli.app, ["ask", "重试机制", "--kb", "3"])
    assert result.exit_code == 1


def test_ask_requires_knowledge_base() -> None:
    result = runner.invoke(cli.app, ["ask", "重试机制"])
    assert result.exit_code != 0


def test_ask_accepts_verbose_after_arguments(
    stub: StubUseCase, monkeypatch: pytest.MonkeyPatch
) -> None:
    levels: list[int] = []
    monkeypatch.setattr(cli, "setup_logging", levels.append)
    result = runner.invoke(cli.app, ["ask", "重试机制", "--kb", "1", "-v"])
    assert result.exit_code == 0, result.output
    assert levels == [logging.DEBUG]
