from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass, field

from kb_rag.application.ports.llm_port import LLMPort
from kb_rag.application.ports.scope_port import KnowledgeScopePort
from kb_rag.application.streaming import StreamNormalizer
from kb_rag.application.use_cases.retrieve_context import RetrievalOrchestrator
from kb_rag.domain.answers import (
    NO_RESULT_RESPONSE,
    QUERY_FAILED_PREFIX,
    STREAM_ERROR_PREFIX,
    STREAM_FAILURE_RESPONSE,
    normalize_answer,
)
from kb_rag.domain.context import assemble_context
from kb_rag.domain.document import Document
from kb_rag.domain.hits import is_effective_hit
from kb_rag.domain.query import normalize_question
from kb_rag.exceptions import KnowledgeBaseQueryError
from kb_rag.infra.prompting.templates import SYSTEM_TEMPLATE, USER_QA_TEMPLATE

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResponse:
    answer: str
    knowledge_base_id: int | None
    knowledge_base_names: str


@dataclass
class KnowledgeBaseQueryUseCase:
    """Answer questions against one or more knowledge bases (RAG).

    Every "nothing usable" situation converges on NO_RESULT_RESPONSE; technical failures
    surface as a short message rather than a traceback.
    """

    retriever: RetrievalOrchestrator
    llm: LLMPort
    scopes: KnowledgeScopePort
    normalizer: StreamNormalizer = field(default_factory=StreamNormalizer)
    system_template: str = SYSTEM_TEMPLATE
    user_template: str = USER_QA_TEMPLATE

    def _retrieve(self, scope_ids: Sequence[int], question: str | None) -> list[Document]:
        try:
            self.scopes.record_access(scope_ids)
        except Exception as e:  # noqa: BLE001
            log.warning("Access count update failed: kb_ids=%s error=%s", scope_ids, e)
        docs = self.retriever.build_context(question, scope_ids)
        # The hit may come from the rewritten query; the user's own token must still match
        if not is_effective_hit(question, docs):
            return []
        log.debug("Retrieved %d relevant chunks", len(docs))
        return docs

    def _build_prompts(self, docs: Sequence[Document], question: str | None) -> tuple[str, str]:
        context = assemble_context(docs)
        return self.system_template, self.user_template.format(
            context=context, question=normalize_question(question)
        )

    def answer(self, scope_ids: Sequence[int] | None, question: str | None) -> str:
        log.info("Knowledge base question: kb_ids=%s question=%r", scope_ids, question)
        if not scope_ids or not normalize_question(question):
            return NO_RESULT_RESPONSE

        docs = self._retrieve(scope_ids, question)
        if not docs:
            return NO_RESULT_RESPONSE

        system, user = self._build_prompts(docs, question)
        try:
            answer = self.llm.invoke(system=system, user=user)
        except Exception as e:
            log.error("Knowledge base answer failed: %s", e, exc_info=True)
            raise KnowledgeBaseQueryError(f"{QUERY_FAILED_PREFIX}{e}") from e

        log.info("Knowledge base answer done: kb_ids=%s", scope_ids)
        return normalize_answer(answer)

    def query(self, scope_ids: Sequence[int], question: str | None) -> QueryResponse:
        """Answer and attach the knowledge base identity for display."""
        answer = self.answer(scope_ids, question)
        names = self.scopes.get_names(scope_ids)
        return QueryResponse(
            answer=answer,
            knowledge_base_id=scope_ids[0] if scope_ids else None,
            knowledge_base_names="、".join(names),
        )

    async def answer_stream(
        self, scope_ids: Sequence[int] | None, question: str | None
    ) -> AsyncIterator[str]:
        """Stream the answer chunk by chunk.

        Retrieval runs in a worker thread; model output goes through the probe-window
        normalizer. Failures end the stream with one human-readable error chunk.
        """
        log.info("Knowledge base stream question: kb_ids=%s question=%r", scope_ids, question)
        if not scope_ids or not normalize_question(question):
            yield NO_RESULT_RESPONSE
            return

        try:
            docs = await asyncio.to_thread(self._retrieve, scope_ids, question)
            if not docs:
                yield NO_RESULT_RESPONSE
                return
            system, user = self._build_prompts(docs, question)
            chunks = self.normalizer.normalize(self.llm.astream(system=system, user=user))
        except Exception as e:
            log.error("Knowledge base stream failed before streaming: %s", e, exc_info=True)
            yield f"{STREAM_ERROR_PREFIX}{e}"
            return

        log.info("Streaming knowledge base answer (probe window): kb_ids=%s", scope_ids)
        try:
            async for chunk in chunks:
                yield chunk
        except Exception as e:
            log.error(
                "Knowledge base stream failed: kb_ids=%s error=%s", scope_ids, e, exc_info=True
            )
            yield STREAM_FAILURE_RESPONSE
            return
        finally:
            await chunks.aclose()
        log.info("Knowledge base stream done: kb_ids=%s", scope_ids)
