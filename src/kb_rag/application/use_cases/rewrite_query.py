from __future__ import annotations

import logging
from dataclasses import dataclass

from kb_rag.application.ports.llm_port import LLMPort
from kb_rag.infra.prompting.templates import REWRITE_TEMPLATE

log = logging.getLogger(__name__)


@dataclass
class QueryRewriter:
    """Best-effort reformulation of a question into a retrieval-friendly query.

    Never raises: a disabled rewriter, a blank question, a blank model reply or any
    model failure all yield the question unchanged.
    """

    llm: LLMPort
    enabled: bool = True
    template: str = REWRITE_TEMPLATE

    def rewrite(self, question: str) -> str:
        if not self.enabled or not question.strip():
            return question
        try:
            rewritten = self.llm.invoke(user=self.template.format(question=question))
        except Exception as e:  # noqa: BLE001
            log.warning("Query rewrite failed, using original question: %s", e)
            return question
        if rewritten is None or not rewritten.strip():
            return question
        normalized = rewritten.strip()
        log.info("Query rewrite: origin=%r rewritten=%r", question, normalized)
        return normalized
