from __future__ import annotations

import logging
from collections.abc import Sequence

from kb_rag.domain.document import Document
from kb_rag.domain.query import is_short_token_query, normalize_question

log = logging.getLogger(__name__)


def is_effective_hit(question: str | None, documents: Sequence[Document] | None) -> bool:
    """Return True when retrieved documents are usable for answering.

    A non-empty result is not enough for short token queries (acronyms, single terms):
    embedding neighbours of such tokens are often unrelated, so at least one document
    must literally contain the token (case-insensitive).
    """
    if not documents:
        return False

    normalized = normalize_question(question)
    if not is_short_token_query(normalized):
        return True

    token = normalized.lower()
    for d in documents:
        if token in (d.text or "").lower():
            return True

    log.info(
        "Short query confirmation failed, treating as no result: question=%r docs=%d",
        normalized,
        len(documents),
    )
    return False
