from __future__ import annotations

from collections.abc import Iterable

from kb_rag.domain.document import Document

CONTEXT_SEPARATOR = "\n\n---\n\n"


def assemble_context(docs: Iterable[Document]) -> str:
    """Join document texts into one prompt-ready context block."""
    return CONTEXT_SEPARATOR.join(d.text or "" for d in docs)
