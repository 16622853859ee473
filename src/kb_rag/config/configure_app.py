from __future__ import annotations

"""Composition root: assemble and expose the query use case.

Provides a cached getter to avoid re-building adapters repeatedly in long-lived
processes (API/CLI). Keeps environment/settings handling inside the config layer.
"""

from functools import lru_cache  # noqa: E402

from kb_rag.application.use_cases import KnowledgeBaseQueryUseCase  # noqa: E402
from kb_rag.config.composition import build_query_use_case  # noqa: E402


@lru_cache(maxsize=1)
def get_query_use_case() -> KnowledgeBaseQueryUseCase:
    return build_query_use_case()


__all__ = ["get_query_use_case"]
