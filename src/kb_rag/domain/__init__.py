"""Domain layer: pure types and logic (no I/O, no external libs).

Keep this layer free of side-effects. Define entities and small pure helpers only.
"""

from .answers import NO_RESULT_PHRASES, NO_RESULT_RESPONSE, is_no_result_like, normalize_answer
from .context import CONTEXT_SEPARATOR, assemble_context
from .document import Document
from .hits import is_effective_hit
from .query import (
    QueryContext,
    SearchParams,
    SearchTiers,
    build_candidates,
    compact_length,
    is_short_token_query,
    normalize_question,
    resolve_search_params,
)

__all__ = [
    "Document",
    "QueryContext",
    "SearchParams",
    "SearchTiers",
    "build_candidates",
    "compact_length",
    "is_short_token_query",
    "normalize_question",
    "resolve_search_params",
    "is_effective_hit",
    "assemble_context",
    "CONTEXT_SEPARATOR",
    "NO_RESULT_RESPONSE",
    "NO_RESULT_PHRASES",
    "is_no_result_like",
    "normalize_answer",
]
