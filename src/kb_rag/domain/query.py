from __future__ import annotations

import re
from dataclasses import dataclass

_WS = re.compile(r"\s+", re.UNICODE)
# A single acronym or technical term: letters, digits, underscore or hyphen only.
_SHORT_TOKEN_RE = re.compile(r"[\w-]{2,20}", re.UNICODE)


def normalize_question(raw: str | None) -> str:
    """Trim surrounding whitespace; `None` becomes an empty string."""
    return "" if raw is None else raw.strip()


def compact_length(text: str) -> int:
    return len(_WS.sub("", text or ""))


def is_short_token_query(text: str | None) -> bool:
    if text is None:
        return False
    return _SHORT_TOKEN_RE.fullmatch(text.strip()) is not None


@dataclass(frozen=True)
class SearchParams:
    top_k: int
    min_score: float


@dataclass(frozen=True)
class SearchTiers:
    short_query_length: int = 4
    medium_query_length: int = 12
    topk_short: int = 20
    topk_medium: int = 12
    topk_long: int = 8
    min_score_short: float = 0.18
    min_score_default: float = 0.28


def resolve_search_params(question: str, tiers: SearchTiers | None = None) -> SearchParams:
    """Pick retrieval breadth from the whitespace-free question length.

    Short questions are ambiguous, so they fetch more results and accept weaker scores;
    long questions fetch fewer, higher-confidence results.
    """
    t = tiers or SearchTiers()
    n = compact_length(question)
    if n <= t.short_query_length:
        return SearchParams(t.topk_short, t.min_score_short)
    if n <= t.medium_query_length:
        return SearchParams(t.topk_medium, t.min_score_default)
    return SearchParams(t.topk_long, t.min_score_default)


def build_candidates(*queries: str) -> tuple[str, ...]:
    """Ordered de-duplication: first occurrence wins."""
    return tuple(dict.fromkeys(queries))


@dataclass(frozen=True)
class QueryContext:
    normalized_question: str
    candidate_queries: tuple[str, ...]
    search_params: SearchParams
