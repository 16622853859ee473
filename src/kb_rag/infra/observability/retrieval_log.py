from __future__ import annotations

import logging

_log = logging.getLogger(__name__)


def log_candidate_event(
    candidate: str, hits: int, effective: bool, *, top_k: int, min_score: float
) -> None:
    """Log the outcome of searching one candidate query.

    Parameters
    ----------
    candidate : str
        The query text sent to similarity search.
    hits : int
        Number of documents returned.
    effective : bool
        Whether the hit validator accepted the result set.
    top_k, min_score : int, float
        Search parameters used for this candidate.
    """
    try:
        _log.info(
            "retrieval.candidate query=%r hits=%d effective=%s top_k=%d min_score=%.2f",
            candidate,
            int(hits),
            effective,
            int(top_k),
            float(min_score),
        )
    except Exception:
        # Be non-fatal for logging issues
        pass
