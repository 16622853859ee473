from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Document:
    """Retrieved unit of knowledge-base text.

    Pure structure independent from external libraries. Retrieval logic only reads
    `text`; `score` is whatever relevance the similarity search attached, if any.
    """

    text: str
    metadata: Mapping[str, Any] = field(default_factory=dict)
    score: float | None = None
