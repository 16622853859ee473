from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol


class LLMPort(Protocol):
    """Abstract language model interface: single-shot and streamed completions."""

    def invoke(self, *, user: str, system: str | None = None) -> str:  # pragma: no cover
        ...

    def astream(
        self, *, user: str, system: str | None = None
    ) -> AsyncIterator[str]:  # pragma: no cover - interface
        """Return a finite, non-restartable stream of text chunks.

        Closing the iterator (`aclose()`) stops consuming the model output.
        """
        ...
