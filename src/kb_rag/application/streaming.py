"""Probe-window normalization of streamed model answers.

Models sometimes stream a long "not enough information" reply. The normalizer holds back
a short prefix of the stream, and either

- recognises a no-result reply, stops consuming the model and emits the fixed message, or
- decides the answer is substantive, releases the held prefix in one chunk and forwards
  every later chunk untouched.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from dataclasses import dataclass

from kb_rag.domain.answers import NO_RESULT_RESPONSE, is_no_result_like, normalize_answer

log = logging.getLogger(__name__)

DEFAULT_PROBE_WINDOW_CHARS = 120


class StreamPhase(enum.Enum):
    PROBING = "probing"
    PASSTHROUGH = "passthrough"
    COMPLETED = "completed"


@dataclass
class StreamProbeState:
    """Per-call state; flags only ever go from False to True."""

    buffer: str = ""
    passthrough: bool = False
    completed: bool = False

    @property
    def phase(self) -> StreamPhase:
        if self.completed:
            return StreamPhase.COMPLETED
        if self.passthrough:
            return StreamPhase.PASSTHROUGH
        return StreamPhase.PROBING


async def _close(source: AsyncIterator[str]) -> None:
    aclose = getattr(source, "aclose", None)
    if aclose is not None:
        await aclose()


class StreamNormalizer:
    def __init__(self, probe_window_chars: int = DEFAULT_PROBE_WINDOW_CHARS) -> None:
        if probe_window_chars <= 0:
            raise ValueError("probe_window_chars must be positive")
        self.probe_window_chars = probe_window_chars

    async def normalize(self, source: AsyncIterator[str]) -> AsyncGenerator[str, None]:
        """Yield the normalized stream for one model response.

        Chunks are handled strictly in arrival order. Upstream errors propagate unchanged.
        Closing this generator closes `source` as well.
        """
        state = StreamProbeState()
        try:
            async for chunk in source:
                if state.passthrough:
                    yield chunk
                    continue

                state.buffer += chunk
                if is_no_result_like(state.buffer):
                    # Unsubscribe before completing so no further chunk is pulled
                    state.completed = True
                    await _close(source)
                    log.info(
                        "Stream short-circuited on no-result reply after %d chars",
                        len(state.buffer),
                    )
                    yield NO_RESULT_RESPONSE
                    return

                if len(state.buffer) >= self.probe_window_chars:
                    state.passthrough = True
                    flushed, state.buffer = state.buffer, ""
                    yield flushed

            if state.phase is StreamPhase.PROBING:
                # Short reply that ended inside the probe window
                state.completed = True
                yield normalize_answer(state.buffer)
        finally:
            state.completed = True
            await _close(source)
