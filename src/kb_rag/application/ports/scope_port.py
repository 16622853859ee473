from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class KnowledgeScopePort(Protocol):
    # Usage counting; called once per answered request before retrieval
    def record_access(self, scope_ids: Sequence[int]) -> None:  # pragma: no cover - interface
        ...

    def get_names(self, scope_ids: Sequence[int]) -> list[str]:  # pragma: no cover - interface
        ...
