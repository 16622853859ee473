from __future__ import annotations

"""Infrastructure LLM providers implementing the LLMPort contract.

Adapters:
- DummyLLM: dependency-free echo for testing and offline use.
- OpenAIChatLLM: wraps langchain-openai ChatOpenAI for single-shot and streamed answers.

These providers keep external dependencies in the infrastructure layer and present a
minimal invoke/astream API to the application layer.
"""

from collections.abc import AsyncIterator  # noqa: E402
from contextlib import aclosing  # noqa: E402
from dataclasses import dataclass  # noqa: E402
from typing import Any  # noqa: E402


def _messages(user: str, system: str | None) -> list[dict[str, str]]:
    msgs: list[dict[str, str]] = []
    if system:
        msgs.append({"role": "system", "content": system})
    msgs.append({"role": "user", "content": user})
    return msgs


@dataclass
class DummyLLM:
    """Simple test double: echoes the user prompt, streamed in fixed-size pieces."""

    chunk_chars: int = 16

    def invoke(self, *, user: str, system: str | None = None) -> str:
        return user

    async def astream(self, *, user: str, system: str | None = None) -> AsyncIterator[str]:
        step = max(1, int(self.chunk_chars))
        for i in range(0, len(user), step):
            yield user[i : i + step]


@dataclass
class OpenAIChatLLM:
    """OpenAI Chat-based LLM using langchain-openai.

    The provider accepts model and credentials via constructor args and sends a
    two-message prompt (system, user) as role/content dicts.
    """

    model: str
    api_key: str | None = None
    base_url: str | None = None
    temperature: float = 0.2
    max_tokens: int | None = 1024

    def __post_init__(self) -> None:  # lazy import and instantiate client
        try:
            from langchain_openai import ChatOpenAI
        except Exception as e:  # pragma: no cover - import guarded
            raise RuntimeError(
                "langchain-openai is required for OpenAIChatLLM.\n"
                "Install with: pip install langchain-openai openai"
            ) from e

        kwargs: dict[str, object] = {
            "model": self.model,
            "temperature": float(self.temperature),
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.base_url:
            kwargs["base_url"] = self.base_url
        if self.max_tokens is not None:
            kwargs["max_tokens"] = int(self.max_tokens)
        self._chat: Any = ChatOpenAI(**kwargs)

    def invoke(self, *, user: str, system: str | None = None) -> str:
        resp = self._chat.invoke(_messages(user, system))
        text = getattr(resp, "content", None)
        if isinstance(text, str):
            return text
        return str(resp)

    async def astream(self, *, user: str, system: str | None = None) -> AsyncIterator[str]:
        # Closing this generator must close the underlying model stream right away
        async with aclosing(self._chat.astream(_messages(user, system))) as stream:
            async for chunk in stream:
                text = getattr(chunk, "content", None)
                if isinstance(text, str) and text:
                    yield text


__all__ = ["DummyLLM", "OpenAIChatLLM"]
