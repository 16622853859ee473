from __future__ import annotations

"""Composition: construct LLMPort implementations from the environment.

Defaults to DummyLLM to keep tests/offline flows working. When LLM_PROVIDER selects
OpenAI, builds an OpenAIChatLLM from the OPENAI_* variables.
"""

import os  # noqa: E402

from kb_rag.application.ports.llm_port import LLMPort  # noqa: E402
from kb_rag.exceptions import ConfigurationError  # noqa: E402
from kb_rag.infrastructure.llm.providers import DummyLLM, OpenAIChatLLM  # noqa: E402


def build_llm_from_env(
    *,
    provider: str | None = None,
    model: str | None = None,
    api_key: str | None = None,
    base_url: str | None = None,
) -> LLMPort:
    prov = (provider or os.getenv("LLM_PROVIDER") or "").lower().strip()
    if prov in ("openai", "azure-openai"):
        mdl = model or os.getenv("OPENAI_MODEL") or "gpt-4o-mini"
        key = api_key or os.getenv("OPENAI_API_KEY")
        base = base_url or os.getenv("OPENAI_BASE_URL")
        return OpenAIChatLLM(model=str(mdl), api_key=key, base_url=base)
    if prov in ("", "dummy"):
        return DummyLLM()
    raise ConfigurationError(f"Unknown LLM provider: {prov!r}")


__all__ = ["build_llm_from_env"]
