from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kb_rag.domain.query import SearchTiers

CandidateOrder = Literal["rewritten_first", "original_first"]


def _coerce_bool(v: object) -> object:
    # Accept tolerant boolean env values and trim whitespace (e.g., "false ", "0 ")
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"):
            return True
        if s in ("0", "false", "no", "off", ""):
            return False
    return v


class RagSettings(BaseSettings):
    """Retrieval and answer-normalization knobs (APP_AI_RAG_* environment variables)."""

    rewrite_enabled: bool = True

    # Query-length tiers for search breadth
    short_query_length: int = Field(4, gt=0)
    medium_query_length: int = Field(12, gt=0)
    topk_short: int = Field(20, gt=0)
    topk_medium: int = Field(12, gt=0)
    topk_long: int = Field(8, gt=0)
    min_score_short: float = Field(0.18, ge=0.0, le=1.0)
    min_score_default: float = Field(0.28, ge=0.0, le=1.0)

    # Characters held back from a streamed answer before passing it through
    stream_probe_chars: int = Field(120, gt=0)

    candidate_order: CandidateOrder = "rewritten_first"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="APP_AI_RAG_",  # APP_AI_RAG_REWRITE_ENABLED, APP_AI_RAG_TOPK_SHORT, ...
    )

    @field_validator("rewrite_enabled", mode="before")
    @classmethod
    def _tolerant_bool(cls, v):  # type: ignore[no-untyped-def]
        return _coerce_bool(v)

    @property
    def tiers(self) -> SearchTiers:
        return SearchTiers(
            short_query_length=self.short_query_length,
            medium_query_length=self.medium_query_length,
            topk_short=self.topk_short,
            topk_medium=self.topk_medium,
            topk_long=self.topk_long,
            min_score_short=self.min_score_short,
            min_score_default=self.min_score_default,
        )


class VectorStoreSettings(BaseSettings):
    persist_dir: Path = Field(default=Path(".vector_store/chroma"))
    collection_name: str = Field(default="knowledge_base")
    embed_provider: Literal["huggingface", "openai"] = "huggingface"
    embed_model: str = Field(default="BAAI/bge-small-zh-v1.5")
    # Chunk metadata keys carrying the owning knowledge base
    scope_metadata_key: str = "kb_id"
    scope_name_key: str = "kb_name"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="KB_",  # supports KB_PERSIST_DIR, KB_COLLECTION_NAME, KB_EMBED_MODEL, etc.
    )


# Cached accessors (process-wide, read-only after startup)
@lru_cache(maxsize=1)
def get_rag_settings() -> RagSettings:
    return RagSettings()


@lru_cache(maxsize=1)
def get_vector_store_settings() -> VectorStoreSettings:
    return VectorStoreSettings()
