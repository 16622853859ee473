from __future__ import annotations

from langchain_core.embeddings import Embeddings

from kb_rag.exceptions import ConfigurationError


def build_embeddings(provider: str, model_name: str) -> Embeddings:
    """Embedder used to embed queries; must match the one used when the index was built."""
    prov = (provider or "").lower().strip()
    if prov == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(
            model_name=model_name,
            encode_kwargs={"normalize_embeddings": True},
        )
    if prov == "openai":
        from langchain_openai import OpenAIEmbeddings

        return OpenAIEmbeddings(model=model_name)
    raise ConfigurationError(f"Unknown embeddings provider: {provider!r}")
