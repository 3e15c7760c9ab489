"""Text → vector embedding through a LangChain ``Embeddings`` backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from local_rag.config import Settings, settings as default_settings
from local_rag.exceptions import EmbeddingError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

logger = logging.getLogger(__name__)


def get_embedding_function(settings: Settings = default_settings) -> Embeddings:
    """Return the configured embedding backend.

    ``ollama`` (default) talks to the local runtime; ``huggingface`` runs a
    sentence-transformer in-process and needs no runtime at all.
    """
    if settings.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        return HuggingFaceEmbeddings(model_name=settings.embedding_model)

    from langchain_ollama import OllamaEmbeddings

    return OllamaEmbeddings(
        model=settings.embedding_model,
        base_url=settings.runtime_address.base_url,
    )


class Embedder:
    """Batch embedder with alignment checks.

    Parameters
    ----------
    embeddings:
        Any LangChain ``Embeddings`` implementation.  When *None*, one is
        built from the global settings.
    """

    def __init__(self, embeddings: Embeddings | None = None) -> None:
        self._embeddings = embeddings if embeddings is not None else get_embedding_function()

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed *texts* in one request; ``result[i]`` belongs to ``texts[i]``.

        Raises
        ------
        EmbeddingError
            If the backend fails, returns a different number of vectors
            than texts, or returns vectors of different lengths.
        """
        if not texts:
            return []

        logger.debug("Embedding %d texts", len(texts))
        try:
            vectors = self._embeddings.embed_documents(texts)
        except Exception as exc:
            raise EmbeddingError(f"Embedding request failed: {exc}") from exc

        if len(vectors) != len(texts):
            raise EmbeddingError(f"Embedder returned {len(vectors)} vectors for {len(texts)} texts")
        if len({len(v) for v in vectors}) > 1:
            raise EmbeddingError("Embedder returned vectors of different lengths")
        if not vectors[0]:
            raise EmbeddingError("Embedder returned empty vectors")

        return [list(map(float, v)) for v in vectors]

    def embed_query(self, text: str) -> list[float]:
        """Embed a single question.

        Goes through the backend's ``embed_query`` so models with a
        separate query instruction encode questions the way they expect.
        """
        try:
            vector = self._embeddings.embed_query(text)
        except Exception as exc:
            raise EmbeddingError(f"Embedding request failed: {exc}") from exc
        if not vector:
            raise EmbeddingError("Embedder returned an empty query vector")
        return [float(x) for x in vector]
