"""End-to-end retrieval-augmented generation pipeline.

Wires together: document loading -> chunking -> embedding -> storage for
ingestion, and embedding -> top-k search -> generation for questions.

Every collaborator is injected so that tests can swap in fakes::

    pipeline = RetrievalPipeline(
        store=InMemoryVectorStore(),
        embedder=Embedder(fake_embeddings),
        generator=Generator(fake_llm),
    )
    pipeline.ingest(text)
    answer = pipeline.query("What is in the document?")
"""

from __future__ import annotations

import logging
from pathlib import Path

from local_rag.config import Settings, settings as default_settings
from local_rag.exceptions import EmbeddingError, EmptyStoreError, StoreError
from local_rag.generation.generator import ChunkCallback, Generator
from local_rag.ingestion.chunker import chunk_text
from local_rag.ingestion.embedder import Embedder
from local_rag.ingestion.loader import load_document_text
from local_rag.retrieval.base import VectorStoreBase
from local_rag.retrieval.models import LoadStatus, VectorRecord

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3


class RetrievalPipeline:
    """Ingest documents into a vector store and answer questions from it.

    Parameters
    ----------
    store:
        Where records are kept.  Loaded before every ingest and query so
        that separate runs accumulate instead of overwriting each other.
    embedder:
        Turns passages and questions into vectors.
    generator:
        Produces the answer; only needed for :meth:`query`.
    top_k:
        Number of passages handed to the generator.
    min_chunk_tokens:
        Passages with this many tokens or fewer are not stored.
    settings:
        Settings forwarded to the document loader (PDF extractor choice).
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embedder: Embedder,
        generator: Generator | None = None,
        *,
        top_k: int = DEFAULT_TOP_K,
        min_chunk_tokens: int = 3,
        settings: Settings = default_settings,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.generator = generator
        self.top_k = top_k
        self.min_chunk_tokens = min_chunk_tokens
        self.settings = settings

    # -- ingestion ------------------------------------------------------------

    def ingest(self, document_text: str) -> list[VectorRecord]:
        """Chunk, embed and store *document_text*.

        Either every chunk is stored or none is.  Returns the new records.

        Raises
        ------
        StoreError
            When the existing snapshot cannot be decoded; rewriting it
            would discard every record it holds.
        """
        self.store.load()
        if self.store.load_status is LoadStatus.CORRUPT:
            raise StoreError("Refusing to add to an undecodable vector store; repair or remove it first")

        chunks = chunk_text(document_text, min_tokens=self.min_chunk_tokens)
        if not chunks:
            logger.warning("Document produced no chunks worth storing")
            return []

        vectors = self.embedder.embed(chunks)
        if len(vectors) != len(chunks):
            raise EmbeddingError(f"Got {len(vectors)} embeddings for {len(chunks)} chunks")

        records = [VectorRecord(embedding=v, content=c) for v, c in zip(vectors, chunks)]
        self.store.append(records)
        logger.info("Ingested %d chunks (store now holds %d)", len(records), len(self.store))
        return records

    def ingest_file(self, path: str | Path) -> list[VectorRecord]:
        """Load the document at *path* and :meth:`ingest` its text."""
        logger.info("Adding document: %s", path)
        return self.ingest(load_document_text(path, self.settings))

    # -- querying -------------------------------------------------------------

    def retrieve(self, question: str, k: int | None = None) -> list[str]:
        """Return the passages most relevant to *question*, best first.

        Raises
        ------
        EmptyStoreError
            When there is nothing to retrieve from.
        """
        self.store.load()
        if len(self.store) == 0:
            if self.store.load_status is LoadStatus.LOADED:
                reason = "the vector store is empty"
            else:
                reason = f"no usable vector store ({self.store.load_status.value})"
            raise EmptyStoreError(f"Cannot answer: {reason}; add a document first")

        query_vector = self.embedder.embed_query(question)
        return self.store.top_k(query_vector, self.top_k if k is None else k)

    def query(
        self,
        question: str,
        on_chunk: ChunkCallback | None = None,
        k: int | None = None,
    ) -> str:
        """Answer *question* from the stored passages, streaming to *on_chunk*."""
        if self.generator is None:
            raise RuntimeError("No generator configured - can't answer questions")

        chunks = self.retrieve(question, k=k)
        logger.info("Calling model with %d context chunks", len(chunks))
        return self.generator.generate("\n".join(chunks), question, on_chunk)
