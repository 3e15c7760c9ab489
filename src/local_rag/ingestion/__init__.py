"""
Ingestion — document loading, passage chunking and embedding.

Converts a source file into the passages that are embedded and appended
to the vector store.
"""

from local_rag.ingestion.chunker import chunk_text

__all__ = ["chunk_text"]
