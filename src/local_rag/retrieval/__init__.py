"""
Retrieval — vector records, similarity and exact top-k search.

Public surface
--------------
- :class:`VectorStoreBase` — abstract store (persistence is up to subclasses).
- :class:`FileVectorStore` — JSON-snapshot store used by the CLI.
- :class:`InMemoryVectorStore` — non-persistent store for tests / embedding in apps.
- :class:`VectorRecord`, :class:`ScoredRecord`, :class:`LoadStatus` — data models.
- :func:`cosine_similarity`, :func:`dot`, :func:`magnitude` — similarity primitives.
"""

from local_rag.retrieval.base import VectorStoreBase
from local_rag.retrieval.file_store import FileVectorStore
from local_rag.retrieval.memory_store import InMemoryVectorStore
from local_rag.retrieval.models import LoadStatus, ScoredRecord, VectorRecord
from local_rag.retrieval.similarity import cosine_similarity, dot, magnitude

__all__ = [
    "FileVectorStore",
    "InMemoryVectorStore",
    "LoadStatus",
    "ScoredRecord",
    "VectorRecord",
    "VectorStoreBase",
    "cosine_similarity",
    "dot",
    "magnitude",
]
