"""In-memory vector store, mainly for tests and dependency injection."""

from __future__ import annotations

from collections.abc import Sequence

from local_rag.retrieval.base import VectorStoreBase
from local_rag.retrieval.models import LoadStatus, VectorRecord


class InMemoryVectorStore(VectorStoreBase):
    """Store whose "durable" snapshot is a list kept on the instance.

    Mirrors the persistence semantics of the file store (``append``
    rewrites the snapshot from memory, ``load`` overwrites memory with
    the snapshot) without touching the filesystem.
    """

    def __init__(self, snapshot: Sequence[VectorRecord] | None = None) -> None:
        super().__init__()
        self._snapshot: list[VectorRecord] | None = list(snapshot) if snapshot is not None else None

    @property
    def snapshot(self) -> list[VectorRecord] | None:
        return None if self._snapshot is None else list(self._snapshot)

    def append(self, records: Sequence[VectorRecord]) -> None:
        self._records = self._merged(records)
        self._snapshot = list(self._records)

    def load(self) -> list[VectorRecord]:
        if self._snapshot is None:
            self._records = []
            self.load_status = LoadStatus.MISSING
        else:
            self._records = list(self._snapshot)
            self.load_status = LoadStatus.LOADED
        return self.records
