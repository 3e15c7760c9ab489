"""Abstract base class for vector-store backends.

A backend only decides how the record list is persisted: subclasses
implement :meth:`VectorStoreBase.append` and :meth:`VectorStoreBase.load`.
Ranking is exact brute-force cosine similarity over the in-memory
records and is shared by every backend.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from local_rag.exceptions import DimensionMismatchError
from local_rag.retrieval.models import LoadStatus, ScoredRecord, VectorRecord
from local_rag.retrieval.similarity import cosine_similarity

logger = logging.getLogger(__name__)


class VectorStoreBase(ABC):
    """Append-only ordered collection of :class:`VectorRecord`.

    All records share one embedding dimensionality, fixed by the first
    record appended (or loaded).
    """

    def __init__(self) -> None:
        self._records: list[VectorRecord] = []
        self.load_status = LoadStatus.NOT_LOADED

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def append(self, records: Sequence[VectorRecord]) -> None:
        """Add *records* to memory and persist the whole record list."""
        ...

    @abstractmethod
    def load(self) -> list[VectorRecord]:
        """Replace the in-memory records with the persisted ones.

        Must never raise for a missing or unreadable snapshot: the store
        is left empty and :attr:`load_status` says why.
        """
        ...

    # -- shared behaviour -----------------------------------------------------

    @property
    def records(self) -> list[VectorRecord]:
        return list(self._records)

    @property
    def dimension(self) -> int | None:
        """Embedding dimensionality of the stored records, ``None`` when empty."""
        return self._records[0].dimension if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def rank(self, query_embedding: Sequence[float], k: int) -> list[ScoredRecord]:
        """Return the *k* records most similar to *query_embedding*, best first.

        Equal scores keep insertion order.  When fewer than *k* records
        exist all of them are returned.
        """
        if k < 0:
            raise ValueError(f"k must be non-negative, got {k}")

        dim = self.dimension
        if dim is not None and len(query_embedding) != dim:
            logger.warning(
                "Query embedding has %d dimensions but the store holds %d-d vectors; nothing will match",
                len(query_embedding),
                dim,
            )

        scored = [(cosine_similarity(query_embedding, record.embedding), i) for i, record in enumerate(self._records)]
        # list.sort is stable, also with reverse=True
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            ScoredRecord(record=self._records[i], score=score, position=i)
            for score, i in scored[:k]
        ]

    def top_k(self, query_embedding: Sequence[float], k: int = 3) -> list[str]:
        """Contents of the *k* best-matching records, best first."""
        return [hit.content for hit in self.rank(query_embedding, k)]

    # -- helpers for subclasses -----------------------------------------------

    def _merged(self, records: Sequence[VectorRecord]) -> list[VectorRecord]:
        """Return the current records plus *records*, checking dimensionality."""
        merged = list(self._records)
        expected = self.dimension
        for record in records:
            if expected is None:
                expected = record.dimension
            elif record.dimension != expected:
                raise DimensionMismatchError(expected, record.dimension)
            merged.append(record)
        return merged


def has_uniform_dimension(records: Sequence[VectorRecord]) -> bool:
    """``True`` when every record has the same embedding length."""
    return len({record.dimension for record in records}) <= 1
