"""Domain models for stored vectors and ranked results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class VectorRecord(BaseModel):
    """One embedded passage as persisted in the store.

    Attributes
    ----------
    embedding:
        Vector produced by the embedder for ``content``.
    content:
        The passage text handed to the generator on retrieval.
    """

    model_config = ConfigDict(frozen=True)

    embedding: list[float]
    content: str

    @property
    def dimension(self) -> int:
        return len(self.embedding)


class Snapshot(BaseModel):
    """On-disk layout of a :class:`~local_rag.retrieval.file_store.FileVectorStore`."""

    records: list[VectorRecord] = Field(default_factory=list)


class ScoredRecord(BaseModel):
    """A record together with its similarity to a query.

    ``position`` is the record's insertion index in the store and breaks
    ties between equal scores.
    """

    record: VectorRecord
    score: float
    position: int

    @property
    def content(self) -> str:
        return self.record.content


class LoadStatus(str, Enum):
    """Outcome of the most recent :meth:`VectorStoreBase.load` call."""

    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    MISSING = "missing"
    CORRUPT = "corrupt"
