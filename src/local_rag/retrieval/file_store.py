"""JSON-snapshot implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from local_rag.exceptions import StoreError
from local_rag.retrieval.base import VectorStoreBase, has_uniform_dimension
from local_rag.retrieval.models import LoadStatus, Snapshot, VectorRecord

logger = logging.getLogger(__name__)


class FileVectorStore(VectorStoreBase):
    """Vector store mirrored to a single JSON snapshot file.

    Every :meth:`append` rewrites the full snapshot through a temporary
    sibling file and an atomic rename, so a crash mid-write leaves the
    previous snapshot intact.

    Parameters
    ----------
    path:
        Location of the snapshot file.
    """

    def __init__(self, path: str | Path = "vdb.json") -> None:
        super().__init__()
        self.path = Path(path)

    def append(self, records: Sequence[VectorRecord]) -> None:
        merged = self._merged(records)
        self._write(merged)
        self._records = merged
        logger.info("Saved %d records to %s", len(merged), self.path)

    def load(self) -> list[VectorRecord]:
        self._records = []

        if not self.path.exists():
            logger.info("No vector store at %s, starting empty", self.path)
            self.load_status = LoadStatus.MISSING
            return []

        try:
            snapshot = Snapshot.model_validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.warning("Cannot decode vector store %s, starting empty: %s", self.path, exc)
            self.load_status = LoadStatus.CORRUPT
            return []

        if not has_uniform_dimension(snapshot.records):
            logger.warning("Vector store %s mixes embedding dimensions, starting empty", self.path)
            self.load_status = LoadStatus.CORRUPT
            return []

        self._records = snapshot.records
        self.load_status = LoadStatus.LOADED
        logger.info("Loaded %d records from %s", len(self._records), self.path)
        return self.records

    def _write(self, records: list[VectorRecord]) -> None:
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(Snapshot(records=records).model_dump_json(), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise StoreError(f"Cannot save vector store to {self.path}: {exc}") from exc
