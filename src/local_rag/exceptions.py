"""Exceptions raised by the local-rag library.

Library code raises these; only the CLI catches them and turns them into
log lines and exit codes.
"""


class LocalRagError(Exception):
    """Base exception for all local-rag errors."""


class DocumentConversionError(LocalRagError):
    """A source document could not be converted to plain text."""


class EmbeddingError(LocalRagError):
    """The embedding backend failed or returned misaligned vectors."""


class GenerationError(LocalRagError):
    """The chat model failed while producing an answer."""


class RuntimeNotReadyError(LocalRagError):
    """The model-serving runtime did not become reachable in time."""


class StoreError(LocalRagError):
    """The vector-store snapshot could not be written."""


class EmptyStoreError(LocalRagError):
    """A query was issued against a store holding no records."""


class DimensionMismatchError(LocalRagError, ValueError):
    """Records with different embedding dimensionality were mixed in one store."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"Embedding dimension mismatch: store holds {expected}-d vectors, got {got}-d")
        self.expected = expected
        self.got = got
