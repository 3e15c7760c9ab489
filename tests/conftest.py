"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import pytest
from langchain_core.embeddings import Embeddings
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from local_rag.generation.generator import Generator
from local_rag.ingestion.embedder import Embedder
from local_rag.retrieval.memory_store import InMemoryVectorStore

VOCABULARY = ["ollama", "vector", "pdf", "python", "llama"]


class KeywordEmbeddings(Embeddings):
    """Deterministic embeddings: one dimension per vocabulary word (occurrence count)."""

    def __init__(self, vocabulary: list[str] | None = None) -> None:
        self.vocabulary = vocabulary or VOCABULARY
        self.calls: list[list[str]] = []

    def _vector(self, text: str) -> list[float]:
        words = text.lower().split()
        return [float(words.count(term)) for term in self.vocabulary]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        return self._vector(text)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


@pytest.fixture()
def keyword_embeddings() -> KeywordEmbeddings:
    return KeywordEmbeddings()


@pytest.fixture()
def embedder(keyword_embeddings: KeywordEmbeddings) -> Embedder:
    return Embedder(keyword_embeddings)


@pytest.fixture()
def fake_llm() -> FakeListChatModel:
    return FakeListChatModel(responses=["Ollama serves local models."])


@pytest.fixture()
def generator(fake_llm: FakeListChatModel) -> Generator:
    return Generator(fake_llm)


@pytest.fixture()
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()
