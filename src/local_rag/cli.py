"""Command-line interface: ``local-rag add <document>`` / ``local-rag call <question>``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from local_rag.config import Settings, settings as default_settings
from local_rag.exceptions import (
    DocumentConversionError,
    EmbeddingError,
    EmptyStoreError,
    GenerationError,
    LocalRagError,
    RuntimeNotReadyError,
    StoreError,
)
from local_rag.generation.generator import Generator
from local_rag.generation.llm import get_llm
from local_rag.ingestion.embedder import Embedder, get_embedding_function
from local_rag.pipeline import RetrievalPipeline
from local_rag.retrieval.file_store import FileVectorStore
from local_rag.runtime.server import OllamaRuntime

logger = logging.getLogger(__name__)

EXIT_OK = 0

# Checked in order; the first matching class wins.
EXIT_CODES: list[tuple[type[LocalRagError], int]] = [
    (DocumentConversionError, 3),
    (RuntimeNotReadyError, 4),
    (EmbeddingError, 5),
    (GenerationError, 6),
    (EmptyStoreError, 7),
    (StoreError, 8),
]
EXIT_OTHER = 1


def exit_code_for(exc: LocalRagError) -> int:
    for exc_type, code in EXIT_CODES:
        if isinstance(exc, exc_type):
            return code
    return EXIT_OTHER


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="local-rag",
        description="Ask a local LLM questions about your documents",
    )
    parser.add_argument("--store", type=Path, default=None, help="Vector store snapshot file")
    parser.add_argument(
        "--no-serve",
        action="store_true",
        help="Do not start the model runtime; expect one to be running already",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add a document (PDF or text) to the vector store")
    add.add_argument("path", type=Path, help="Document to ingest")

    call = sub.add_parser("call", help="Answer a question using the stored documents")
    call.add_argument("question", help="Question text")
    call.add_argument("-k", "--top-k", type=int, default=None, help="Number of context chunks")

    return parser


def _needs_runtime(settings: Settings, command: str) -> bool:
    if settings.embedding_provider == "ollama":
        return True
    return command == "call" and settings.llm_provider == "ollama"


def _write_fragment(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def run(args: argparse.Namespace, settings: Settings) -> int:
    runtime: OllamaRuntime | None = None
    try:
        if not args.no_serve and settings.runtime_autostart and _needs_runtime(settings, args.command):
            runtime = OllamaRuntime(
                settings.runtime_address,
                binary=settings.ollama_bin,
                keypair_dir=settings.keypair_dir,
            )
            runtime.start()
            runtime.wait_until_ready(timeout=settings.runtime_ready_timeout)

        store = FileVectorStore(args.store or settings.store_path)
        embedder = Embedder(get_embedding_function(settings))

        if args.command == "add":
            pipeline = RetrievalPipeline(
                store, embedder, min_chunk_tokens=settings.min_chunk_tokens, settings=settings
            )
            records = pipeline.ingest_file(args.path)
            print(f"Added {len(records)} chunks from {args.path} ({len(store)} total)")
            return EXIT_OK

        pipeline = RetrievalPipeline(
            store,
            embedder,
            Generator(get_llm(settings)),
            top_k=settings.top_k,
            min_chunk_tokens=settings.min_chunk_tokens,
            settings=settings,
        )
        pipeline.query(args.question, on_chunk=_write_fragment, k=args.top_k)
        print()
        return EXIT_OK
    finally:
        if runtime is not None:
            runtime.stop()


def main(argv: list[str] | None = None, settings: Settings = default_settings) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "call" and args.top_k is not None and args.top_k < 1:
        parser.error("--top-k must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        return run(args, settings)
    except LocalRagError as exc:
        logger.error("%s", exc)
        return exit_code_for(exc)


if __name__ == "__main__":
    sys.exit(main())
