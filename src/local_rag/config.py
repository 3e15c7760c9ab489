"""Shared configuration loaded from environment / ``.env``."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from local_rag.runtime.address import RuntimeAddress, parse_runtime_address


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Model runtime
    ollama_host: str = Field(
        default="",
        description=(
            "Address of the Ollama runtime, e.g. '127.0.0.1:11434'. "
            "Unset or unparsable values fall back to the loopback default."
        ),
    )
    ollama_bin: str = "ollama"
    runtime_autostart: bool = True
    runtime_ready_timeout: float = 30.0
    keypair_dir: Path = Path.home() / ".ollama"

    # Embedding
    embedding_provider: Literal["ollama", "huggingface"] = "ollama"
    embedding_model: str = "nomic-embed-text"

    # LLM
    llm_provider: Literal["ollama", "openai"] = "ollama"
    llm_model_name: str = "llama2"
    llm_base_url: str = Field(
        default="",
        description="Base URL of an OpenAI-compatible endpoint (openai provider only).",
    )
    openai_api_key: str = ""
    llm_temperature: float = 0.0

    # Vector store
    store_path: Path = Path("vdb.json")
    top_k: int = 3

    # Ingestion
    min_chunk_tokens: int = 3
    pdf_extractor: Literal["pdftotext", "pypdf"] = "pdftotext"
    pdftotext_bin: str = "pdftotext"

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def runtime_address(self) -> RuntimeAddress:
        return parse_runtime_address(self.ollama_host)


# Singleton: import `settings` wherever needed.
settings = Settings()
