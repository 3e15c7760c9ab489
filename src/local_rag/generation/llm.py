"""LLM initialisation — single place to swap providers.

Supports two modes:

1. **Ollama** (default) — the local runtime started by the CLI, addressed
   through ``OLLAMA_HOST``.
2. **OpenAI-compatible endpoint** — set ``LLM_PROVIDER=openai`` and
   optionally ``LLM_BASE_URL`` (e.g. a vLLM server exposing
   ``/v1/chat/completions``).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from local_rag.config import Settings, settings as default_settings

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

logger = logging.getLogger(__name__)


def get_llm(settings: Settings = default_settings, temperature: float | None = None) -> BaseChatModel:
    """Return the configured chat model."""
    if temperature is None:
        temperature = settings.llm_temperature

    if settings.llm_provider == "openai":
        from langchain_openai import ChatOpenAI

        kwargs: dict = {
            "model": settings.llm_model_name,
            "temperature": temperature,
        }
        if settings.llm_base_url:
            logger.info("Using OpenAI-compatible endpoint: %s", settings.llm_base_url)
            kwargs["base_url"] = settings.llm_base_url
            # self-hosted servers don't check the key; LangChain requires a non-empty value.
            kwargs["api_key"] = settings.openai_api_key or "EMPTY"
        else:
            kwargs["api_key"] = settings.openai_api_key
        return ChatOpenAI(**kwargs)

    from langchain_ollama import ChatOllama

    base_url = settings.runtime_address.base_url
    logger.debug("Using Ollama model %s at %s", settings.llm_model_name, base_url)
    return ChatOllama(
        model=settings.llm_model_name,
        base_url=base_url,
        temperature=temperature,
    )
