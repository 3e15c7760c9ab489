"""Streaming answer generation grounded in retrieved context."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

from local_rag.exceptions import GenerationError

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[str], None]


def _fragment_text(content: str | list) -> str:
    """Flatten a message-chunk ``content`` into plain text."""
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class Generator:
    """Stream a chat model's answer to a question, given context text.

    Parameters
    ----------
    llm:
        A LangChain chat model.  When *None*, :func:`get_llm` builds one
        from the global settings.
    """

    def __init__(self, llm: BaseChatModel | None = None) -> None:
        if llm is None:
            from local_rag.generation.llm import get_llm

            llm = get_llm()
        self._llm = llm

    def generate(
        self,
        system_context: str,
        question: str,
        on_chunk: ChunkCallback | None = None,
    ) -> str:
        """Generate an answer, passing each fragment to *on_chunk* as it arrives.

        Blocks until the model finishes and returns the complete answer.

        Raises
        ------
        GenerationError
            If the model call fails at any point of the stream.
        """
        messages = [SystemMessage(content=system_context), HumanMessage(content=question)]
        fragments: list[str] = []
        try:
            for chunk in self._llm.stream(messages):
                text = _fragment_text(chunk.content)
                if not text:
                    continue
                fragments.append(text)
                if on_chunk is not None:
                    on_chunk(text)
        except Exception as exc:
            raise GenerationError(f"Cannot generate content: {exc}") from exc

        answer = "".join(fragments)
        logger.debug("Generated %d characters in %d fragments", len(answer), len(fragments))
        return answer
