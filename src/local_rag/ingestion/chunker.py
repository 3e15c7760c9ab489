"""Passage chunking: blank-line split, trim, dedupe, drop short passages."""

from __future__ import annotations

from collections.abc import Iterable

PASSAGE_SEPARATOR = "\n\n"


def split_passages(text: str) -> list[str]:
    """Split *text* on blank lines and strip each segment."""
    return [segment.strip() for segment in text.split(PASSAGE_SEPARATOR)]


def deduplicate(passages: Iterable[str]) -> list[str]:
    """Keep the first occurrence of every exact passage, preserving order."""
    seen: set[str] = set()
    unique: list[str] = []
    for passage in passages:
        if passage not in seen:
            seen.add(passage)
            unique.append(passage)
    return unique


def drop_short(passages: Iterable[str], min_tokens: int = 3) -> list[str]:
    """Drop passages with ``min_tokens`` or fewer whitespace-delimited tokens."""
    return [p for p in passages if len(p.split()) > min_tokens]


def chunk_text(document_text: str, *, min_tokens: int = 3) -> list[str]:
    """Split *document_text* into the passages worth embedding.

    Parameters
    ----------
    document_text:
        Raw text of the whole document.
    min_tokens:
        Passages with this many tokens or fewer are discarded.

    Returns
    -------
    list[str]
        Distinct passages in original order.  No casing or punctuation
        normalisation is applied.
    """
    return drop_short(deduplicate(split_passages(document_text)), min_tokens=min_tokens)
