"""
Generation — chat-model construction and streamed answering.
"""

from local_rag.generation.generator import Generator

__all__ = ["Generator"]
