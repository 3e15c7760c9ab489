"""
Runtime — address resolution, identity bootstrap and process lifecycle
for the local model server that backs embedding and generation.
"""

from local_rag.runtime.address import RuntimeAddress, parse_runtime_address
from local_rag.runtime.keypair import initialize_keypair
from local_rag.runtime.server import OllamaRuntime

__all__ = [
    "OllamaRuntime",
    "RuntimeAddress",
    "initialize_keypair",
    "parse_runtime_address",
]
