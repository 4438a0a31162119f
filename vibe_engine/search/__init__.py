# Makes the folder importable as a package.
# Exports Retriever and ContextChunk for convenience.

from .retriever import Retriever, OllamaEmbedder
from .types import ContextChunk

__all__ = ["Retriever", "OllamaEmbedder", "ContextChunk"]
