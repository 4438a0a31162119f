# Retrieval types handed to the grounding wrapper.

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Dict, Any


@dataclass
class ContextChunk:
    """A small, retrievable text unit returned by the Retriever."""
    id: str
    text: str
    score: float
    source: str
    meta: Optional[Dict[str, Any]] = None
