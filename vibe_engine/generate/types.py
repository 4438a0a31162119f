# AI INSTRUCTION:
# Define simple, typed dataclasses shared across generator modules.
# Everything here is request-scoped and immutable once built.

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Type

from pydantic import BaseModel

ROLES = ("system", "user", "model")


@dataclass(frozen=True)
class Message:
    """Single chat turn: system, user, or model."""
    role: str
    text: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise ValueError(f"Unknown message role: {self.role!r}")


@dataclass(frozen=True)
class GenerationConfig:
    """Per-call generation parameters."""
    temperature: float = 0.7
    structured_output: Optional[Type[BaseModel]] = None
    retrieval_augmented: bool = False
    max_output_tokens: Optional[int] = None

    def __post_init__(self):
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be within [0, 1], got {self.temperature}")
        if self.max_output_tokens is not None and self.max_output_tokens <= 0:
            raise ValueError("max_output_tokens must be positive")


@dataclass
class GenerationResult:
    """What a model client hands back: raw text and, when it can, a parsed value."""
    text: str = ""
    structured: Any = None
    meta: Dict[str, Any] = field(default_factory=dict)


class ModelClient(Protocol):
    def generate(self, messages: List[Message], config: GenerationConfig) -> GenerationResult:
        ...
