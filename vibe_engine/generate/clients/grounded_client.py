# AI INSTRUCTION:
# Wrap any model client with retrieval grounding.
# Only calls with retrieval_augmented=True are touched, and only the newest
# user turn is rewritten to carry the retrieved context.

from __future__ import annotations
import logging
from typing import List

from ...errors import GenerationFailure
from ...search.types import ContextChunk
from ..types import GenerationConfig, GenerationResult, Message

logger = logging.getLogger(__name__)


def compose_grounded_message(query: str, context: List[ContextChunk]) -> str:
    """Attach context snippets to the user query."""
    ctx_txt = "\n\n---\n\n".join(
        [f"[{c.id}] (score={c.score:.3f}) source={c.source}\n{c.text}" for c in context]
    )
    return f"User question:\n{query}\n\nContext:\n{ctx_txt}"


class GroundedClient:
    def __init__(self, inner, retriever):
        self.inner = inner
        self.retriever = retriever

    @property
    def model(self):
        return getattr(self.inner, "model", None)

    def generate(self, messages: List[Message], config: GenerationConfig) -> GenerationResult:
        if not config.retrieval_augmented:
            return self.inner.generate(messages, config)

        last = messages[-1]
        try:
            chunks = self.retriever.retrieve(last.text)
        except Exception as e:
            raise GenerationFailure(f"retrieval failed: {e}") from e

        logger.info("Grounding with %d context chunk(s)", len(chunks))
        if chunks:
            grounded = Message(role=last.role, text=compose_grounded_message(last.text, chunks))
            messages = [*messages[:-1], grounded]

        result = self.inner.generate(messages, config)
        if result is None:
            raise GenerationFailure("model client returned no result")
        result.meta.setdefault("citations", [c.id for c in chunks])
        return result
