# AI INSTRUCTION:
# Define a client for OpenAI Chat Completions API.
# It should follow the same interface as OllamaClient.

import logging
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from ...errors import GenerationFailure
from ..types import GenerationConfig, GenerationResult, Message

logger = logging.getLogger(__name__)

ROLE_MAP = {"system": "system", "user": "user", "model": "assistant"}


class OpenAIClient:
    def __init__(self, model: str = "gpt-4o-mini", api_key: Optional[str] = None, client=None):
        self.model = model
        self.client = client or OpenAI(api_key=api_key)

    def generate(self, messages: List[Message], config: GenerationConfig) -> GenerationResult:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": ROLE_MAP[m.role], "content": m.text} for m in messages],
            "temperature": config.temperature,
        }
        if config.max_output_tokens:
            kwargs["max_tokens"] = config.max_output_tokens
        if config.structured_output is not None:
            schema = config.structured_output
            kwargs["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": schema.__name__, "schema": schema.model_json_schema()},
            }
        if config.retrieval_augmented:
            logger.debug("OpenAI chat completions have no grounding switch; retrieval_augmented ignored")

        try:
            resp = self.client.chat.completions.create(**kwargs)
        except OpenAIError as e:
            raise GenerationFailure(f"OpenAI request failed: {e}") from e

        if not resp.choices:
            raise GenerationFailure("OpenAI returned no choices")
        text = (resp.choices[0].message.content or "").strip()
        if not text:
            raise GenerationFailure("OpenAI returned an empty completion")
        return GenerationResult(text=text, meta={"engine": "openai", "model": self.model})
