# AI INSTRUCTION:
# Provide a dummy model client for local dev and testing without API calls.

import typing
from typing import Any, Dict, List

from ..messages import latest_user_text
from ..types import GenerationConfig, GenerationResult, Message


class EchoDevClient:
    def __init__(self):
        self.model = "echo-dev"

    def generate(self, messages: List[Message], config: GenerationConfig) -> GenerationResult:
        user_input = latest_user_text(messages) or "(no user input)"
        meta = {
            "engine": "echo",
            "model": self.model,
            "temp": config.temperature,
            "max_tokens": config.max_output_tokens,
        }
        if config.structured_output is not None:
            value = _echo_fields(config.structured_output, user_input)
            return GenerationResult(text="", structured=value, meta=meta)
        return GenerationResult(text=f"[ECHO RESPONSE]\n{user_input}", meta=meta)


def _echo_fields(schema, text: str) -> Dict[str, Any]:
    """Fill string fields with the user text and list fields with [user text]."""
    value: Dict[str, Any] = {}
    for name, field in schema.model_fields.items():
        if typing.get_origin(field.annotation) in (list, typing.List):
            value[name] = [text]
        elif field.annotation is str:
            value[name] = text
    return value
