# AI INSTRUCTION:
# Define a client for Ollama local inference.
# It must accept model name and expose generate(messages, config).

import logging
from typing import List

import requests

from ...errors import GenerationFailure
from ..types import GenerationConfig, GenerationResult, Message

logger = logging.getLogger(__name__)


class OllamaClient:
    def __init__(self, model: str = "mistral:7b-instruct", host: str = "http://localhost:11434", timeout: int = 180):
        self.model = model
        self.host = host.rstrip("/")
        self.timeout = timeout

    def generate(self, messages: List[Message], config: GenerationConfig) -> GenerationResult:
        options = {"temperature": float(config.temperature)}
        if config.max_output_tokens:
            options["num_predict"] = int(config.max_output_tokens)
        payload = {
            "model": self.model,
            "prompt": self._compose_prompt(messages),
            "stream": False,
            "options": options,
        }
        if config.structured_output is not None:
            payload["format"] = "json"
        if config.retrieval_augmented:
            logger.debug("Ollama has no built-in grounding; retrieval_augmented ignored")

        url = f"{self.host}/api/generate"
        try:
            resp = requests.post(url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise GenerationFailure(f"Ollama request failed: {e}") from e
        except ValueError as e:
            raise GenerationFailure(f"Ollama returned a non-JSON body: {e}") from e

        text = (data.get("response") or "").strip()
        if not text:
            raise GenerationFailure("Ollama returned no completion")
        return GenerationResult(text=text, meta={"engine": "ollama", "model": self.model})

    def _compose_prompt(self, messages: List[Message]) -> str:
        parts = []
        for m in messages:
            parts.append(f"{m.role.upper()}:\n{m.text.strip()}\n")
        return "\n".join(parts)
