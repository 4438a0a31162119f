# ===============================================
# tests/conftest.py
# Scripted model client + in-memory prompt stores
# ===============================================

from typing import Any, List

import pytest

from vibe_engine.errors import PromptUnavailable
from vibe_engine.generate.types import GenerationResult


class ScriptedClient:
    """Returns queued responses in order and records every call."""

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls = []
        self.model = "scripted"

    def generate(self, messages, config):
        self.calls.append((list(messages), config))
        if not self.responses:
            raise AssertionError("ScriptedClient ran out of responses")
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, GenerationResult):
            return resp
        return GenerationResult(text=resp)


class DictPromptStore:
    def __init__(self, prompts):
        self.prompts = dict(prompts)
        self.requested = []

    def fetch_prompt(self, prompt_id):
        self.requested.append(prompt_id)
        if prompt_id not in self.prompts:
            raise PromptUnavailable(f"no prompt {prompt_id}")
        return self.prompts[prompt_id]


class BrokenPromptStore:
    def fetch_prompt(self, prompt_id):
        raise ConnectionError("prompt backend down")


@pytest.fixture
def prompts():
    return DictPromptStore(
        {
            "architect": "ARCHITECT PERSONA",
            "creator": "CREATOR PERSONA",
            "editor": "EDITOR PERSONA",
            "researcher": "RESEARCHER PERSONA",
            "component_builder": "BUILDER PERSONA",
        }
    )
