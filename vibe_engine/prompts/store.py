"""Prompt store port and its fallback policy.

``YamlPromptStore`` reads persona records from a YAML file and raises
``PromptUnavailable`` when a record is missing or empty.
``FallbackPromptStore`` wraps any store and never lets a lookup fail:
it logs the problem and hands back ``FALLBACK_PROMPT`` instead.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Optional, Protocol

import yaml

from ..errors import PromptUnavailable

logger = logging.getLogger(__name__)

FALLBACK_PROMPT = (
    "You are a helpful, general-purpose assistant. "
    "Answer the user's request clearly and accurately."
)


class PromptStore(Protocol):
    def fetch_prompt(self, prompt_id: str) -> str:
        ...


def build_system_prompt(persona_name: str, style: str, directives: str) -> str:
    parts = [f"You are {persona_name}."]
    if style:
        parts.append(f"Your style: {style}")
    if directives:
        parts.append(f"\nDirectives:\n{directives.strip()}")
    return "\n".join(parts)


def render_record(prompt_id: str, record) -> str:
    """A record is either plain prompt text or a {name, style, directives} persona."""
    if isinstance(record, str):
        return record.strip()
    if isinstance(record, dict):
        if record.get("text"):
            return str(record["text"]).strip()
        return build_system_prompt(
            record.get("name", prompt_id),
            record.get("style", ""),
            record.get("directives", ""),
        ).strip()
    raise PromptUnavailable(f"Prompt '{prompt_id}' has unsupported type {type(record).__name__}")


class YamlPromptStore:
    def __init__(self, path: str):
        self.path = path

    def _load(self) -> Dict:
        if not os.path.exists(self.path):
            raise PromptUnavailable(f"prompt file not found at {self.path}")
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise PromptUnavailable(f"could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PromptUnavailable(f"{self.path} must contain a mapping of prompt ids")
        return data

    def fetch_prompt(self, prompt_id: str) -> str:
        data = self._load()
        if prompt_id not in data:
            raise PromptUnavailable(f"Prompt '{prompt_id}' not found in {self.path}")
        text = render_record(prompt_id, data[prompt_id])
        if not text:
            raise PromptUnavailable(f"Prompt '{prompt_id}' is empty")
        return text


class FallbackPromptStore:
    """Never fails: any lookup problem becomes the generic assistant persona."""

    def __init__(self, inner: PromptStore, fallback: str = FALLBACK_PROMPT):
        self.inner = inner
        self.fallback = fallback

    def fetch_prompt(self, prompt_id: str) -> str:
        try:
            text = self.inner.fetch_prompt(prompt_id)
        except Exception as e:
            logger.warning("Prompt '%s' unavailable, using fallback persona: %s", prompt_id, e)
            return self.fallback
        if not text or not text.strip():
            logger.warning("Prompt '%s' is empty, using fallback persona", prompt_id)
            return self.fallback
        return text


def default_prompt_store(path: Optional[str] = None) -> FallbackPromptStore:
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "personas.yaml")
    return FallbackPromptStore(YamlPromptStore(path))
