from __future__ import annotations

from ..generate.messages import build_messages
from ..generate.structured import resolve_structured
from ..generate.types import GenerationConfig
from .base import Flow, FlowInput
from .schemas import Plan


class ArchitectFlow(Flow):
    """Request text -> validated Plan. Never returns a partial plan."""

    name = "architectFlow"
    prompt_id = "architect"
    config = GenerationConfig(temperature=0.2, structured_output=Plan)

    def execute(self, inp: FlowInput) -> Plan:
        messages = build_messages(inp.latest_message, system=self.system_prompt())
        result = self.generate(messages, self.config)
        return resolve_structured(result, Plan)
