# Single-shot text flows. Each one is a persona id plus a generation config;
# the completion text is returned as-is.

from __future__ import annotations

from ..generate.messages import build_messages
from ..generate.types import GenerationConfig
from .base import Flow, FlowInput


class SpecialistFlow(Flow):
    config = GenerationConfig()

    def execute(self, inp: FlowInput) -> str:
        messages = build_messages(inp.latest_message, history=inp.history, system=self.system_prompt())
        return self.generate(messages, self.config).text


class GeneralChatFlow(SpecialistFlow):
    name = "generalChatFlow"
    config = GenerationConfig(temperature=0.7)


class CreatorFlow(SpecialistFlow):
    name = "creatorFlow"
    prompt_id = "creator"
    config = GenerationConfig(temperature=0.8)


class EditorFlow(SpecialistFlow):
    name = "editorFlow"
    prompt_id = "editor"
    config = GenerationConfig(temperature=0.3)


class ResearcherFlow(SpecialistFlow):
    name = "researcherFlow"
    prompt_id = "researcher"
    config = GenerationConfig(temperature=0.4, retrieval_augmented=True)


class ComponentBuilderFlow(SpecialistFlow):
    # the persona forbids markdown fences; output is not post-processed
    name = "componentBuilderFlow"
    prompt_id = "component_builder"
    config = GenerationConfig(temperature=0.2)
