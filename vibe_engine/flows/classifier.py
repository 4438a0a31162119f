# AI INSTRUCTION:
# Route raw user text to exactly one label of a closed set.
# The model's answer is matched as a whole string after trimming whitespace;
# anything else becomes general_chat.

from __future__ import annotations

import logging

from ..errors import UnrecognizedClassification
from ..generate.messages import build_messages
from ..generate.types import GenerationConfig
from .base import Flow, FlowInput
from .schemas import ClassificationLabel

logger = logging.getLogger(__name__)

CLASSIFIER_PROMPT = """\
You are a task classification expert. Analyze the user's request and classify it
into exactly one of the following categories:

- component_request: the user wants a UI component or other code written.
- task_request: the user wants a multi-step piece of work planned and produced.
- approval_request: the user is approving, rejecting or confirming earlier output.
- general_chat: anything else, including questions and small talk.

Respond with the category name only, without quotes or punctuation."""


def match_label(raw: str) -> ClassificationLabel:
    text = (raw or "").strip()
    try:
        return ClassificationLabel(text)
    except ValueError:
        raise UnrecognizedClassification(raw) from None


class ClassifierFlow(Flow):
    name = "taskClassifierFlow"
    config = GenerationConfig(temperature=0.0)

    def execute(self, inp: FlowInput) -> ClassificationLabel:
        messages = build_messages(f'User Request: "{inp.latest_message}"', system=CLASSIFIER_PROMPT)
        result = self.generate(messages, self.config)
        try:
            return match_label(result.text)
        except UnrecognizedClassification as e:
            logger.warning("%s: %s, defaulting to general_chat", self.name, e)
            return ClassificationLabel.GENERAL_CHAT
