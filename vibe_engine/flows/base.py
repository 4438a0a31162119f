"""Flow base class and the input/outcome contracts every flow shares."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import FlowError, GenerationFailure
from ..generate.types import GenerationConfig, GenerationResult, Message
from ..prompts.store import FALLBACK_PROMPT, FallbackPromptStore

logger = logging.getLogger(__name__)


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    content: str


class FlowInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    latest_message: str = Field(alias="latestMessage", description="The most recent message from the user.")
    history: Optional[List[ChatTurn]] = Field(default=None, description="The conversation history.")

    @field_validator("latest_message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("latestMessage must not be empty")
        return v

    @classmethod
    def coerce(cls, data: Union["FlowInput", str, dict]) -> "FlowInput":
        if isinstance(data, cls):
            return data
        if isinstance(data, str):
            return cls(latest_message=data)
        return cls.model_validate(data)


@dataclass
class FlowFailure:
    flow: str
    stage: str
    kind: str
    message: str


@dataclass
class FlowOutcome:
    value: Any = None
    failure: Optional[FlowFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class Flow:
    """A named unit: typed input -> model call(s) -> validated output.

    ``invoke`` returns the value or raises a FlowError tagged with the
    flow that failed. ``run`` never raises a FlowError and reports the
    failure as data instead.
    """

    name = "flow"
    prompt_id: Optional[str] = None

    def __init__(self, model_client=None, prompt_store=None):
        self.model_client = model_client
        # lookups through a flow never raise; a bare store gets the fallback policy
        if prompt_store is not None and not isinstance(prompt_store, FallbackPromptStore):
            prompt_store = FallbackPromptStore(prompt_store)
        self.prompt_store = prompt_store

    def system_prompt(self) -> Optional[str]:
        if self.prompt_id is None:
            return None
        if self.prompt_store is None:
            logger.warning("%s has no prompt store, using fallback persona", self.name)
            return FALLBACK_PROMPT
        return self.prompt_store.fetch_prompt(self.prompt_id)

    def generate(self, messages: List[Message], config: GenerationConfig) -> GenerationResult:
        try:
            result = self.model_client.generate(messages, config)
        except GenerationFailure as e:
            e.flow = e.flow or self.name
            raise
        if result is None:
            raise GenerationFailure("model client returned no result", flow=self.name)
        return result

    def execute(self, inp: FlowInput) -> Any:
        raise NotImplementedError

    def invoke(self, data: Union[FlowInput, str, dict]) -> Any:
        inp = FlowInput.coerce(data)
        try:
            return self.execute(inp)
        except FlowError as e:
            if e.flow is None:
                e.flow = self.name
            raise

    def run(self, data: Union[FlowInput, str, dict]) -> FlowOutcome:
        try:
            value = self.invoke(data)
        except FlowError as e:
            failure = FlowFailure(flow=self.name, stage=e.flow or self.name, kind=e.kind, message=str(e))
            logger.warning("%s failed at %s (%s): %s", failure.flow, failure.stage, failure.kind, failure.message)
            return FlowOutcome(failure=failure)
        return FlowOutcome(value=value)
