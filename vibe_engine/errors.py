"""Failure kinds raised by flows and their collaborators.

Only ``GenerationFailure`` and ``StructuredOutputInvalid`` ever reach a
caller. ``PromptUnavailable`` and ``UnrecognizedClassification`` are
recovered where they are raised (fallback persona, ``general_chat``) and
only show up in the logs.
"""

from __future__ import annotations

from typing import Optional


class FlowError(Exception):
    kind = "flow_error"

    def __init__(self, message: str, flow: Optional[str] = None):
        super().__init__(message)
        self.flow = flow


class PromptUnavailable(FlowError):
    kind = "prompt_unavailable"


class GenerationFailure(FlowError):
    kind = "generation"


class StructuredOutputInvalid(FlowError):
    kind = "structured_output_invalid"


class UnrecognizedClassification(FlowError):
    kind = "unrecognized_classification"

    def __init__(self, raw: str, flow: Optional[str] = None):
        super().__init__(f"unrecognized classification: {raw!r}", flow=flow)
        self.raw = raw
