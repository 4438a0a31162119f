# AI INSTRUCTION:
# One place that turns a model completion into a validated structured value.
# Flows never do their own fence stripping or JSON parsing.

from __future__ import annotations
import json
import re
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..errors import StructuredOutputInvalid
from .types import GenerationResult

T = TypeVar("T", bound=BaseModel)

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?[ \t]*```$")


def strip_code_fence(text: str) -> str:
    """Remove a leading ```lang and trailing ``` marker, if present."""
    s = text.strip()
    s = _FENCE_OPEN.sub("", s, count=1)
    s = _FENCE_CLOSE.sub("", s, count=1)
    return s.strip()


def parse_json_text(text: str) -> Any:
    body = strip_code_fence(text or "")
    if not body:
        raise StructuredOutputInvalid("completion is empty, expected JSON")
    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise StructuredOutputInvalid(f"completion is not valid JSON: {e}") from e


def validate_structured(schema: Type[T], value: Any) -> T:
    """Validate a candidate value against a declared schema, no coercion."""
    if isinstance(value, BaseModel):
        value = value.model_dump()
    try:
        return schema.model_validate(value)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise StructuredOutputInvalid(f"{schema.__name__} failed validation: {problems}") from e


def resolve_structured(result: GenerationResult, schema: Type[T]) -> T:
    """Trust a typed value from the client if there is one, otherwise parse the text."""
    if result.structured is not None:
        return validate_structured(schema, result.structured)
    return validate_structured(schema, parse_json_text(result.text))
