from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ClassificationLabel(str, Enum):
    COMPONENT_REQUEST = "component_request"
    TASK_REQUEST = "task_request"
    APPROVAL_REQUEST = "approval_request"
    GENERAL_CHAT = "general_chat"


class Plan(BaseModel):
    """Architect output. Strict: wrong types are rejected, never coerced."""

    model_config = ConfigDict(strict=True, frozen=True)

    title: str = Field(description="Short title of the plan.")
    steps: List[str] = Field(min_length=1, description="Ordered, non-empty steps.")

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be empty")
        return v

    @field_validator("steps")
    @classmethod
    def _steps_not_blank(cls, v: List[str]) -> List[str]:
        for i, step in enumerate(v):
            if not step.strip():
                raise ValueError(f"step {i + 1} is empty")
        return v
