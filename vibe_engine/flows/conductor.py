"""Architect -> Creator pipeline.

The plan is rendered to text before the creator sees it; nothing
intermediate is returned to the caller. A failure in either step fails
the conductor, tagged with the step that broke.
"""

from __future__ import annotations

import logging

from .architect import ArchitectFlow
from .base import Flow, FlowInput
from .schemas import Plan
from .specialists import CreatorFlow

logger = logging.getLogger(__name__)


def render_plan(plan: Plan) -> str:
    lines = [plan.title]
    lines.extend(f"{i}. {step}" for i, step in enumerate(plan.steps, start=1))
    return "\n".join(lines)


class ConductorFlow(Flow):
    name = "conductorFlow"

    def __init__(self, architect: ArchitectFlow, creator: CreatorFlow):
        super().__init__()
        self.architect = architect
        self.creator = creator

    def execute(self, inp: FlowInput) -> str:
        plan = self.architect.invoke(inp.latest_message)
        logger.info("%s: plan '%s' with %d step(s)", self.name, plan.title, len(plan.steps))

        draft = self.creator.invoke(render_plan(plan))
        logger.info("%s: draft ready (%d chars)", self.name, len(draft))
        return draft
