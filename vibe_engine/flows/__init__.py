from .base import ChatTurn, Flow, FlowFailure, FlowInput, FlowOutcome
from .schemas import ClassificationLabel, Plan
from .classifier import ClassifierFlow
from .architect import ArchitectFlow
from .specialists import ComponentBuilderFlow, CreatorFlow, EditorFlow, GeneralChatFlow, ResearcherFlow
from .conductor import ConductorFlow, render_plan
from .dispatch import DispatchFlow
from .registry import build_flows

__all__ = [
    "ChatTurn",
    "Flow",
    "FlowFailure",
    "FlowInput",
    "FlowOutcome",
    "ClassificationLabel",
    "Plan",
    "ClassifierFlow",
    "ArchitectFlow",
    "ComponentBuilderFlow",
    "CreatorFlow",
    "EditorFlow",
    "GeneralChatFlow",
    "ResearcherFlow",
    "ConductorFlow",
    "render_plan",
    "DispatchFlow",
    "build_flows",
]
