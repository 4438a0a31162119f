from __future__ import annotations

from typing import Dict

from .architect import ArchitectFlow
from .base import Flow
from .classifier import ClassifierFlow
from .conductor import ConductorFlow
from .dispatch import DispatchFlow
from .schemas import ClassificationLabel
from .specialists import ComponentBuilderFlow, CreatorFlow, EditorFlow, GeneralChatFlow, ResearcherFlow


def build_flows(model_client, prompt_store) -> Dict[str, Flow]:
    """Construct every flow once, sharing the two read-only ports."""
    classifier = ClassifierFlow(model_client)
    architect = ArchitectFlow(model_client, prompt_store)
    creator = CreatorFlow(model_client, prompt_store)
    general = GeneralChatFlow(model_client)
    builder = ComponentBuilderFlow(model_client, prompt_store)
    conductor = ConductorFlow(architect, creator)

    dispatch = DispatchFlow(
        classifier,
        {
            ClassificationLabel.COMPONENT_REQUEST: builder,
            ClassificationLabel.TASK_REQUEST: conductor,
            ClassificationLabel.APPROVAL_REQUEST: general,
            ClassificationLabel.GENERAL_CHAT: general,
        },
    )

    flows = [
        general,
        classifier,
        architect,
        builder,
        creator,
        EditorFlow(model_client, prompt_store),
        ResearcherFlow(model_client, prompt_store),
        conductor,
        dispatch,
    ]
    return {f.name: f for f in flows}
