from __future__ import annotations

import logging
from typing import Any, Dict

from .base import Flow, FlowInput
from .classifier import ClassifierFlow
from .schemas import ClassificationLabel

logger = logging.getLogger(__name__)


class DispatchFlow(Flow):
    """Classify the latest message, then hand the whole input to one flow."""

    name = "dispatchFlow"

    def __init__(self, classifier: ClassifierFlow, routes: Dict[ClassificationLabel, Flow]):
        super().__init__()
        missing = set(ClassificationLabel) - set(routes)
        if missing:
            raise ValueError(f"No route for: {sorted(m.value for m in missing)}")
        self.classifier = classifier
        self.routes = routes

    def execute(self, inp: FlowInput) -> Dict[str, Any]:
        label = self.classifier.invoke(inp)
        target = self.routes[label]
        logger.info("%s: %s -> %s", self.name, label.value, target.name)
        return {"label": label.value, "flow": target.name, "result": target.invoke(inp)}
