# Generator package

# Exposes the generation port types and the structured-output adapter.

from .types import Message, GenerationConfig, GenerationResult, ModelClient
from .messages import build_messages
from .structured import resolve_structured, strip_code_fence
from .clients.echo_dev_client import EchoDevClient

__all__ = [
    "Message",
    "GenerationConfig",
    "GenerationResult",
    "ModelClient",
    "build_messages",
    "resolve_structured",
    "strip_code_fence",
    "EchoDevClient",
]
