from __future__ import annotations
from typing import Iterable, List, Optional

from .types import Message


def turn_to_message(role: str, content: str) -> Message:
    return Message(role=role, text=content)


def build_messages(
    latest_message: str,
    history: Optional[Iterable] = None,
    system: Optional[str] = None,
) -> List[Message]:
    """Assemble `[system?, *history, user]` in chronological order.

    History items are ChatTurn-like objects (``role`` / ``content``) or
    ready-made Messages; they are copied 1:1 and never reordered.
    """
    if not latest_message or not latest_message.strip():
        raise ValueError("latest_message must be a non-empty string")

    messages: List[Message] = []
    if system:
        messages.append(Message(role="system", text=system))
    for turn in history or []:
        if isinstance(turn, Message):
            messages.append(turn)
        else:
            messages.append(turn_to_message(turn.role, turn.content))
    messages.append(Message(role="user", text=latest_message))
    return messages


def latest_user_text(messages: List[Message]) -> str:
    for m in reversed(messages):
        if m.role == "user":
            return m.text
    return ""
