from collections.abc import Iterable, Mapping
from typing import Any

from .models import ChatTurn, Role

# Checked in order; the first truthy one becomes the turn text
_TEXT_FIELDS = ("text", "message", "content")


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def format_chat_history(messages: Iterable[Any]) -> list[ChatTurn]:
    """Normalize message-like records into chat turns.

    Accepts mappings or objects with attributes. Role defaults to 'user';
    text comes from the first present of 'text', 'message' or 'content',
    else the empty string. Never raises for odd record shapes.

    Args:
        messages: Message-like records in chronological order

    Returns:
        List of ChatTurn in the same order
    """
    turns = []
    for record in messages:
        role = _field(record, "role") or Role.USER.value
        text = next(
            (value for value in (_field(record, name) for name in _TEXT_FIELDS) if value),
            "",
        )
        turns.append(ChatTurn(
            role=role.value if isinstance(role, Role) else str(role),
            text=text if isinstance(text, str) else str(text),
        ))
    return turns
