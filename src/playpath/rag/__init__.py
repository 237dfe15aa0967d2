from .client import RagClient, build_chat_payload
from .history import format_chat_history
from .models import ChatResponse, ChatStream, ChatTurn, Role, StreamEvent
from .session import ChatSession
from .sse import parse_sse

__all__ = [
    "RagClient",
    "build_chat_payload",
    "format_chat_history",
    "ChatResponse",
    "ChatStream",
    "ChatTurn",
    "Role",
    "StreamEvent",
    "ChatSession",
    "parse_sse",
]
