"""
PlayPath: Python client for the PlayPath RAG chat and knowledge-base APIs.

Each module hides one design decision: transport, resource endpoints,
or conversation state.
"""

import logging

__version__ = "0.1.0"

from .client import PlayPathClient
from .config import ClientConfig
from .errors import PlayPathError
from .factory import create_client
from .items import DeleteResponse, Item, ItemsClient, ItemWithNeighbors
from .rag import (
    ChatResponse,
    ChatSession,
    ChatStream,
    ChatTurn,
    RagClient,
    Role,
    StreamEvent,
    format_chat_history,
)
from .transport import HTTPXTransport, Transport

# Library logging stays silent unless the application configures it
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "PlayPathClient",
    "ClientConfig",
    "PlayPathError",
    "create_client",
    "DeleteResponse",
    "Item",
    "ItemsClient",
    "ItemWithNeighbors",
    "ChatResponse",
    "ChatSession",
    "ChatStream",
    "ChatTurn",
    "RagClient",
    "Role",
    "StreamEvent",
    "format_chat_history",
    "HTTPXTransport",
    "Transport",
]
