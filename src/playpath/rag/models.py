import json
from collections.abc import AsyncIterator
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Speaker of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    """One role-tagged utterance in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(default=Role.USER.value, description="Role of the speaker: 'user' or 'assistant'")
    text: str = Field(default="", description="Content of the turn")


class ChatResponse(BaseModel):
    """Reply from the RAG chat endpoint.

    Unknown fields returned by the server are kept as-is, and fields the
    server omitted stay unset, so ``model_dump(exclude_unset=True)`` gives
    back exactly what was received.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    reply: str = Field(description="Generated reply text")
    usage: int | None = Field(default=None, description="Messages used (trial accounts)")
    limit: int | None = Field(default=None, description="Message limit (trial accounts)")


class StreamEvent(BaseModel):
    """A single Server-Sent Event from the streaming chat endpoint."""

    model_config = ConfigDict(frozen=True)

    event: str = Field(default="message", description="Event type")
    data: str = Field(default="", description="Raw event payload")
    id: str | None = Field(default=None, description="Last event ID, if sent")
    retry: int | None = Field(default=None, description="Reconnection delay in ms, if sent")

    def json_data(self) -> Any:
        """Decode the payload as JSON."""
        return json.loads(self.data)


class ChatStream:
    """Async iterator over streamed chat events.

    The connection is opened on first iteration. The caller owns its
    lifecycle: iterate to the end, or close it early.

    Usage:
        async with client.rag_chat_stream("Hello") as stream:
            async for event in stream:
                print(event.data)
    """

    def __init__(self, events: AsyncIterator[StreamEvent]):
        """Initialize with an async generator of events.

        Args:
            events: Async generator yielding stream events
        """
        self._events = events

    def __aiter__(self) -> "ChatStream":
        return self

    async def __anext__(self) -> StreamEvent:
        return await self._events.__anext__()

    async def aclose(self) -> None:
        """Close the underlying connection."""
        aclose = getattr(self._events, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "ChatStream":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()
