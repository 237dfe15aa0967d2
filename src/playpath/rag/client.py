import json
from collections.abc import AsyncIterator, Mapping, Sequence
from typing import Any

from ..errors import PlayPathError
from ..responses import parse_response
from ..transport import Transport
from .models import ChatResponse, ChatStream, ChatTurn, StreamEvent
from .sse import parse_sse

CHAT_PATH = "/api/rag/chat"
CHAT_STREAM_PATH = "/api/rag/chat/stream"

HistoryLike = Sequence[ChatTurn | Mapping[str, Any]]


def _serialize_history(history: HistoryLike) -> list[dict[str, Any]]:
    return [
        turn.model_dump() if isinstance(turn, ChatTurn) else dict(turn)
        for turn in history
    ]


def build_chat_payload(
    message: str,
    history: HistoryLike | None = None,
    system_prompt: str | None = None,
) -> dict[str, Any]:
    """Build the chat request body.

    Optional fields are left out entirely when absent. An empty history
    list is still sent; an empty system prompt is not.

    Raises:
        PlayPathError: If message is missing or empty (status 400)
    """
    if not message:
        raise PlayPathError("Message is required", 400)

    payload: dict[str, Any] = {"message": message}
    if history is not None:
        payload["history"] = _serialize_history(history)
    if system_prompt:
        payload["system_prompt"] = system_prompt
    return payload


class RagClient:
    """Client for the RAG chat endpoints.

    Stateless: every call is a single request through the transport.
    For automatic history handling use ChatSession.
    """

    def __init__(self, transport: Transport):
        self._transport = transport

    async def chat(
        self,
        message: str,
        history: HistoryLike | None = None,
        system_prompt: str | None = None,
    ) -> ChatResponse:
        """Send a chat message.

        Args:
            message: The message to send (required)
            history: Prior turns, oldest first
            system_prompt: Custom system prompt

        Returns:
            ChatResponse with the reply and optional usage/limit counters

        Raises:
            PlayPathError: On validation, HTTP or transport failure
        """
        payload = build_chat_payload(message, history, system_prompt)
        data = await self._transport.request("POST", CHAT_PATH, body=payload)
        return parse_response(ChatResponse, data)

    def chat_stream(
        self,
        message: str,
        history: HistoryLike | None = None,
        system_prompt: str | None = None,
    ) -> ChatStream:
        """Stream a chat reply as Server-Sent Events.

        Validation happens immediately; the connection opens on first
        iteration. History is not recorded anywhere.

        Args:
            message: The message to send (required)
            history: Prior turns, oldest first
            system_prompt: Custom system prompt

        Returns:
            ChatStream yielding StreamEvent objects

        Raises:
            PlayPathError: If message is missing; HTTP and transport
                failures surface while iterating
        """
        payload = build_chat_payload(message, history, system_prompt)
        params = {
            key: json.dumps(value) if key == "history" else value
            for key, value in payload.items()
        }
        return ChatStream(self._stream_events(params))

    async def _stream_events(self, params: dict[str, str]) -> AsyncIterator[StreamEvent]:
        """Internal generator that owns the streaming connection."""
        lines = self._transport.stream_lines(CHAT_STREAM_PATH, params=params)
        events = parse_sse(lines)
        try:
            async for event in events:
                yield event
        finally:
            await events.aclose()
            aclose = getattr(lines, "aclose", None)
            if aclose is not None:
                await aclose()
