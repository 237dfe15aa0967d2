"""Stateful chat session.

Keeps the running conversation for one chat and threads it into every
request, so callers only pass the new message.
"""

from .client import RagClient
from .models import ChatResponse, ChatTurn, Role


class ChatSession:
    """Conversation helper with automatic history.

    The session owns its history; nothing outside can mutate it.
    A send that fails leaves the history untouched, a send that succeeds
    appends exactly one user turn and one assistant turn.

    Concurrent send_message calls on one session are not serialized.
    Each call snapshots the history before sending and appends after its
    own reply, so overlapping calls may interleave turns.
    """

    def __init__(self, rag: RagClient, system_prompt: str | None = None):
        self._rag = rag
        self._system_prompt = system_prompt
        self._history: list[ChatTurn] = []

    @property
    def system_prompt(self) -> str | None:
        return self._system_prompt

    async def send_message(self, message: str) -> ChatResponse:
        """Send a message in this session.

        Args:
            message: The message to send

        Returns:
            Response from the RAG chat endpoint

        Raises:
            PlayPathError: Propagated unchanged; history is not modified
        """
        response = await self._rag.chat(
            message,
            history=list(self._history),
            system_prompt=self._system_prompt or None,
        )

        self._history.append(ChatTurn(role=Role.USER.value, text=message))
        self._history.append(ChatTurn(role=Role.ASSISTANT.value, text=response.reply))
        return response

    def get_history(self) -> list[ChatTurn]:
        """Get a copy of the chat history, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        """Clear the chat history. The system prompt is kept."""
        self._history.clear()

    def set_system_prompt(self, prompt: str | None) -> None:
        """Set the system prompt used by later messages."""
        self._system_prompt = prompt

    def __len__(self) -> int:
        return len(self._history)
