from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from .config import ClientConfig
from .items import DeleteResponse, Item, ItemsClient, ItemWithNeighbors
from .items.client import ItemLike
from .rag import ChatResponse, ChatSession, ChatStream, ChatTurn, RagClient, format_chat_history
from .rag.client import HistoryLike
from .transport import HTTPXTransport, Transport


class PlayPathClient:
    """Client for the PlayPath RAG and Items APIs.

    Hidden design decisions:
    - Which transport carries requests (httpx by default)
    - How configuration changes reach in-flight clients
    - Which resource client serves each call

    Supports async context manager protocol for proper resource cleanup:
        async with PlayPathClient(base_url=..., api_key=...) as client:
            response = await client.rag_chat("Hello")
    """

    def __init__(
        self,
        base_url: str = "",
        api_key: str = "",
        headers: Mapping[str, str] | None = None,
        *,
        transport: Transport | None = None,
        http_client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ):
        """Initialize the client.

        Args:
            base_url: Base URL of the PlayPath API
            api_key: API key for authentication
            headers: Additional headers to include in requests
            transport: Custom transport (its own configuration is used)
            http_client: Pre-built httpx client for the default transport
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        if transport is None:
            self._config = ClientConfig(
                base_url=base_url,
                api_key=api_key,
                headers=dict(headers or {}),
            )
            transport = HTTPXTransport(self._config, http_client=http_client, **client_kwargs)
        else:
            self._config = transport.config

        self._transport = transport
        self._rag = RagClient(transport)
        self._items = ItemsClient(transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def rag(self) -> RagClient:
        return self._rag

    @property
    def items(self) -> ItemsClient:
        return self._items

    def set_api_key(self, api_key: str) -> None:
        """Set the API key used by every later request."""
        self._config.api_key = api_key

    def set_base_url(self, base_url: str) -> None:
        """Set the base URL used by every later request."""
        self._config.base_url = base_url

    def set_headers(self, headers: Mapping[str, str]) -> None:
        """Merge extra headers into the defaults sent with every request."""
        self._config.headers.update(headers)

    # RAG API

    async def rag_chat(
        self,
        message: str,
        history: HistoryLike | None = None,
        system_prompt: str | None = None,
    ) -> ChatResponse:
        """Send a chat message to the RAG API."""
        return await self._rag.chat(message, history=history, system_prompt=system_prompt)

    def rag_chat_stream(
        self,
        message: str,
        history: HistoryLike | None = None,
        system_prompt: str | None = None,
    ) -> ChatStream:
        """Stream a chat reply as Server-Sent Events."""
        return self._rag.chat_stream(message, history=history, system_prompt=system_prompt)

    # Items API

    async def get_items(self) -> list[Item]:
        return await self._items.list()

    async def get_item(self, item_id: int | str) -> ItemWithNeighbors:
        return await self._items.get(item_id)

    async def create_item(self, item: ItemLike) -> Item:
        return await self._items.create(item)

    async def update_item(self, item_id: int | str, item: ItemLike) -> Item:
        return await self._items.update(item_id, item)

    async def delete_item(self, item_id: int | str) -> DeleteResponse:
        return await self._items.delete(item_id)

    # Utilities

    def format_chat_history(self, messages: Iterable[Any]) -> list[ChatTurn]:
        """Normalize message-like records into chat turns."""
        return format_chat_history(messages)

    def create_chat_session(self, system_prompt: str | None = None) -> ChatSession:
        """Create a chat session that keeps its own history."""
        return ChatSession(self._rag, system_prompt=system_prompt)

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def __aenter__(self) -> "PlayPathClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
