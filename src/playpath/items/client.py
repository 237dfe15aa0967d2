from collections.abc import Mapping
from typing import Any

from ..errors import PlayPathError
from ..responses import parse_response
from ..transport import Transport
from .models import DeleteResponse, Item, ItemWithNeighbors

ITEMS_PATH = "/api/items"

ItemLike = Item | Mapping[str, Any]


def _item_payload(item: ItemLike) -> dict[str, Any]:
    """Serialize an item, dropping fields that are not set."""
    if isinstance(item, Item):
        return item.model_dump(exclude_none=True)
    return {key: value for key, value in item.items() if value is not None}


def _item_path(item_id: int | str | None) -> str:
    if item_id is None or (isinstance(item_id, str) and not item_id.strip()):
        raise PlayPathError("Item id is required", 400)
    return f"{ITEMS_PATH}/{item_id}"


class ItemsClient:
    """CRUD client for knowledge-base items.

    Every method is one request through the transport; nothing is cached.
    """

    def __init__(self, transport: Transport):
        self._transport = transport

    async def list(self) -> list[Item]:
        """Get all items."""
        data = await self._transport.request("GET", ITEMS_PATH)
        return parse_response(list[Item], data)

    async def get(self, item_id: int | str) -> ItemWithNeighbors:
        """Get an item by ID, including similar items.

        Raises:
            PlayPathError: If item_id is missing, or on request failure
        """
        data = await self._transport.request("GET", _item_path(item_id))
        return parse_response(ItemWithNeighbors, data)

    async def create(self, item: ItemLike) -> Item:
        """Create a new item.

        Args:
            item: Item fields; at least one of title or text is required

        Returns:
            The created item, with its server-assigned ID

        Raises:
            PlayPathError: If both title and text are missing (status 400,
                no request is made), or on request failure
        """
        payload = _item_payload(item)
        if not payload.get("title") and not payload.get("text"):
            raise PlayPathError("Either title or text is required", 400)

        data = await self._transport.request("POST", ITEMS_PATH, body=payload)
        return parse_response(Item, data)

    async def update(self, item_id: int | str, fields: ItemLike) -> Item:
        """Update an existing item with partial fields."""
        path = _item_path(item_id)
        data = await self._transport.request("PUT", path, body=_item_payload(fields))
        return parse_response(Item, data)

    async def delete(self, item_id: int | str) -> DeleteResponse:
        """Delete an item and return the server's confirmation."""
        data = await self._transport.request("DELETE", _item_path(item_id))
        return parse_response(DeleteResponse, data)
