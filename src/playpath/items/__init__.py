from .client import ItemsClient
from .models import DeleteResponse, Item, ItemWithNeighbors

__all__ = [
    "ItemsClient",
    "DeleteResponse",
    "Item",
    "ItemWithNeighbors",
]
