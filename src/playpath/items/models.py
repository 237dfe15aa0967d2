from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """A knowledge-base record.

    Identity and timestamps are assigned by the server; the client only
    carries them around.
    """

    model_config = ConfigDict(extra="allow")

    id: int | str | None = Field(default=None, description="Server-assigned identifier")
    title: str | None = Field(default=None, description="Item title")
    url: str | None = Field(default=None, description="Source URL")
    text: str | None = Field(default=None, description="Free-text content")
    tags: list[str] | None = Field(default=None, description="Tags")
    state: str | None = Field(default=None, description="Lifecycle state")
    created_at: str | None = Field(default=None, description="Creation timestamp")
    updated_at: str | None = Field(default=None, description="Last update timestamp")
    user_id: int | str | None = Field(default=None, description="Owning user")


class ItemWithNeighbors(Item):
    """An item together with its most similar items."""

    neighbors: list[Item] = Field(default_factory=list, description="Related items")


class DeleteResponse(BaseModel):
    """Confirmation returned after deleting an item."""

    model_config = ConfigDict(frozen=True, extra="allow")

    message: str = Field(description="Confirmation message")
