"""Client configuration.

Centralizes the base address, credential and header values shared by
every request a client makes.
"""

import os

from pydantic import BaseModel, Field

API_KEY_HEADER = "X-Api-Key"
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ClientConfig(BaseModel):
    """Connection settings for a PlayPath client.

    Mutable on purpose: the client's setters update it in place and every
    later request picks up the new values.
    """

    base_url: str = Field(default="", description="Base URL of the PlayPath API")
    api_key: str = Field(default="", description="API key sent with every request")
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers; may override the defaults"
    )

    def request_headers(self) -> dict[str, str]:
        """Build the default header set for a request."""
        headers = {**DEFAULT_HEADERS, **self.headers}
        if self.api_key:
            headers[API_KEY_HEADER] = self.api_key
        return headers

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create configuration from environment variables.

        Environment variables:
            PLAYPATH_BASE_URL: API base URL (default: http://localhost:3000)
            PLAYPATH_API_KEY: API key (default: empty)
        """
        return cls(
            base_url=os.getenv("PLAYPATH_BASE_URL", DEFAULT_BASE_URL),
            api_key=os.getenv("PLAYPATH_API_KEY", ""),
        )
