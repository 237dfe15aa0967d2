from typing import Any

from .client import PlayPathClient
from .config import ClientConfig


def create_client(**config: Any) -> PlayPathClient:
    """Create a PlayPath client.

    This factory function hides where configuration comes from: explicit
    values win, anything missing is read from the environment.

    Args:
        **config: Client configuration
            - base_url: str (default: $PLAYPATH_BASE_URL or http://localhost:3000)
            - api_key: str (default: $PLAYPATH_API_KEY)
            - headers: dict[str, str] | None
            - any other key is passed to httpx.AsyncClient (e.g. timeout)

    Returns:
        Initialized PlayPathClient

    Examples:
        >>> client = create_client(
        ...     base_url="https://playpath.example.com",
        ...     api_key="pp-..."
        ... )

        >>> client = create_client(timeout=30.0)  # URL and key from env
    """
    env = ClientConfig.from_env()
    base_url = config.pop("base_url", None) or env.base_url
    api_key = config.pop("api_key", None) or env.api_key
    headers = config.pop("headers", None)

    return PlayPathClient(base_url=base_url, api_key=api_key, headers=headers, **config)
