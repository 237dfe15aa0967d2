from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from typing import Any

from ..config import ClientConfig


class Transport(ABC):
    """Abstract base class for PlayPath transports.

    This module hides the design decision of which HTTP stack carries
    requests. Implementations must handle:
    - Joining paths onto the configured base URL
    - Merging default and per-call headers
    - JSON decoding of response bodies
    - Mapping every failure onto PlayPathError

    Implementations make exactly one attempt per call. There is no retry,
    backoff or caching at this layer.

    Supports async context manager protocol for proper resource cleanup:
        async with transport:
            data = await transport.request("GET", "/api/items")
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def config(self) -> ClientConfig:
        """Configuration read on every call.

        Clients mutate this object in place; the next request must use the
        updated values.
        """
        pass

    @abstractmethod
    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Perform a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the configured base URL
            body: JSON-serializable payload (None sends no body)
            headers: Per-call headers, overriding defaults on collision

        Returns:
            Parsed JSON response body

        Raises:
            PlayPathError: On non-2xx status, connection failure or
                unparseable body
        """
        pass

    @abstractmethod
    def stream_lines(
        self,
        path: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> AsyncIterator[str]:
        """Open an event-stream GET and yield response lines.

        The connection opens on first iteration and closes when iteration
        ends or the iterator is closed.

        Args:
            path: Path relative to the configured base URL
            params: Query parameters
            headers: Per-call headers, overriding defaults on collision

        Returns:
            Async iterator of decoded text lines

        Raises:
            PlayPathError: On non-2xx status or connection failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    async def __aenter__(self) -> "Transport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
