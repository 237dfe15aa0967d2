import json
import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

import httpx

from ..config import ClientConfig
from ..errors import PlayPathError
from .base import Transport

logger = logging.getLogger(__name__)

# Failures that mean no usable response was obtained
_TRANSPORT_FAILURES = (httpx.HTTPError, httpx.InvalidURL, ValueError)


def _http_error(status: int, data: Any) -> PlayPathError:
    """Build the error for a non-2xx response."""
    message = data.get("error") if isinstance(data, dict) else None
    return PlayPathError(str(message) if message else f"HTTP {status}", status, data)


def _transport_error(cause: Exception) -> PlayPathError:
    return PlayPathError(str(cause) or type(cause).__name__, None, cause)


def _decode_body(raw: bytes) -> Any:
    """Decode an error body, keeping the raw text when it is not JSON."""
    text = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


class HTTPXTransport(Transport):
    """Transport implementation on top of httpx.

    Hidden design decisions:
    - httpx client lifecycle (owned or injected)
    - URL joining and header merging
    - Classification of failures into PlayPathError
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ):
        """Initialize the transport.

        Args:
            config: Shared client configuration, read on every call
            http_client: Optional pre-built httpx client (not closed by us)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._config = config
        self._owns_client = http_client is None
        if http_client is None:
            # No implicit timeout: a call waits until the server answers
            client_kwargs.setdefault("timeout", None)
            http_client = httpx.AsyncClient(**client_kwargs)
        self._client = http_client

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _merge_headers(self, headers: Mapping[str, str] | None) -> dict[str, str]:
        return {**self._config.request_headers(), **(headers or {})}

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Perform a single request and return the decoded JSON body.

        The body is decoded before the status is checked, so an error page
        that is not JSON surfaces as a transport failure with no status.
        """
        url = self._config.url_for(path)
        logger.debug("%s %s", method, path)

        try:
            response = await self._client.request(
                method,
                url,
                headers=self._merge_headers(headers),
                json=body,
            )
            data = response.json()
        except _TRANSPORT_FAILURES as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise _transport_error(e) from e

        logger.debug("%s %s -> %d", method, path, response.status_code)
        if not response.is_success:
            raise _http_error(response.status_code, data)
        return data

    async def stream_lines(
        self,
        path: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> AsyncIterator[str]:
        """Open an event-stream GET and yield its lines as they arrive."""
        url = self._config.url_for(path)
        request_headers = self._merge_headers({"Accept": "text/event-stream", **(headers or {})})
        logger.debug("GET %s (stream)", path)

        try:
            async with self._client.stream(
                "GET",
                url,
                params=params,
                headers=request_headers,
            ) as response:
                logger.debug("GET %s (stream) -> %d", path, response.status_code)
                if not response.is_success:
                    raw = await response.aread()
                    raise _http_error(response.status_code, _decode_body(raw))

                async for line in response.aiter_lines():
                    yield line
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug("GET %s (stream) failed: %s", path, e)
            raise _transport_error(e) from e

    async def close(self) -> None:
        """Close the underlying httpx client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
