from .base import Transport
from .httpx_transport import HTTPXTransport

__all__ = ["Transport", "HTTPXTransport"]
