from typing import Any


class PlayPathError(Exception):
    """Error raised for every failed PlayPath operation.

    One type covers all three failure paths:
    - validation: bad caller input, raised before any request (status 400)
    - HTTP: non-2xx response (status is the HTTP code, data is the body)
    - transport: no usable response (status None, data is the cause)
    """

    def __init__(self, message: str, status: int | None = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    @property
    def errors(self) -> list[str]:
        """Field-level messages from the server's error body, if any."""
        if isinstance(self.data, dict):
            errors = self.data.get("errors")
            if isinstance(errors, list):
                return [str(e) for e in errors]
        return []

    def __repr__(self) -> str:
        return f"PlayPathError({self.message!r}, status={self.status!r})"
