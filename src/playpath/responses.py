"""Validation of decoded response bodies."""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from .errors import PlayPathError


def parse_response(schema: Any, data: Any) -> Any:
    """Validate a decoded JSON body against the expected schema.

    Args:
        schema: A pydantic model or a type such as list[Item]
        data: Decoded response body

    Returns:
        The validated value

    Raises:
        PlayPathError: If the body does not have the expected shape. The
            status is None and data holds the pydantic ValidationError.
    """
    try:
        return TypeAdapter(schema).validate_python(data)
    except ValidationError as e:
        raise PlayPathError(f"Unexpected response body: {e}", None, e) from e
