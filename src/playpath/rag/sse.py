"""Server-Sent Events decoding.

Turns the line stream of a ``text/event-stream`` response into
StreamEvent objects. Follows the WHATWG event-stream rules: ``field: value``
lines accumulate into an event, a blank line dispatches it, lines starting
with ``:`` are comments, and multiple ``data`` lines join with newlines.
"""

from collections.abc import AsyncIterator

from .models import StreamEvent


async def parse_sse(lines: AsyncIterator[str]) -> AsyncIterator[StreamEvent]:
    """Decode event-stream lines into events.

    Args:
        lines: Async iterator of lines without trailing newlines

    Yields:
        One StreamEvent per dispatched event
    """
    event_type = ""
    data_lines: list[str] = []
    last_id: str | None = None
    retry: int | None = None

    async for line in lines:
        if not line:
            if data_lines:
                yield StreamEvent(
                    event=event_type or "message",
                    data="\n".join(data_lines),
                    id=last_id,
                    retry=retry,
                )
            event_type = ""
            data_lines = []
            retry = None
            continue

        if line.startswith(":"):
            continue

        field, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        if field == "event":
            event_type = value
        elif field == "data":
            data_lines.append(value)
        elif field == "id":
            if "\0" not in value:
                last_id = value
        elif field == "retry":
            if value.isdigit():
                retry = int(value)

    # Stream closed without a trailing blank line
    if data_lines:
        yield StreamEvent(
            event=event_type or "message",
            data="\n".join(data_lines),
            id=last_id,
            retry=retry,
        )
