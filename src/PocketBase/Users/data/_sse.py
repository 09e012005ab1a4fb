# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Server-sent events parsing for the realtime stream."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class _ServerSentEvent:
    event: str
    data: str
    id: Optional[str] = None
    retry: Optional[int] = None


def _iter_events(lines: Iterable[str]) -> Iterator[_ServerSentEvent]:
    """
    Group decoded stream lines into events.

    Follows the text/event-stream framing: ``field: value`` lines accumulate
    until a blank line dispatches the event, ``:`` starts a comment, multiple
    ``data`` lines are joined with ``\\n``, and an event without data is dropped.
    A trailing event not terminated by a blank line is discarded.
    """
    event = ""
    data: List[str] = []
    last_id: Optional[str] = None
    retry: Optional[int] = None

    for raw in lines:
        line = raw.rstrip("\r")
        if not line:
            if data:
                yield _ServerSentEvent(event=event or "message", data="\n".join(data), id=last_id, retry=retry)
            event, data, retry = "", [], None
            continue
        if line.startswith(":"):
            continue

        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        if name == "event":
            event = value
        elif name == "data":
            data.append(value)
        elif name == "id":
            if "\0" not in value:
                last_id = value
        elif name == "retry":
            if value.isdigit():
                retry = int(value)
