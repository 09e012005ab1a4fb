# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Realtime push event data model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ._fields import _object, _require_object, _str
from .user import UserRecord


@dataclass(frozen=True)
class RealtimeEvent:
    """
    One change notification from the realtime stream.

    :param action: ``"create"``, ``"update"`` or ``"delete"``.
    :type action: str
    :param record: The record after the change (before it, for deletes).
    :type record: UserRecord
    :param topic: Subscription topic the server delivered the event under, if named.
    :type topic: str or None
    """

    action: str
    record: UserRecord
    topic: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Any, *, topic: Optional[str] = None) -> "RealtimeEvent":
        model = cls.__name__
        data = _require_object(data, model)
        return cls(
            action=_str(data, "action", model),
            record=UserRecord.from_api_response(_object(data, "record", model)),
            topic=topic,
        )


__all__ = ["RealtimeEvent"]
