# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Realtime server-push operations namespace."""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, TYPE_CHECKING

from ..common.constants import USERS_COLLECTION
from ..models.realtime import RealtimeEvent

if TYPE_CHECKING:
    from ..client import PocketBaseClient


class RealtimeOperations:
    """
    Change notifications over the realtime event stream.

    Accessed via ``client.realtime``.
    """

    def __init__(self, client: "PocketBaseClient") -> None:
        self._client = client

    def listen(
        self,
        subscriptions: Iterable[str] = (USERS_COLLECTION,),
        token: Optional[str] = None,
    ) -> Iterator[RealtimeEvent]:
        """
        Stream change events for the given subscription topics.

        The connection stays open until the server closes it or the caller
        releases it: call ``close()`` on the returned stream (at any time, even
        before the first event) or use it as a context manager.

        :param subscriptions: Topics to subscribe to, e.g. ``"users"`` for the whole
            collection or ``"users/<record_id>"`` for one record.
        :type subscriptions: Iterable[str]
        :param token: Optional session token; the server only delivers records the token may view.
        :type token: str or None
        :return: Iterator of decoded events.
        :rtype: Iterator[~PocketBase.Users.models.realtime.RealtimeEvent]

        :raises ~PocketBase.Users.core.errors.TransportError: If the stream cannot be opened or drops.
        :raises ~PocketBase.Users.core.errors.DecodeError: If an event payload is malformed.

        Example::

            with client.realtime.listen(["users"]) as events:
                for event in events:
                    print(event.action, event.record.username)
                    if event.action == "delete":
                        break
        """
        return self._client._get_pb()._listen(subscriptions, token)
