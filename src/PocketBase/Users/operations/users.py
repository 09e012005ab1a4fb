# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""User record CRUD operations namespace."""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from ..models.query import RecordQuery
from ..models.user import PreparedUser, PreparedUserUpdate, UserList, UserRecord

if TYPE_CHECKING:
    from ..client import PocketBaseClient


class UserOperations:
    """
    CRUD operations on the ``users`` collection.

    Accessed via ``client.users``.

    Example::

        page = client.users.list(RecordQuery(per_page=50, sort="-created"))
        user = client.users.get(page[0].id)
        client.users.update(user.id, PreparedUserUpdate(name="Jane"))
        client.users.delete(user.id)
    """

    def __init__(self, client: "PocketBaseClient") -> None:
        """
        Initialize UserOperations.

        :param client: Parent PocketBaseClient instance.
        :type client: PocketBaseClient
        """
        self._client = client

    def list(self, query: Optional[RecordQuery] = None) -> UserList:
        """
        Fetch one page of user records.

        :param query: Pagination, sort and filter options. ``None`` uses the server defaults.
        :type query: ~PocketBase.Users.models.query.RecordQuery or None
        :return: The requested page.
        :rtype: ~PocketBase.Users.models.user.UserList

        :raises ~PocketBase.Users.core.errors.InvalidFilterError: If the server rejects the filter or sort (400).
        :raises ~PocketBase.Users.core.errors.DecodeError: If the response is not a list envelope.

        Example::

            from urllib.parse import quote

            expr = (FilterBuilder()
                    .add("verified", FilterOperator.EQUAL, "true")
                    .add("created", FilterOperator.GREATER_THAN, "'2024-01-01'")
                    .build())
            # query values are sent as given, so encode the expression first
            page = client.users.list(RecordQuery(filter=quote(expr, safe=""), skip_total=True))
        """
        return self._client._get_pb()._list_users(query)

    def get(self, record_id: str) -> UserRecord:
        """
        Fetch one user record by id.

        :raises ~PocketBase.Users.core.errors.NotFoundError: If no such record exists (404).
        """
        return self._client._get_pb()._get_user(record_id)

    def create(self, user: PreparedUser) -> bool:
        """
        Create a user record.

        :param user: Creation payload.
        :type user: ~PocketBase.Users.models.user.PreparedUser
        :return: ``True`` once the server accepted the record.
        :rtype: bool
        :raises ~PocketBase.Users.core.errors.InvalidFilterError: If the server rejects the payload (400).
        """
        self._client._get_pb()._create_user(user.to_payload())
        return True

    def update(self, record_id: str, update: PreparedUserUpdate) -> None:
        """
        Apply a partial update to a user record.

        Only fields set on ``update`` are sent.
        """
        self._client._get_pb()._update_user(record_id, update.to_payload())

    def delete(self, record_id: str) -> bool:
        """
        Delete a user record.

        :return: ``True`` once the server confirmed the deletion.
        :rtype: bool
        :raises ~PocketBase.Users.core.errors.NotFoundError: If no such record exists (404).
        """
        self._client._get_pb()._delete_user(record_id)
        return True
