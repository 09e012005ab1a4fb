# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
User record data models.

Read-side snapshots (:class:`UserRecord`, :class:`UserList`) decoded from API
responses, and write-side payloads (:class:`PreparedUser`,
:class:`PreparedUserUpdate`) serialised into request bodies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..common.constants import SKIPPED_TOTAL
from ._fields import _bool, _int, _list, _optional_str, _require_object, _str

# Type aliases for semantic clarity
RecordId = str  # 15 character PocketBase id


@dataclass(frozen=True)
class UserRecord:
    """
    Snapshot of one user record as returned by the server.

    Never mutated locally; re-fetch with ``client.users.get(id)`` to refresh.

    :param id: Stable record id.
    :type id: str
    :param email: Empty when the server hides it (``email_visibility`` false and
        the caller is not the owner).
    :type email: str
    :param created: Server timestamp string, e.g. ``"2024-01-01 10:00:00.123Z"``.
    :type created: str

    Example::

        user = client.users.get("a1b2c3d4e5f6g7h")
        print(user.username, user.verified)
    """

    id: RecordId
    collection_id: str
    collection_name: str
    username: str
    verified: bool
    email_visibility: bool
    email: str
    created: str
    updated: str
    name: str = ""
    avatar: str = ""
    role: str = ""

    @classmethod
    def from_api_response(cls, data: Any) -> "UserRecord":
        """
        Create a UserRecord from a decoded JSON object.

        Unknown keys are ignored.

        :param data: Decoded JSON object.
        :return: UserRecord instance.
        :rtype: UserRecord
        :raises ~PocketBase.Users.core.errors.DecodeError: If a required field is missing
            or has the wrong JSON type.
        """
        model = cls.__name__
        data = _require_object(data, model)
        return cls(
            id=_str(data, "id", model),
            collection_id=_str(data, "collectionId", model),
            collection_name=_str(data, "collectionName", model),
            username=_str(data, "username", model),
            verified=_bool(data, "verified", model),
            email_visibility=_bool(data, "emailVisibility", model),
            email=_optional_str(data, "email", model),
            created=_str(data, "created", model),
            updated=_str(data, "updated", model),
            name=_optional_str(data, "name", model),
            avatar=_optional_str(data, "avatar", model),
            role=_optional_str(data, "role", model),
        )


@dataclass(frozen=True)
class UserList:
    """
    One page of user records.

    When the list was requested with ``skip_total``, ``total_pages`` and
    ``total_items`` are ``-1`` and :attr:`has_totals` is false.

    Example::

        page = client.users.list(RecordQuery(page=1, per_page=50))
        for user in page:
            print(user.username)
        print(f"page {page.page} of {page.total_pages}")
    """

    page: int
    per_page: int
    total_pages: int
    total_items: int
    items: Tuple[UserRecord, ...] = field(default_factory=tuple)

    @property
    def has_totals(self) -> bool:
        return self.total_pages != SKIPPED_TOTAL and self.total_items != SKIPPED_TOTAL

    @property
    def has_more(self) -> bool:
        """Whether a later page exists. Unknown (``True`` if this page is full) without totals."""
        if self.has_totals:
            return self.page < self.total_pages
        return len(self.items) >= self.per_page > 0

    def expected_total_pages(self) -> int:
        """Page count implied by ``total_items`` and ``per_page``."""
        if not self.has_totals or self.per_page <= 0:
            return SKIPPED_TOTAL
        return math.ceil(self.total_items / self.per_page)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> UserRecord:
        return self.items[index]

    @classmethod
    def from_api_response(cls, data: Any) -> "UserList":
        """
        Create a UserList from the list envelope returned by the records endpoint.

        :raises ~PocketBase.Users.core.errors.DecodeError: If the envelope or any item
            does not have the expected shape.
        """
        model = cls.__name__
        data = _require_object(data, model)
        return cls(
            page=_int(data, "page", model),
            per_page=_int(data, "perPage", model),
            total_pages=_int(data, "totalPages", model),
            total_items=_int(data, "totalItems", model),
            items=tuple(UserRecord.from_api_response(item) for item in _list(data, "items", model)),
        )


@dataclass(frozen=True)
class PreparedUser:
    """
    Payload for creating a user.

    Example::

        client.users.create(PreparedUser(
            username="jdoe",
            password="s3cret-pass",
            password_confirm="s3cret-pass",
            email="jdoe@example.com",
            name="John Doe",
        ))
    """

    username: str
    password: str
    password_confirm: str
    email: str
    email_visibility: bool = False
    verified: bool = False
    name: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "password": self.password,
            "passwordConfirm": self.password_confirm,
            "email": self.email,
            "emailVisibility": self.email_visibility,
            "verified": self.verified,
            "name": self.name,
        }


@dataclass(frozen=True)
class PreparedUserUpdate:
    """
    Partial update payload for a user.

    Fields left as ``None`` are not sent, so the server keeps their current
    values. Pass ``""`` explicitly to clear a string field.

    Example::

        client.users.update(user_id, PreparedUserUpdate(name="Jane Doe", verified=True))
    """

    username: Optional[str] = None
    password: Optional[str] = None
    password_confirm: Optional[str] = None
    old_password: Optional[str] = None
    email: Optional[str] = None
    email_visibility: Optional[bool] = None
    verified: Optional[bool] = None
    name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        fields = {
            "username": self.username,
            "password": self.password,
            "passwordConfirm": self.password_confirm,
            "oldPassword": self.old_password,
            "email": self.email,
            "emailVisibility": self.email_visibility,
            "verified": self.verified,
            "name": self.name,
        }
        return {key: value for key, value in fields.items() if value is not None}


__all__ = ["UserRecord", "UserList", "PreparedUser", "PreparedUserUpdate", "RecordId"]
