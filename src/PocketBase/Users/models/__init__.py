# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the PocketBase users client.

This module provides immutable dataclasses for the API payloads:

- :class:`~PocketBase.Users.models.user.UserRecord`: One user record.
- :class:`~PocketBase.Users.models.user.UserList`: Paginated list of user records.
- :class:`~PocketBase.Users.models.user.PreparedUser`: Payload for creating a user.
- :class:`~PocketBase.Users.models.user.PreparedUserUpdate`: Payload for updating a user.
- :class:`~PocketBase.Users.models.auth.AuthProvider`: OAuth2 handshake parameters.
- :class:`~PocketBase.Users.models.auth.LinkedAccount`: External identity linked to a user.
- :class:`~PocketBase.Users.models.realtime.RealtimeEvent`: One realtime push event.
- :class:`~PocketBase.Users.models.query.RecordQuery`: List query parameters.
- :class:`~PocketBase.Users.models.filter_builder.FilterBuilder`: Filter expression builder.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files.
"""

__all__ = []
