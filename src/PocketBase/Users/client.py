# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Optional

import requests

from .core.config import PocketBaseConfig
from .data._pocketbase import _PocketBaseClient
from .operations.auth import AuthOperations
from .operations.realtime import RealtimeOperations
from .operations.users import UserOperations


class PocketBaseClient:
    """
    High-level client for the users collection of a PocketBase server.

    The client is stateless apart from its configuration: it stores no
    session token and no cache, so one instance can be shared by any number
    of threads. Tokens are passed explicitly to the operations that need them.

    Operations are organized under namespaces:

    - ``client.users``: list, get, create, update and delete user records
    - ``client.auth``: password/OAuth2 login, refresh, verification, password
      reset, email change and OAuth2 account links
    - ``client.realtime``: the server-push event stream

    **Context Manager Support (Recommended)**:
        Using the client as a context manager enables connection pooling and
        releases the pool on exit::

            with PocketBaseClient("http://127.0.0.1:8090") as client:
                page = client.users.list()

    **Without Context Manager**:
        Each request opens its own connection. Call ``close()`` when done::

            client = PocketBaseClient("http://127.0.0.1:8090")
            try:
                user = client.users.get(user_id)
            finally:
                client.close()

    :param base_url: Server URL, for example ``"http://127.0.0.1:8090"``. Trailing slash is removed.
    :type base_url: :class:`str`
    :param config: Optional timeouts, retries and telemetry settings. Defaults come from
        :meth:`~PocketBase.Users.core.config.PocketBaseConfig.from_env`.
    :type config: ~PocketBase.Users.core.config.PocketBaseConfig or None

    :raises ValueError: If ``base_url`` is missing or empty after trimming.
    """

    def __init__(self, base_url: str, config: Optional[PocketBaseConfig] = None) -> None:
        self._base_url = (base_url or "").rstrip("/")
        if not self._base_url:
            raise ValueError("base_url is required.")
        self._config = config or PocketBaseConfig.from_env()
        self._pb: Optional[_PocketBaseClient] = None
        self._session: Optional[requests.Session] = None
        self._owns_session: bool = False

        self.users = UserOperations(self)
        self.auth = AuthOperations(self)
        self.realtime = RealtimeOperations(self)

    def __enter__(self) -> "PocketBaseClient":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling; operations within the
        context reuse it.
        """
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            # a client built before the session existed would bypass the pool
            self._pb = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Close the client and release resources.

        Safe to call multiple times. The client can still be used afterwards;
        later requests open their own connections.
        """
        if self._pb is not None:
            self._pb.close()
            self._pb = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_pb(self) -> _PocketBaseClient:
        """
        Get or create the internal low-level client.

        Construction is deferred until the first API call. When a session exists
        (from the context manager), it is passed on for connection pooling.
        """
        if self._pb is None:
            self._pb = _PocketBaseClient(self._base_url, self._config, session=self._session)
        return self._pb


__all__ = ["PocketBaseClient"]
