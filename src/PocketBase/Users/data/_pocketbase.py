# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Low-level PocketBase users API client: request building, status dispatch and decoding."""

from __future__ import annotations

import json
import uuid
from typing import Any, Dict, Iterable, Iterator, List, Optional
from urllib.parse import quote

import requests

from ..common.constants import (
    ACCEPT_EVENT_STREAM,
    ACCEPT_JSON,
    AUTH_PROVIDERS_PATH,
    AUTH_REFRESH_PATH,
    AUTH_WITH_OAUTH2_PATH,
    AUTH_WITH_PASSWORD_PATH,
    CONTENT_TYPE_JSON,
    EXTERNAL_AUTH_PATH,
    EXTERNAL_AUTHS_PATH,
    REALTIME_CONNECT_EVENT,
    REALTIME_PATH,
    RECORD_PATH,
    RECORDS_PATH,
    USERS_COLLECTION,
)
from ..core._error_codes import (
    AUTH_TOKEN_MISSING,
    DECODE_INVALID_JSON,
    DECODE_MISSING_FIELD,
    TRANSPORT_CONNECTION,
    TRANSPORT_REQUEST,
    TRANSPORT_TIMEOUT,
    VALIDATION_RECORD_ID_EMPTY,
    _http_subcode,
)
from ..core._http import _HttpClient
from ..core.config import PocketBaseConfig
from ..core.errors import (
    AuthenticationFailedError,
    DecodeError,
    InvalidFilterError,
    NotFoundError,
    PocketBaseError,
    ServerError,
    TransportError,
    ValidationError,
)
from ..core.telemetry import create_telemetry_manager
from ..models._fields import _require_object, _str
from ..models.auth import AuthProvider, LinkedAccount
from ..models.query import RecordQuery
from ..models.realtime import RealtimeEvent
from ..models.user import UserList, UserRecord
from ._sse import _iter_events

_BODY_EXCERPT_LIMIT = 200


class _PocketBaseClient:
    """PocketBase users API client: record CRUD, auth flows, OAuth2 links and realtime."""

    def __init__(
        self,
        base_url: str,
        config: Optional[PocketBaseConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self.config = config or PocketBaseConfig.from_env()
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            session=session,
        )
        self._telemetry = create_telemetry_manager(self.config.telemetry)

    def close(self) -> None:
        self._http.close()

    # ----------------------------- plumbing ---------------------------------

    def _url(self, path: str, **parts: str) -> str:
        """Join ``path`` to the base URL, percent-encoding each path parameter."""
        for name, value in parts.items():
            if not value:
                raise ValidationError(f"{name} is required", subcode=VALIDATION_RECORD_ID_EMPTY)
        encoded = {name: quote(str(value), safe="") for name, value in parts.items()}
        return self.base_url + path.format(**encoded)

    def _headers(self, *, accept: str = ACCEPT_JSON, token: Optional[str] = None, has_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": accept}
        if has_body:
            headers["Content-Type"] = CONTENT_TYPE_JSON
        if token is not None:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        token: Optional[str] = None,
        body: Optional[Dict[str, Any]] = None,
        accept: str = ACCEPT_JSON,
        not_found_message: Optional[str] = None,
        **kwargs: Any,
    ) -> requests.Response:
        """
        Send one request and map failures to typed errors.

        Returns the response only for 2xx statuses; the caller owns it and must close it.
        ``AuthenticationFailedError`` is raised for 401 only when ``token`` is given.
        """
        headers = self._headers(accept=accept, token=token, has_body=body is not None)
        if body is not None:
            kwargs["data"] = json.dumps(body).encode("utf-8")
        client_request_id = str(uuid.uuid4())

        with self._telemetry.trace_request(
            operation, method.upper(), url, client_request_id, collection=USERS_COLLECTION
        ) as ctx:
            try:
                r = self._http._request(method, url, headers=headers, **kwargs)
            except requests.exceptions.Timeout as exc:
                raise TransportError(
                    f"{operation}: request timed out", subcode=TRANSPORT_TIMEOUT, details={"url": url}
                ) from exc
            except requests.exceptions.ConnectionError as exc:
                raise TransportError(
                    f"{operation}: connection failed", subcode=TRANSPORT_CONNECTION, details={"url": url}
                ) from exc
            except requests.exceptions.RequestException as exc:
                raise TransportError(
                    f"{operation}: request failed", subcode=TRANSPORT_REQUEST, details={"url": url}
                ) from exc

            self._telemetry.record_response(ctx, r.status_code)

        # raised outside the traced block so a failed status is logged once
        if 200 <= r.status_code < 300:
            return r
        try:
            self._raise_for_status(r, operation, auth_required=token is not None, not_found_message=not_found_message)
        finally:
            r.close()

    @staticmethod
    def _raise_for_status(
        r: requests.Response,
        operation: str,
        *,
        auth_required: bool,
        not_found_message: Optional[str],
    ) -> None:
        status = r.status_code
        body_text = getattr(r, "text", "") or ""
        service_message: Optional[str] = None
        try:
            payload = json.loads(body_text) if body_text else None
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("message"), str):
            service_message = payload["message"]
        extra = {
            "service_message": service_message,
            "body_excerpt": body_text[:_BODY_EXCERPT_LIMIT] or None,
        }

        if status == 400:
            raise InvalidFilterError(service_message or f"{operation}: invalid filter or request", **extra)
        if status == 401 and auth_required:
            raise AuthenticationFailedError(service_message or f"{operation}: token is invalid or expired", **extra)
        if status == 404:
            raise NotFoundError(not_found_message or service_message or f"{operation}: not found", **extra)
        if status == 500:
            raise ServerError(service_message or f"{operation}: internal server error", **extra)
        raise TransportError(
            service_message or f"{operation}: unexpected HTTP status {status}",
            subcode=_http_subcode(status),
            status_code=status,
            details={k: v for k, v in extra.items() if v is not None},
            is_transient=status in (429, 502, 503, 504),
        )

    @staticmethod
    def _json(r: requests.Response, operation: str) -> Any:
        try:
            return r.json()
        except ValueError as exc:
            raise DecodeError(
                f"{operation}: response body is not valid JSON", subcode=DECODE_INVALID_JSON
            ) from exc

    def _fetch(self, operation: str, method: str, url: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body."""
        r = self._request(operation, method, url, **kwargs)
        try:
            return self._json(r, operation)
        finally:
            r.close()

    def _send(self, operation: str, method: str, url: str, **kwargs: Any) -> None:
        """Send a request whose success body is ignored."""
        r = self._request(operation, method, url, **kwargs)
        r.close()

    @staticmethod
    def _token(body: Any, operation: str) -> str:
        body = _require_object(body, "AuthResponse")
        token = body.get("token")
        if not isinstance(token, str) or not token:
            raise DecodeError(
                f"{operation}: response has no token", subcode=DECODE_MISSING_FIELD, details={"field": "token"}
            )
        return token

    # ----------------------------- records ---------------------------------

    def _list_users(self, query: Optional[RecordQuery] = None) -> UserList:
        url = self._url(RECORDS_PATH) + (query.to_query_string() if query is not None else "")
        return UserList.from_api_response(self._fetch("users.list", "get", url))

    def _get_user(self, record_id: str) -> UserRecord:
        url = self._url(RECORD_PATH, record_id=record_id)
        return UserRecord.from_api_response(self._fetch("users.get", "get", url))

    def _create_user(self, payload: Dict[str, Any]) -> None:
        self._send("users.create", "post", self._url(RECORDS_PATH), body=payload)

    def _update_user(self, record_id: str, payload: Dict[str, Any]) -> None:
        self._send("users.update", "patch", self._url(RECORD_PATH, record_id=record_id), body=payload)

    def _delete_user(self, record_id: str) -> None:
        self._send("users.delete", "delete", self._url(RECORD_PATH, record_id=record_id))

    # ----------------------------- auth ------------------------------------

    def _auth_with_password(self, identity: str, password: str) -> str:
        body = self._fetch(
            "auth.with_password",
            "post",
            self._url(AUTH_WITH_PASSWORD_PATH),
            body={"identity": identity, "password": password},
        )
        return self._token(body, "auth.with_password")

    def _auth_with_oauth2(self, provider: str, auth_code: str, verifier: str, redirect_url: str) -> str:
        body = self._fetch(
            "auth.with_oauth2",
            "post",
            self._url(AUTH_WITH_OAUTH2_PATH),
            body={"provider": provider, "authCode": auth_code, "verifier": verifier, "redirectUrl": redirect_url},
        )
        if not isinstance(body, dict) or not isinstance(body.get("token"), str):
            raise PocketBaseError(
                "Error authenticating with 3rd party provider",
                code="auth_error",
                subcode=AUTH_TOKEN_MISSING,
                details={"provider": provider},
                source="server",
            )
        return body["token"]

    def _auth_refresh(self, token: str) -> str:
        body = self._fetch(
            "auth.refresh",
            "post",
            self._url(AUTH_REFRESH_PATH),
            token=token,
            not_found_message="missing auth record context",
        )
        return self._token(body, "auth.refresh")

    def _post_action(self, operation: str, path: str, body: Dict[str, Any], token: Optional[str] = None) -> None:
        """POST a small JSON body to a fixed flow endpoint (verification, reset, email change)."""
        self._send(operation, "post", self._url(path), body=body, token=token)

    def _list_auth_methods(self) -> List[AuthProvider]:
        body = _require_object(self._fetch("auth.list_methods", "get", self._url(AUTH_PROVIDERS_PATH)), "AuthMethods")
        providers = body.get("authProviders")
        if isinstance(providers, list):
            return [
                AuthProvider.from_api_response(_str(_require_object(p, "AuthProvider"), "name", "AuthProvider"), p)
                for p in providers
            ]
        return [AuthProvider.from_api_response(name, value) for name, value in body.items()]

    def _list_external_auths(self, record_id: str, token: str) -> List[LinkedAccount]:
        url = self._url(EXTERNAL_AUTHS_PATH, record_id=record_id)
        body = self._fetch("auth.list_linked_accounts", "get", url, token=token)
        if isinstance(body, list):
            return [LinkedAccount.from_api_response(item) for item in body]
        body = _require_object(body, "LinkedAccounts")
        return [LinkedAccount.from_api_response(value, id=key) for key, value in body.items()]

    def _unlink_external_auth(self, record_id: str, provider: str, token: str) -> None:
        url = self._url(EXTERNAL_AUTH_PATH, record_id=record_id, provider=provider)
        self._send("auth.unlink_account", "delete", url, token=token)

    # ----------------------------- realtime --------------------------------

    def _listen(self, subscriptions: Iterable[str], token: Optional[str] = None) -> "_RealtimeStream":
        """
        Open the realtime stream and return an iterator over its events.

        Status errors are raised here, before iteration starts. The returned
        stream owns the response from this point on: it subscribes on the
        ``PB_CONNECT`` handshake and releases the connection when exhausted,
        closed (before or during iteration) or garbage collected.
        """
        connect_timeout = self.config.http_timeout if self.config.http_timeout is not None else 10
        r = self._request(
            "realtime.listen",
            "get",
            self._url(REALTIME_PATH),
            accept=ACCEPT_EVENT_STREAM,
            stream=True,
            timeout=(connect_timeout, self.config.stream_read_timeout),
        )
        return _RealtimeStream(r, self._iter_realtime(r, list(subscriptions), token))

    def _iter_realtime(self, r: requests.Response, subscriptions: List[str], token: Optional[str]) -> Iterator[RealtimeEvent]:
        # event streams are always UTF-8
        r.encoding = "utf-8"
        try:
            for sse in _iter_events(r.iter_lines(decode_unicode=True)):
                try:
                    payload = json.loads(sse.data)
                except ValueError as exc:
                    raise DecodeError(
                        f"realtime: event '{sse.event}' data is not valid JSON", subcode=DECODE_INVALID_JSON
                    ) from exc
                if sse.event == REALTIME_CONNECT_EVENT:
                    client_id = payload.get("clientId") if isinstance(payload, dict) else None
                    self._subscribe(client_id or sse.id, subscriptions, token)
                    continue
                yield RealtimeEvent.from_api_response(payload, topic=sse.event)
        except requests.exceptions.RequestException as exc:
            raise TransportError("realtime: stream interrupted", subcode=TRANSPORT_CONNECTION) from exc
        finally:
            r.close()

    def _subscribe(self, client_id: Optional[str], subscriptions: List[str], token: Optional[str]) -> None:
        if not client_id:
            raise DecodeError("realtime: connect event carries no client id", subcode=DECODE_MISSING_FIELD)
        self._post_action(
            "realtime.subscribe",
            REALTIME_PATH,
            {"clientId": client_id, "subscriptions": subscriptions},
            token=token,
        )


class _RealtimeStream:
    """Iterator over realtime events that owns the open streaming response."""

    def __init__(self, response: requests.Response, events: Iterator[RealtimeEvent]) -> None:
        self._response = response
        self._events = events
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> "_RealtimeStream":
        return self

    def __next__(self) -> RealtimeEvent:
        if self._closed:
            raise StopIteration
        try:
            return next(self._events)
        except Exception:
            self.close()
            raise

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self._events.close()
        finally:
            self._response.close()

    def __enter__(self) -> "_RealtimeStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            self.close()
