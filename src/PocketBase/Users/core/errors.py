# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured error types for the PocketBase users client.

Every failure surfaces to the caller as a subclass of :class:`PocketBaseError`:

- :class:`ValidationError`: input rejected on the client before any request
- :class:`DecodeError`: response body does not match the expected shape
- :class:`TransportError`: connection, DNS or timeout failure, or an unmapped status
- :class:`HttpError`: a mapped HTTP failure, specialised per status code
  (:class:`InvalidFilterError`, :class:`AuthenticationFailedError`,
  :class:`NotFoundError`, :class:`ServerError`)
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional

from ._error_codes import HTTP_400, HTTP_401, HTTP_404, HTTP_500


class PocketBaseError(Exception):
    """Base structured error for the PocketBase users client."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ValidationError(PocketBaseError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class DecodeError(PocketBaseError):
    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="decode_error", subcode=subcode, details=details, source="client")


class TransportError(PocketBaseError):
    """
    Connection-level failure or a response status outside the mapped set.

    When raised for an I/O failure the underlying ``requests`` exception is
    chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        is_transient: bool = True,
    ) -> None:
        super().__init__(
            message,
            code="transport_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="client" if status_code is None else "server",
            is_transient=is_transient,
        )


class HttpError(PocketBaseError):
    def __init__(
        self,
        message: str,
        status_code: int,
        is_transient: bool = False,
        subcode: Optional[str] = None,
        service_message: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_message is not None:
            d["service_message"] = service_message
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


class InvalidFilterError(HttpError):
    """The server rejected the request as malformed (HTTP 400), typically a bad filter or sort."""

    def __init__(self, message: str = "Invalid filter or request body.", **kwargs: Any) -> None:
        super().__init__(message, 400, subcode=HTTP_400, **kwargs)


class AuthenticationFailedError(HttpError):
    """The bearer token is missing, invalid or expired (HTTP 401)."""

    def __init__(self, message: str = "Authentication token is invalid or expired.", **kwargs: Any) -> None:
        super().__init__(message, 401, subcode=HTTP_401, **kwargs)


class NotFoundError(HttpError):
    """The collection or record does not exist (HTTP 404)."""

    def __init__(self, message: str = "Collection or record not found.", **kwargs: Any) -> None:
        super().__init__(message, 404, subcode=HTTP_404, **kwargs)


class ServerError(HttpError):
    def __init__(self, message: str = "Internal server error.", **kwargs: Any) -> None:
        super().__init__(message, 500, is_transient=True, subcode=HTTP_500, **kwargs)


__all__ = [
    "PocketBaseError",
    "ValidationError",
    "DecodeError",
    "TransportError",
    "HttpError",
    "InvalidFilterError",
    "AuthenticationFailedError",
    "NotFoundError",
    "ServerError",
]
