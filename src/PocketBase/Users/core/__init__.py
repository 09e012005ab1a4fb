# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the PocketBase users client.

This module contains the foundational components including configuration,
HTTP client, telemetry, and error handling.
"""

from .config import PocketBaseConfig
from .errors import (
    PocketBaseError,
    ValidationError,
    DecodeError,
    TransportError,
    HttpError,
    InvalidFilterError,
    AuthenticationFailedError,
    NotFoundError,
    ServerError,
)
from .telemetry import TelemetryConfig

__all__ = [
    "PocketBaseConfig",
    "TelemetryConfig",
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
