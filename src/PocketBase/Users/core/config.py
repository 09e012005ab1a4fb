# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .telemetry import TelemetryConfig


@dataclass(frozen=True)
class PocketBaseConfig:
    """
    Configuration settings for PocketBase client operations.

    :param http_retries: Extra attempts made after a network error (default: 0, no retry).
        HTTP error statuses are never retried.
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff between attempts (default: 0.5).
    :type http_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param stream_read_timeout: Read timeout in seconds for the realtime stream. ``None`` waits
        indefinitely for the next event.
    :type stream_read_timeout: float or None
    :param telemetry: Optional logging/tracing configuration. ``None`` disables telemetry.
    :type telemetry: ~PocketBase.Users.core.telemetry.TelemetryConfig or None
    """

    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_timeout: Optional[float] = None
    stream_read_timeout: Optional[float] = None
    telemetry: Optional[TelemetryConfig] = None

    @classmethod
    def from_env(cls) -> "PocketBaseConfig":
        """
        Create a configuration instance from ``POCKETBASE_*`` environment variables.

        Recognised variables are ``POCKETBASE_HTTP_TIMEOUT``, ``POCKETBASE_HTTP_RETRIES``
        and ``POCKETBASE_STREAM_READ_TIMEOUT``. Unset variables keep the defaults.

        :return: Configuration instance.
        :rtype: ~PocketBase.Users.core.config.PocketBaseConfig
        :raises ValueError: If a variable is set to a value that is not a number.
        """
        return cls(
            http_retries=_env_number("POCKETBASE_HTTP_RETRIES", int),
            http_backoff=None,  # Will default to 0.5 in _HttpClient
            http_timeout=_env_number("POCKETBASE_HTTP_TIMEOUT", float),
            stream_read_timeout=_env_number("POCKETBASE_STREAM_READ_TIMEOUT", float),
            telemetry=None,
        )


def _env_number(name: str, kind):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return kind(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
