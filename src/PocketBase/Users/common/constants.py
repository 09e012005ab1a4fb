# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the PocketBase users API.

Endpoint path templates, header values and telemetry attribute names used
when building requests.
"""

USERS_COLLECTION = "users"

# Endpoint paths, relative to the configured base URL
RECORDS_PATH = "/api/collections/users/records"
RECORD_PATH = "/api/collections/users/records/{record_id}"
EXTERNAL_AUTHS_PATH = "/api/collections/users/records/{record_id}/external-auths"
EXTERNAL_AUTH_PATH = "/api/collections/users/records/{record_id}/external-auths/{provider}"
AUTH_WITH_PASSWORD_PATH = "/api/collections/users/auth-with-password"
AUTH_WITH_OAUTH2_PATH = "/api/collections/users/auth-with-oauth2"
AUTH_REFRESH_PATH = "/api/collections/users/auth-refresh"
AUTH_PROVIDERS_PATH = "/api/collections/users/auth-providers"
REQUEST_VERIFICATION_PATH = "/api/collections/users/request-verification"
CONFIRM_VERIFICATION_PATH = "/api/collections/users/confirm-verification"
REQUEST_PASSWORD_RESET_PATH = "/api/collections/users/request-password-reset"
CONFIRM_PASSWORD_RESET_PATH = "/api/collections/users/confirm-password-reset"
REQUEST_EMAIL_CHANGE_PATH = "/api/collections/users/request-email-change"
CONFIRM_EMAIL_CHANGE_PATH = "/api/collections/users/confirm-email-change"
REALTIME_PATH = "/api/realtime"

# Header values
ACCEPT_JSON = "application/json"
ACCEPT_EVENT_STREAM = "text/event-stream"
CONTENT_TYPE_JSON = "application/json; utf-8"

# Realtime handshake event sent by the server when the stream opens
REALTIME_CONNECT_EVENT = "PB_CONNECT"

SKIPPED_TOTAL = -1
"""Value of ``totalPages``/``totalItems`` when a list was requested with ``skipTotal``."""

# OpenTelemetry semantic attribute names
OTEL_ATTR_DB_SYSTEM = "db.system"
OTEL_ATTR_DB_OPERATION = "db.operation"
OTEL_ATTR_HTTP_METHOD = "http.method"
OTEL_ATTR_HTTP_URL = "http.url"
OTEL_ATTR_HTTP_STATUS_CODE = "http.status_code"
OTEL_ATTR_POCKETBASE_COLLECTION = "pocketbase.collection"
OTEL_ATTR_POCKETBASE_REQUEST_ID = "pocketbase.client_request_id"
