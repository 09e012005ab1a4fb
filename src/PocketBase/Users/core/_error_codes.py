# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_404 = "http_404"
HTTP_500 = "http_500"

# Validation subcodes
VALIDATION_FILTER_EMPTY = "validation_filter_empty"
VALIDATION_NEGATIVE_PAGE = "validation_negative_page"
VALIDATION_RECORD_ID_EMPTY = "validation_record_id_empty"

# Decode subcodes
DECODE_INVALID_JSON = "decode_invalid_json"
DECODE_MISSING_FIELD = "decode_missing_field"
DECODE_WRONG_TYPE = "decode_wrong_type"

# Transport subcodes
TRANSPORT_CONNECTION = "transport_connection"
TRANSPORT_TIMEOUT = "transport_timeout"
TRANSPORT_REQUEST = "transport_request"

# Auth subcodes
AUTH_TOKEN_MISSING = "auth_token_missing"


def _http_subcode(status: int) -> str:
    """Return the ``http_<status>`` subcode for a response status."""
    return f"http_{status}"
