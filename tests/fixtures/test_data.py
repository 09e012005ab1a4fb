# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Sample payloads and HTTP test doubles for the PocketBase users client tests.

Importable as ``fixtures.test_data`` (``tests`` is on the pytest pythonpath).
"""

import json

from PocketBase.Users.core.config import PocketBaseConfig
from PocketBase.Users.data._pocketbase import _PocketBaseClient

BASE_URL = "http://127.0.0.1:8090"


def make_user_data(**overrides):
    """One user record as the server returns it."""
    data = {
        "id": "a1b2c3d4e5f6g7h",
        "collectionId": "_pb_users_auth_",
        "collectionName": "users",
        "username": "jdoe",
        "verified": True,
        "emailVisibility": False,
        "email": "jdoe@example.com",
        "created": "2024-01-01 10:00:00.123Z",
        "updated": "2024-01-02 11:30:00.456Z",
        "name": "John Doe",
        "avatar": "",
        "role": "admin",
    }
    data.update(overrides)
    return data


def make_list_data(items, page=1, per_page=30, total_items=None, total_pages=None):
    """A records list envelope; totals are derived from ``items`` unless given."""
    total_items = len(items) if total_items is None else total_items
    if total_pages is None:
        total_pages = -(-total_items // per_page)
    return {
        "page": page,
        "perPage": per_page,
        "totalPages": total_pages,
        "totalItems": total_items,
        "items": items,
    }


SAMPLE_AUTH_PROVIDERS = {
    "google": {
        "state": "st-google",
        "codeVerifier": "cv-google",
        "codeChallenge": "cc-google",
        "codeChallengeMethod": "S256",
        "authUrl": "https://accounts.google.com/o/oauth2/auth?client_id=x&redirect_uri=",
    },
    "github": {
        "state": "st-github",
        "codeVerifier": "cv-github",
        "codeChallenge": "cc-github",
        "codeChallengeMethod": "S256",
        "authUrl": "https://github.com/login/oauth/authorize?client_id=y&redirect_uri=",
    },
}

SAMPLE_LINKED_ACCOUNT = {
    "id": "ext1234567890ab",
    "created": "2024-01-01 10:00:00.000Z",
    "updated": "2024-01-01 10:00:00.000Z",
    "recordId": "a1b2c3d4e5f6g7h",
    "collectionId": "_pb_users_auth_",
    "provider": "google",
    "providerId": "109876543210",
}


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code, body=None, lines=None):
        self.status_code = status_code
        self.headers = {}
        self.encoding = None
        self.closed = False
        self._lines = lines or []
        if isinstance(body, (dict, list)):
            self.text = json.dumps(body)
        else:
            self.text = body or ""

    def json(self):
        return json.loads(self.text)

    def iter_lines(self, decode_unicode=False):
        for line in self._lines:
            if isinstance(line, Exception):
                raise line
            yield line

    def close(self):
        self.closed = True


class DummyHTTP:
    """Replays scripted responses and records every call.

    Each scripted item is a ``FakeResponse``, an exception to raise, or a
    ``(status, body)`` tuple.
    """

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.returned = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError("No more responses")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if not isinstance(item, FakeResponse):
            status, body = item
            item = FakeResponse(status, body)
        self.returned.append(item)
        return item

    def close(self):
        pass

    def body(self, index=-1):
        return json.loads(self.calls[index][2]["data"])

    def headers(self, index=-1):
        return self.calls[index][2]["headers"]


class MockClient(_PocketBaseClient):
    def __init__(self, responses, config=None):
        super().__init__(BASE_URL, config or PocketBaseConfig())
        self._http = DummyHTTP(responses)
