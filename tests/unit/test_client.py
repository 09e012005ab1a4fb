# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import os
import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from PocketBase.Users import PocketBaseClient, __version__
from PocketBase.Users.core.config import PocketBaseConfig
from PocketBase.Users.data._pocketbase import _PocketBaseClient
from fixtures.test_data import MockClient, make_user_data


class TestPocketBaseClient(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures before each test method."""
        self.base_url = "http://127.0.0.1:8090"

    def test_version_exported(self):
        self.assertEqual(__version__, "0.1.0")

    def test_trailing_slash_removed(self):
        client = PocketBaseClient(self.base_url + "/")
        self.assertEqual(client._get_pb().base_url, self.base_url)

    def test_empty_base_url_rejected(self):
        for value in ("", "/", None):
            with self.assertRaises(ValueError):
                PocketBaseClient(value)

    def test_pb_client_created_lazily(self):
        client = PocketBaseClient(self.base_url)
        self.assertIsNone(client._pb)

        pb = client._get_pb()

        self.assertIsInstance(pb, _PocketBaseClient)
        self.assertIs(client._get_pb(), pb)

    def test_explicit_config_passed_through(self):
        config = PocketBaseConfig(http_retries=2, http_timeout=4)
        pb = PocketBaseClient(self.base_url, config)._get_pb()
        self.assertIs(pb.config, config)
        self.assertEqual(pb._http.max_attempts, 3)
        self.assertEqual(pb._http.default_timeout, 4)

    @patch.dict(os.environ, {"POCKETBASE_HTTP_TIMEOUT": "9"})
    def test_default_config_from_env(self):
        pb = PocketBaseClient(self.base_url)._get_pb()
        self.assertEqual(pb._http.default_timeout, 9.0)

    def test_concurrent_independent_requests(self):
        """One client instance serves parallel calls without shared request state."""
        count = 16
        client = PocketBaseClient(self.base_url, PocketBaseConfig())
        client._pb = MockClient([(200, make_user_data()) for _ in range(count)])

        with ThreadPoolExecutor(max_workers=8) as pool:
            users = list(pool.map(lambda _: client.users.get("a1b2c3d4e5f6g7h"), range(count)))

        self.assertEqual(len(users), count)
        self.assertTrue(all(u == users[0] for u in users))
        self.assertEqual(len(client._pb._http.calls), count)
        self.assertTrue(all(r.closed for r in client._pb._http.returned))


if __name__ == "__main__":
    unittest.main()
