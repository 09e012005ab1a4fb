# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for PocketBase users client tests.

This module provides common test fixtures that can be used across all test
modules. Test doubles live in ``fixtures/test_data.py``.
"""

import pytest

from PocketBase.Users.core.config import PocketBaseConfig
from fixtures.test_data import BASE_URL, make_list_data, make_user_data


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return PocketBaseConfig(http_retries=0, http_backoff=0.1, http_timeout=5)


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return BASE_URL


@pytest.fixture
def sample_user_data():
    """One user record as the server returns it."""
    return make_user_data()


@pytest.fixture
def sample_list_data():
    """A two-item records list envelope."""
    return make_list_data([make_user_data(), make_user_data(id="zzzzzzzzzzzzzzz", username="asmith")])
