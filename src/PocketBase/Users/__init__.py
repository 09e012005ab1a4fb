# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the users collection of a PocketBase server.

Example::

    from PocketBase.Users import PocketBaseClient

    with PocketBaseClient("http://127.0.0.1:8090") as client:
        token = client.auth.with_password("jdoe@example.com", "s3cret-pass")
        for user in client.users.list():
            print(user.username)
"""

from .client import PocketBaseClient

__version__ = "0.1.0"

__all__ = ["PocketBaseClient", "__version__"]
