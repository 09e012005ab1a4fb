# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level request and decoding layer for the PocketBase users client.

Internal; use :class:`~PocketBase.Users.client.PocketBaseClient` instead.
"""

__all__ = []
