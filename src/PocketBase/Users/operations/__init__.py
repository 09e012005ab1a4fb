# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the PocketBase users client.

This module contains the operation namespace classes that organize
related operations under intuitive namespaces:
- UserOperations: CRUD operations on user records
- AuthOperations: Authentication, recovery and OAuth2 linking
- RealtimeOperations: Server-push event stream
"""

__all__ = []
