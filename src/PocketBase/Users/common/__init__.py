# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Common constants for the PocketBase users client.

This module contains endpoint paths, header values and telemetry attribute
names shared across the client.
"""

__all__ = []
