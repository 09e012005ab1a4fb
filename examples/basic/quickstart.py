#!/usr/bin/env python3
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
PocketBase users client - Quickstart

Walks through the users API against a running PocketBase server:
creates a user, signs in, lists and filters users, updates and finally
deletes the user. Optionally prints realtime events for a few seconds.

Prerequisites:
- A PocketBase server with the default ``users`` auth collection
- ``pip install -e .`` from the repository root

Usage:
    python examples/basic/quickstart.py
"""

import sys
import threading
import uuid
from urllib.parse import quote

from PocketBase.Users import PocketBaseClient
from PocketBase.Users.core.config import PocketBaseConfig
from PocketBase.Users.core.errors import NotFoundError, PocketBaseError
from PocketBase.Users.core.telemetry import TelemetryConfig
from PocketBase.Users.models.filter_builder import FilterBuilder, FilterOperator
from PocketBase.Users.models.query import RecordQuery
from PocketBase.Users.models.user import PreparedUser, PreparedUserUpdate


def log_call(call: str) -> None:
    print({"call": call})


def get_base_url() -> str:
    if not sys.stdin.isatty():
        return "http://127.0.0.1:8090"
    entered = input("Enter PocketBase URL [http://127.0.0.1:8090]: ").strip()
    return (entered or "http://127.0.0.1:8090").rstrip("/")


def watch_events(client: PocketBaseClient, seconds: float) -> None:
    """Print realtime events for ``seconds`` in a background thread."""

    def run():
        try:
            with client.realtime.listen(["users"]) as events:
                for event in events:
                    print(f"📡 {event.action}: {event.record.username}")
        except PocketBaseError as e:
            print(f"📡 stream ended: {e}")

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    thread.join(seconds)


def main() -> None:
    base_url = get_base_url()
    config = PocketBaseConfig(telemetry=TelemetryConfig(enable_logging=True, log_level="INFO"))
    suffix = uuid.uuid4().hex[:8]
    username = f"quickstart_{suffix}"
    password = f"Pw-{uuid.uuid4().hex}"

    with PocketBaseClient(base_url, config) as client:
        print("\n👤 Create")
        log_call(f"client.users.create({username!r})")
        client.users.create(
            PreparedUser(
                username=username,
                password=password,
                password_confirm=password,
                email=f"{username}@example.com",
                name="Quickstart User",
            )
        )

        print("\n🔐 Sign in")
        log_call("client.auth.with_password(...)")
        token = client.auth.with_password(username, password)
        token = client.auth.refresh(token)
        print(f"✅ token: {token[:12]}...")

        print("\n🔎 Query")
        expr = FilterBuilder().add("username", FilterOperator.EQUAL, FilterBuilder.quote(username)).build()
        page = client.users.list(RecordQuery(per_page=10, filter=quote(expr, safe=""), sort="-created"))
        print({"filter": expr, "total_items": page.total_items, "items": [u.username for u in page]})
        user = page[0]

        print("\n✏️ Update")
        client.users.update(user.id, PreparedUserUpdate(name="Renamed User"))
        print({"name": client.users.get(user.id).name})

        print("\n🔗 OAuth2 providers")
        for provider in client.auth.list_methods():
            print({"provider": provider.name, "auth_url": provider.auth_url[:60]})
        print({"linked": [a.provider for a in client.auth.list_linked_accounts(user.id, token)]})

        if sys.stdin.isatty() and input("Watch realtime events for 5s? (y/N): ").strip().lower() in ("y", "yes"):
            watch_events(client, 5)

        print("\n🗑️ Delete")
        client.users.delete(user.id)
        try:
            client.users.get(user.id)
        except NotFoundError:
            print("✅ user removed")


if __name__ == "__main__":
    main()
