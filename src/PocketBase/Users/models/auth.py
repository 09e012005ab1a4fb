# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""OAuth2 provider and linked-account data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ._fields import _require_object, _str


@dataclass(frozen=True)
class AuthProvider:
    """
    OAuth2 handshake parameters for one provider.

    Single use: ``state`` and ``code_verifier`` belong to one login attempt
    and must be passed back to ``client.auth.with_oauth2`` with the code the
    provider redirects with.

    :param name: Provider name, e.g. ``"google"``.
    :type name: str
    :param auth_url: Provider authorization URL; append the redirect URL to it.
    :type auth_url: str
    """

    name: str
    state: str
    code_verifier: str
    code_challenge: str
    code_challenge_method: str
    auth_url: str

    @classmethod
    def from_api_response(cls, name: str, data: Any) -> "AuthProvider":
        """
        Create an AuthProvider from one provider object.

        :param name: Provider name (the key the object was listed under).
        :param data: Decoded JSON object.
        :raises ~PocketBase.Users.core.errors.DecodeError: If a field is missing or not a string.
        """
        model = cls.__name__
        data = _require_object(data, model)
        return cls(
            name=name,
            state=_str(data, "state", model),
            code_verifier=_str(data, "codeVerifier", model),
            code_challenge=_str(data, "codeChallenge", model),
            code_challenge_method=_str(data, "codeChallengeMethod", model),
            auth_url=_str(data, "authUrl", model),
        )


@dataclass(frozen=True)
class LinkedAccount:
    """External identity linked to a user record by a successful OAuth2 login."""

    id: str
    created: str
    updated: str
    record_id: str
    collection_id: str
    provider: str
    provider_id: str

    @classmethod
    def from_api_response(cls, data: Any, *, id: Optional[str] = None) -> "LinkedAccount":
        """
        Create a LinkedAccount from one external-auth object.

        :param id: Id to use when the object is listed under its id rather than carrying one.
        :raises ~PocketBase.Users.core.errors.DecodeError: If a field is missing or not a string.
        """
        model = cls.__name__
        data = _require_object(data, model)
        return cls(
            id=id if id is not None else _str(data, "id", model),
            created=_str(data, "created", model),
            updated=_str(data, "updated", model),
            record_id=_str(data, "recordId", model),
            collection_id=_str(data, "collectionId", model),
            provider=_str(data, "provider", model),
            provider_id=_str(data, "providerId", model),
        )


__all__ = ["AuthProvider", "LinkedAccount"]
