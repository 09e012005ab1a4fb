# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Authentication, account recovery and OAuth2 linking operations namespace."""

from __future__ import annotations

from typing import List, TYPE_CHECKING

from ..common.constants import (
    CONFIRM_EMAIL_CHANGE_PATH,
    CONFIRM_PASSWORD_RESET_PATH,
    CONFIRM_VERIFICATION_PATH,
    REQUEST_EMAIL_CHANGE_PATH,
    REQUEST_PASSWORD_RESET_PATH,
    REQUEST_VERIFICATION_PATH,
)
from ..models.auth import AuthProvider, LinkedAccount

if TYPE_CHECKING:
    from ..client import PocketBaseClient


class AuthOperations:
    """
    Authentication flows for the ``users`` collection.

    Accessed via ``client.auth``. The client stores no token: every method
    that needs one takes it as an argument, and the ones that return one
    leave it to the caller to keep.

    Example:
        Password login and refresh::

            token = client.auth.with_password("jdoe@example.com", "s3cret-pass")
            token = client.auth.refresh(token)

        OAuth2 login::

            provider = next(p for p in client.auth.list_methods() if p.name == "google")
            # redirect the user to provider.auth_url + redirect_url, receive ``code``
            token = client.auth.with_oauth2("google", code, provider.code_verifier, redirect_url)
    """

    def __init__(self, client: "PocketBaseClient") -> None:
        self._client = client

    # ------------------------------------------------------------ sign in

    def with_password(self, identity: str, password: str) -> str:
        """
        Authenticate with a username or email and a password.

        :param identity: Username or email.
        :type identity: str
        :param password: Plain password.
        :type password: str
        :return: Session token.
        :rtype: str
        :raises ~PocketBase.Users.core.errors.InvalidFilterError: If the credentials are rejected (400).
        :raises ~PocketBase.Users.core.errors.DecodeError: If the response carries no token.
        """
        return self._client._get_pb()._auth_with_password(identity, password)

    def with_oauth2(self, provider: str, auth_code: str, verifier: str, redirect_url: str) -> str:
        """
        Complete an OAuth2 login and return a session token.

        A successful login links the provider account to the user, creating the
        user first if needed.

        :param provider: Provider name from :meth:`list_methods`.
        :param auth_code: Authorization code the provider redirected with.
        :param verifier: ``code_verifier`` of the :class:`AuthProvider` used to start the login.
        :param redirect_url: Redirect URL used to start the login.
        :return: Session token.
        :rtype: str
        :raises ~PocketBase.Users.core.errors.PocketBaseError: If the response carries no token.
        """
        return self._client._get_pb()._auth_with_oauth2(provider, auth_code, verifier, redirect_url)

    def refresh(self, token: str) -> str:
        """
        Exchange a valid session token for a new one.

        :raises ~PocketBase.Users.core.errors.AuthenticationFailedError: If ``token`` is invalid or expired (401).
        :raises ~PocketBase.Users.core.errors.NotFoundError: ``"missing auth record context"`` (404).
        """
        return self._client._get_pb()._auth_refresh(token)

    # ------------------------------------------------------------ verification

    def request_verification(self, email: str) -> bool:
        """Send a verification email to ``email``."""
        self._client._get_pb()._post_action(
            "auth.request_verification", REQUEST_VERIFICATION_PATH, {"email": email}
        )
        return True

    def confirm_verification(self, token: str) -> bool:
        """Confirm an email address with the token from a verification email."""
        self._client._get_pb()._post_action(
            "auth.confirm_verification", CONFIRM_VERIFICATION_PATH, {"token": token}
        )
        return True

    # ------------------------------------------------------------ password reset

    def request_password_reset(self, email: str) -> bool:
        self._client._get_pb()._post_action(
            "auth.request_password_reset", REQUEST_PASSWORD_RESET_PATH, {"email": email}
        )
        return True

    def confirm_password_reset(self, token: str, password: str, password_confirm: str) -> bool:
        self._client._get_pb()._post_action(
            "auth.confirm_password_reset",
            CONFIRM_PASSWORD_RESET_PATH,
            {"token": token, "password": password, "passwordConfirm": password_confirm},
        )
        return True

    # ------------------------------------------------------------ email change

    def request_email_change(self, new_email: str, token: str) -> bool:
        """
        Ask for a confirmation email to be sent to ``new_email``.

        :param token: Session token of the user changing their email.
        :raises ~PocketBase.Users.core.errors.AuthenticationFailedError: If ``token`` is rejected (401).
        """
        self._client._get_pb()._post_action(
            "auth.request_email_change", REQUEST_EMAIL_CHANGE_PATH, {"newEmail": new_email}, token=token
        )
        return True

    def confirm_email_change(self, token: str, password: str) -> None:
        """
        Confirm an email change with the token from the confirmation email.

        :param token: Token from the confirmation email; also sent as the bearer token.
        :param password: Current account password.
        :raises ~PocketBase.Users.core.errors.AuthenticationFailedError: If ``token`` is rejected (401).
        """
        self._client._get_pb()._post_action(
            "auth.confirm_email_change",
            CONFIRM_EMAIL_CHANGE_PATH,
            {"token": token, "password": password},
            token=token,
        )

    # ------------------------------------------------------------ OAuth2 providers

    def list_methods(self) -> List[AuthProvider]:
        """
        List the OAuth2 providers enabled for the collection.

        Each :class:`AuthProvider` carries fresh, single-use handshake parameters.
        """
        return self._client._get_pb()._list_auth_methods()

    def list_linked_accounts(self, record_id: str, token: str) -> List[LinkedAccount]:
        """
        List the external accounts linked to a user.

        :raises ~PocketBase.Users.core.errors.AuthenticationFailedError: If ``token`` is rejected (401).
        """
        return self._client._get_pb()._list_external_auths(record_id, token)

    def unlink_account(self, record_id: str, provider: str, token: str) -> bool:
        """
        Remove the link between a user and one OAuth2 provider.

        :raises ~PocketBase.Users.core.errors.AuthenticationFailedError: If ``token`` is rejected (401).
        :raises ~PocketBase.Users.core.errors.NotFoundError: If the user has no link to ``provider`` (404).
        """
        self._client._get_pb()._unlink_external_auth(record_id, provider, token)
        return True
