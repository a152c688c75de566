"""Username endpoints.

Endpoints:
  - GET  /me/username/validate/{username}  (availability check)
  - POST /me/username                      (change username)
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from accountsettings._constants import (
    AUTHENTICATION_ERROR_CODES,
    CHANGE_USERNAME_ENDPOINT,
    DEFAULT_USERNAME_CHANGE_ACTION,
    VALIDATE_USERNAME_ENDPOINT,
)
from accountsettings._transport import Transport
from accountsettings.exceptions import AccountSettingsApiError, AccountSettingsAuthenticationError
from accountsettings.models.username import UsernameChange, UsernameValidation

_logger = logging.getLogger(__name__)


def _require_username(username: str) -> str:
    if not username.strip():
        raise ValueError("username must be non-empty")
    return username


def _raise_for_error(endpoint: str, body: dict[str, Any]) -> None:
    code = str(body.get("error") or "")
    if not code:
        return
    message = str(body.get("message") or code)
    if code in AUTHENTICATION_ERROR_CODES:
        raise AccountSettingsAuthenticationError(message, code=code, endpoint=endpoint)
    raise AccountSettingsApiError(message, code=code, endpoint=endpoint)


async def validate_username(transport: Transport, username: str) -> UsernameValidation:
    """Check that *username* is free and acceptable for the account.

    Raises
    ------
    AccountSettingsApiError
        The server rejected the username; ``message`` says why.
    """
    _require_username(username)
    endpoint = VALIDATE_USERNAME_ENDPOINT.format(username=quote(username, safe=""))
    body = await transport.request_json("GET", endpoint)
    _raise_for_error(endpoint, body)
    if body.get("success") is not True:
        raise AccountSettingsApiError(
            str(body.get("message") or f"Username {username!r} is not available"),
            code="invalid_username",
            endpoint=endpoint,
        )
    _logger.debug("Username validated username=%s", username)
    return UsernameValidation(username=username, success=True, raw=body)


async def change_username(
    transport: Transport,
    username: str,
    *,
    action: str = DEFAULT_USERNAME_CHANGE_ACTION,
) -> UsernameChange:
    """Change the account username to *username*."""
    _require_username(username)
    endpoint = CHANGE_USERNAME_ENDPOINT
    body = await transport.request_json("POST", endpoint, payload={"username": username, "action": action})
    _raise_for_error(endpoint, body)
    if body.get("success") is False:
        raise AccountSettingsApiError(
            str(body.get("message") or "Username change was not accepted"),
            code="username_change_failed",
            endpoint=endpoint,
        )
    _logger.debug("Username changed username=%s action=%s", username, action)
    return UsernameChange(username=username, action=action, success=True, raw=body)
