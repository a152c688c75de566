"""High-level async client for the account settings API."""

from __future__ import annotations

from typing import Any

import aiohttp

from accountsettings._api import username as _username_api
from accountsettings._transport import JsonTransport, Transport
from accountsettings.config import AccountSettingsConfig
from accountsettings.exceptions import AccountSettingsError
from accountsettings.models.username import UsernameChange, UsernameValidation


class AccountSettingsClient:
    """Async client for the account username endpoints.

    Usage::

        async with AccountSettingsClient(config) as client:
            await client.validate_username("alice")
            await client.change_username("alice")
    """

    def __init__(
        self,
        config: AccountSettingsConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = None

    async def __aenter__(self) -> AccountSettingsClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = JsonTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise AccountSettingsError("Client not initialized. Use 'async with AccountSettingsClient(...) as client:'")
        return self._transport

    async def validate_username(self, username: str) -> UsernameValidation:
        """Check whether *username* can be used for this account."""
        return await _username_api.validate_username(self._require_transport(), username)

    async def change_username(self, username: str, *, action: str | None = None) -> UsernameChange:
        """Change the account username.

        Parameters
        ----------
        username : str
            The new username.
        action : str or None
            What happens to existing site addresses. Defaults to
            ``config.username_change_action``.
        """
        return await _username_api.change_username(
            self._require_transport(),
            username,
            action=action if action is not None else self._config.username_change_action,
        )
