"""Custom exception hierarchy for accountsettings."""

from __future__ import annotations


class AccountSettingsError(Exception):
    """Base exception for all accountsettings errors."""


class AccountSettingsConfigError(AccountSettingsError):
    """Invalid or missing configuration."""


class AccountSettingsTransportError(AccountSettingsError):
    """HTTP-level failure (network, unexpected status, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class AccountSettingsApiError(AccountSettingsError):
    """API returned an error object (application-level error).

    ``message`` is the human-readable text the server sent, suitable for
    showing to a user (e.g. ``"Sorry, that username already exists!"``).
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        endpoint: str = "",
    ) -> None:
        self.message = message
        self.code = code
        self.endpoint = endpoint
        super().__init__(message)


class AccountSettingsAuthenticationError(AccountSettingsApiError):
    """Bearer token missing, expired or rejected by the server."""
