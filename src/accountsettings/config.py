"""Client configuration for accountsettings."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from accountsettings._constants import API_PATH, BASE_URL, DEFAULT_USERNAME_CHANGE_ACTION
from accountsettings.exceptions import AccountSettingsConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class AccountSettingsConfig:
    """Client configuration.

    Parameters
    ----------
    bearer_token : str
        OAuth2 bearer token of the signed-in account.
    base_url : str
        REST API host. Defaults to the public WordPress.com API.
    api_path : str
        Versioned API prefix appended to ``base_url``.
    request_timeout : float
        Total per-request timeout in seconds.
    username_change_action : str
        ``action`` value sent with a username change (what happens to
        existing site addresses). ``"none"`` leaves them untouched.
    api_trace_enabled : bool
        Log redacted request/response bodies at DEBUG level.
    """

    bearer_token: str = ""
    base_url: str = BASE_URL
    api_path: str = API_PATH
    request_timeout: float = 30.0
    username_change_action: str = DEFAULT_USERNAME_CHANGE_ACTION
    api_trace_enabled: bool = False

    @property
    def api_root(self) -> str:
        """Base URL joined with the API prefix, without a trailing slash."""
        return f"{self.base_url.rstrip('/')}/{self.api_path.strip('/')}"

    def require_token(self) -> str:
        """Return the bearer token or raise if none is configured."""
        token = self.bearer_token.strip()
        if not token:
            raise AccountSettingsConfigError("No bearer token configured (set ACCOUNT_SETTINGS_TOKEN)")
        return token

    @classmethod
    def from_env(cls, **overrides: Any) -> AccountSettingsConfig:
        """Create configuration from environment variables.

        Reads ``ACCOUNT_SETTINGS_TOKEN`` and optional ``ACCOUNT_SETTINGS_*``
        variables. Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        AccountSettingsConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ACCOUNT_SETTINGS_TOKEN": "bearer_token",
            "ACCOUNT_SETTINGS_BASE_URL": "base_url",
            "ACCOUNT_SETTINGS_API_PATH": "api_path",
            "ACCOUNT_SETTINGS_USERNAME_CHANGE_ACTION": "username_change_action",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # request_timeout is numeric, handle separately
        timeout_env = env.get("ACCOUNT_SETTINGS_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise AccountSettingsConfigError(
                    f"ACCOUNT_SETTINGS_REQUEST_TIMEOUT must be a number, got {timeout_env!r}"
                ) from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("ACCOUNT_SETTINGS_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
