from __future__ import annotations

import pytest

from accountsettings.config import AccountSettingsConfig
from accountsettings.exceptions import AccountSettingsConfigError


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCOUNT_SETTINGS_TOKEN", "tok-123")
    monkeypatch.setenv("ACCOUNT_SETTINGS_BASE_URL", "https://api.example.test/")
    monkeypatch.setenv("ACCOUNT_SETTINGS_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("ACCOUNT_SETTINGS_API_TRACE_ENABLED", "yes")

    config = AccountSettingsConfig.from_env()

    assert config.require_token() == "tok-123"
    assert config.request_timeout == 5.0
    assert config.api_trace_enabled is True
    assert config.api_root == "https://api.example.test/rest/v1.1"


def test_overrides_win_over_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCOUNT_SETTINGS_TOKEN", "from-env")
    monkeypatch.setenv("ACCOUNT_SETTINGS_REQUEST_TIMEOUT", "5")

    config = AccountSettingsConfig.from_env(bearer_token="explicit", request_timeout=1.5)

    assert config.bearer_token == "explicit"
    assert config.request_timeout == 1.5


def test_invalid_timeout_raises_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCOUNT_SETTINGS_REQUEST_TIMEOUT", "soon")

    with pytest.raises(AccountSettingsConfigError):
        AccountSettingsConfig.from_env()


def test_missing_token_raises_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ACCOUNT_SETTINGS_TOKEN", raising=False)
    config = AccountSettingsConfig.from_env()

    assert config.username_change_action == "none"
    with pytest.raises(AccountSettingsConfigError):
        config.require_token()
