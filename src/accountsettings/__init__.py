"""accountsettings - Observable account settings state with an async REST client."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyaccountsettings")
except PackageNotFoundError:
    __version__ = "0+local"
from accountsettings.client import AccountSettingsClient
from accountsettings.config import AccountSettingsConfig
from accountsettings.exceptions import (
    AccountSettingsApiError,
    AccountSettingsAuthenticationError,
    AccountSettingsConfigError,
    AccountSettingsError,
    AccountSettingsTransportError,
)
from accountsettings.models import (
    IDLE,
    IN_PROGRESS,
    SUCCEEDED,
    OperationStatus,
    StatusKind,
    UsernameChange,
    UsernameValidation,
)
from accountsettings.service import AccountSettingsService, RemoteAccountSettingsService, describe_error
from accountsettings.state.actions import AccountSettingsAction, Action, SaveUsername, Validate
from accountsettings.state.dispatcher import Dispatcher, StatefulStore
from accountsettings.state.store import AccountSettingsStore, StoreState

__all__ = [
    "__version__",
    "IDLE",
    "IN_PROGRESS",
    "SUCCEEDED",
    "AccountSettingsAction",
    "AccountSettingsApiError",
    "AccountSettingsAuthenticationError",
    "AccountSettingsClient",
    "AccountSettingsConfig",
    "AccountSettingsConfigError",
    "AccountSettingsError",
    "AccountSettingsService",
    "AccountSettingsStore",
    "AccountSettingsTransportError",
    "Action",
    "Dispatcher",
    "OperationStatus",
    "RemoteAccountSettingsService",
    "SaveUsername",
    "StatefulStore",
    "StatusKind",
    "StoreState",
    "UsernameChange",
    "UsernameValidation",
    "Validate",
    "describe_error",
]
