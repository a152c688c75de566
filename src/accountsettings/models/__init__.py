"""Data models for account settings state and API responses."""

from accountsettings.models.status import IDLE, IN_PROGRESS, SUCCEEDED, OperationStatus, StatusKind
from accountsettings.models.username import UsernameChange, UsernameValidation

__all__ = [
    "IDLE",
    "IN_PROGRESS",
    "SUCCEEDED",
    "OperationStatus",
    "StatusKind",
    "UsernameChange",
    "UsernameValidation",
]
