"""Progress indicator for a single asynchronous account operation.

An :class:`OperationStatus` is one of four variants:

* ``IDLE`` - nothing attempted yet.
* ``IN_PROGRESS`` - a request is running.
* ``SUCCEEDED`` - the most recent request completed successfully.
* ``FAILED`` - the most recent request failed, optionally with a
  human-readable ``message``.

Instances are frozen and compared by value, so two failures are equal
exactly when their messages are equal (including both being ``None``).
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator


class StatusKind(StrEnum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OperationStatus(BaseModel):
    """Immutable status value.

    Use the module singletons :data:`IDLE`, :data:`IN_PROGRESS` and
    :data:`SUCCEEDED`, and :meth:`failure` for failed results.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: StatusKind = StatusKind.IDLE
    message: str | None = None

    @model_validator(mode="after")
    def _message_only_on_failure(self) -> OperationStatus:
        if self.message is not None and self.kind is not StatusKind.FAILED:
            raise ValueError(f"{self.kind} status cannot carry a message")
        return self

    @classmethod
    def failure(cls, message: str | None = None) -> OperationStatus:
        return cls(kind=StatusKind.FAILED, message=message)

    @property
    def succeeded(self) -> bool:
        return self.kind is StatusKind.SUCCEEDED

    @property
    def in_progress(self) -> bool:
        return self.kind is StatusKind.IN_PROGRESS

    @property
    def failed(self) -> bool:
        return self.kind is StatusKind.FAILED

    @property
    def failure_message(self) -> str | None:
        """Message of a failed status, ``None`` for every other variant."""
        return self.message if self.kind is StatusKind.FAILED else None

    def __str__(self) -> str:
        if self.kind is StatusKind.FAILED and self.message is not None:
            return f"failed({self.message})"
        return self.kind.value


IDLE = OperationStatus(kind=StatusKind.IDLE)
IN_PROGRESS = OperationStatus(kind=StatusKind.IN_PROGRESS)
SUCCEEDED = OperationStatus(kind=StatusKind.SUCCEEDED)
