"""Account settings store.

Coordinates username validation and username save. Only one of the two may
be in flight at a time; a request arriving while either is running is
dropped. Outcomes are never raised: they become the terminal
:class:`OperationStatus` of the matching field.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
import weakref
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict

from accountsettings.models.status import IDLE, IN_PROGRESS, SUCCEEDED, OperationStatus
from accountsettings.service import AccountSettingsService
from accountsettings.state.actions import SaveUsername, Validate
from accountsettings.state.dispatcher import Dispatcher, StatefulStore

_logger = logging.getLogger(__name__)

_VALIDATION_FIELD = "username_validation_status"
_SAVE_FIELD = "username_save_status"


class StoreState(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    username_validation_status: OperationStatus = IDLE
    username_save_status: OperationStatus = IDLE

    @property
    def is_loading(self) -> bool:
        return self.username_validation_status.in_progress or self.username_save_status.in_progress


class AccountSettingsStore(StatefulStore[StoreState]):
    """Observable state for the username validation and save flows.

    The service is held weakly; once it is gone (or if none was given)
    dispatched actions are no-ops. A service that cannot be weakly
    referenced (``__slots__`` without ``__weakref__``, ``SimpleNamespace``)
    is held strongly instead, with a warning, and lives as long as the store.

    Usage::

        store = AccountSettingsStore(service, dispatcher=dispatcher)
        unsubscribe = store.subscribe(render)
        dispatcher.dispatch(Validate(username="alice"))
    """

    def __init__(
        self,
        service: AccountSettingsService | None,
        *,
        dispatcher: Dispatcher | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._service_ref: Callable[[], Any] | None = None
        if service is not None:
            try:
                self._service_ref = weakref.ref(service)
            except TypeError:
                _logger.warning(
                    "%s does not support weak references; holding it strongly",
                    type(service).__name__,
                )
                strong = service
                self._service_ref = lambda: strong
        super().__init__(StoreState(), dispatcher=dispatcher, loop=loop)

    @property
    def service(self) -> AccountSettingsService | None:
        if self._service_ref is None:
            return None
        service: AccountSettingsService | None = self._service_ref()
        return service

    @property
    def validation_status(self) -> OperationStatus:
        return self.state.username_validation_status

    @property
    def save_status(self) -> OperationStatus:
        return self.state.username_save_status

    def is_loading(self) -> bool:
        return self.state.is_loading

    def validation_succeeded(self) -> bool:
        return self.state.username_validation_status.succeeded

    def dispatch(self, action: Any) -> None:
        """Handle *action* directly, bypassing any dispatcher."""
        self.on_dispatch(action)

    def on_dispatch(self, action: Any) -> None:
        if isinstance(action, Validate):
            self._handle_validate(action.username)
        elif isinstance(action, SaveUsername):
            self._handle_save(action.username)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _handle_validate(self, username: str) -> None:
        service = self.service
        if service is None:
            _logger.debug("No account settings service; ignoring validation of %s", username)
            return
        if not self._begin(_VALIDATION_FIELD):
            return

        complete = self._completion(_VALIDATION_FIELD)

        def success() -> None:
            _logger.info("Validation of %s username finished successfully", username)
            complete(SUCCEEDED)

        def failure(description: str) -> None:
            _logger.info("Username validation failed: %s", description)
            complete(OperationStatus.failure(description))

        try:
            service.validate_username(username, success, failure)
        except Exception as exc:
            _logger.warning("Could not start validation of %s username", username, exc_info=True)
            failure(str(exc))

    def _handle_save(self, username: str) -> None:
        service = self.service
        if service is None:
            _logger.debug("No account settings service; ignoring save of %s", username)
            return
        if not self._begin(_SAVE_FIELD):
            return

        complete = self._completion(_SAVE_FIELD)

        def success() -> None:
            _logger.info("Saving %s username succeeded", username)
            complete(SUCCEEDED)

        def failure() -> None:
            _logger.info("Saving %s username failed", username)
            complete(OperationStatus.failure())

        try:
            service.change_username(username, success, failure)
        except Exception:
            _logger.warning("Could not start saving %s username", username, exc_info=True)
            failure()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _begin(self, field: str) -> bool:
        """Mark *field* in progress unless any operation is already running."""
        with self._lock:
            if self.is_loading():
                _logger.debug("Operation in progress; rejecting %s request", field)
                return False
            self._replace_state(self.state.model_copy(update={field: IN_PROGRESS}))
        return True

    def _completion(self, field: str) -> Callable[[OperationStatus], None]:
        """Return a one-shot callable that publishes the terminal status of *field*."""
        lock = threading.Lock()
        done = False

        def complete(status: OperationStatus) -> None:
            nonlocal done
            with lock:
                if done:
                    _logger.warning("Ignoring repeated completion of %s (%s)", field, status)
                    return
                done = True
            self._schedule(functools.partial(self._apply_status, field, status))

        return complete

    def _apply_status(self, field: str, status: OperationStatus) -> None:
        self._transaction(lambda state: state.model_copy(update={field: status}))
