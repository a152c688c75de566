"""Account settings service capability consumed by the store.

The store only knows :class:`AccountSettingsService`, a callback-style
interface. :class:`RemoteAccountSettingsService` implements it on top of the
async :class:`~accountsettings.client.AccountSettingsClient`.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
from collections.abc import Callable, Coroutine
from typing import Any, Protocol

from accountsettings.exceptions import AccountSettingsApiError
from accountsettings.models.username import UsernameChange, UsernameValidation

_logger = logging.getLogger(__name__)


class AccountSettingsService(Protocol):
    """Performs the username operations for the signed-in account.

    Every call must eventually invoke exactly one of its callbacks, exactly
    once. Callbacks may be invoked on any thread.
    """

    def validate_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[str], None],
    ) -> None:
        ...

    def change_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[], None],
    ) -> None:
        ...


class UsernameApi(Protocol):
    """The subset of :class:`AccountSettingsClient` the remote service uses."""

    async def validate_username(self, username: str) -> UsernameValidation:
        ...

    async def change_username(self, username: str) -> UsernameChange:
        ...


def describe_error(exc: BaseException) -> str:
    """Human-readable description of a failed request."""
    if isinstance(exc, AccountSettingsApiError) and exc.message:
        return exc.message
    if isinstance(exc, asyncio.CancelledError):
        return "Request was cancelled"
    return str(exc) or type(exc).__name__


class RemoteAccountSettingsService:
    """Callback adapter over an async username API.

    Requests run on *loop*; callers may invoke the service from any thread.
    """

    def __init__(self, api: UsernameApi, *, loop: asyncio.AbstractEventLoop) -> None:
        self._api = api
        self._loop = loop

    def validate_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[str], None],
    ) -> None:
        self._submit(
            self._api.validate_username(username),
            on_success=success,
            on_failure=lambda exc: failure(describe_error(exc)),
            label=f"validate_username({username!r})",
        )

    def change_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[], None],
    ) -> None:
        self._submit(
            self._api.change_username(username),
            on_success=success,
            on_failure=lambda _exc: failure(),
            label=f"change_username({username!r})",
        )

    def _submit(
        self,
        coro: Coroutine[Any, Any, Any],
        *,
        on_success: Callable[[], None],
        on_failure: Callable[[BaseException], None],
        label: str,
    ) -> None:
        try:
            future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        except RuntimeError:
            coro.close()
            raise

        def _done(fut: concurrent.futures.Future[Any]) -> None:
            if fut.cancelled():
                _logger.debug("%s cancelled", label)
                on_failure(asyncio.CancelledError())
                return
            exc = fut.exception()
            if exc is not None:
                _logger.debug("%s failed: %s", label, exc)
                on_failure(exc)
                return
            _logger.debug("%s succeeded", label)
            on_success()

        future.add_done_callback(_done)
