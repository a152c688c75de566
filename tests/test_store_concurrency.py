from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable

import pytest

from accountsettings.models.status import IN_PROGRESS, SUCCEEDED, OperationStatus
from accountsettings.state.actions import SaveUsername, Validate
from accountsettings.state.store import AccountSettingsStore, StoreState


class _ThreadedService:
    """Completes every request from a separate worker thread."""

    def __init__(self, *, validation_error: str | None = None, save_fails: bool = False) -> None:
        self.validation_error = validation_error
        self.save_fails = save_fails
        self.threads: list[threading.Thread] = []

    def _spawn(self, outcome: Callable[[], None]) -> None:
        thread = threading.Thread(target=outcome)
        self.threads.append(thread)
        thread.start()

    def validate_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[str], None],
    ) -> None:
        error = self.validation_error
        self._spawn(success if error is None else (lambda: failure(error)))

    def change_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[], None],
    ) -> None:
        self._spawn(failure if self.save_fails else success)

    def join(self) -> None:
        for thread in self.threads:
            thread.join(timeout=5)


class _ImmediateService:
    def validate_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[str], None],
    ) -> None:
        success()

    def change_username(
        self,
        username: str,
        success: Callable[[], None],
        failure: Callable[[], None],
    ) -> None:
        success()


async def _wait_for(store: AccountSettingsStore, predicate: Callable[[StoreState], bool]) -> None:
    reached = asyncio.Event()

    def listener(state: StoreState) -> None:
        if predicate(state):
            reached.set()

    unsubscribe = store.subscribe(listener)
    try:
        if not predicate(store.state):
            await asyncio.wait_for(reached.wait(), timeout=2.0)
    finally:
        unsubscribe()


@pytest.mark.asyncio
async def test_completion_is_deferred_to_the_event_loop() -> None:
    service = _ImmediateService()
    store = AccountSettingsStore(service)

    store.dispatch(Validate(username="alice"))

    # The service answered synchronously; the result is queued on the loop.
    assert store.loop is asyncio.get_running_loop()
    assert store.validation_status == IN_PROGRESS

    await asyncio.sleep(0)

    assert store.validation_status == SUCCEEDED
    assert store.validation_succeeded()


@pytest.mark.asyncio
async def test_worker_thread_completion_is_applied_on_loop_thread() -> None:
    service = _ThreadedService(validation_error="username taken")
    store = AccountSettingsStore(service)
    loop_thread = threading.get_ident()
    notified_on: list[int] = []
    store.subscribe(lambda _state: notified_on.append(threading.get_ident()))

    store.dispatch(Validate(username="bad name"))
    await _wait_for(store, lambda state: not state.is_loading)
    service.join()

    assert store.validation_status == OperationStatus.failure("username taken")
    assert notified_on == [loop_thread, loop_thread]


@pytest.mark.asyncio
async def test_second_request_rejected_until_worker_completes() -> None:
    service = _ThreadedService(save_fails=True)
    store = AccountSettingsStore(service)

    store.dispatch(SaveUsername(username="bob"))
    store.dispatch(Validate(username="bob"))
    assert store.save_status == IN_PROGRESS
    assert store.validation_status == OperationStatus()

    await _wait_for(store, lambda state: not state.is_loading)
    service.join()
    assert store.save_status == OperationStatus.failure()

    store.dispatch(Validate(username="bob"))
    await _wait_for(store, lambda state: state.username_validation_status.succeeded)
    service.join()

    assert store.save_status == OperationStatus.failure()
    assert len(service.threads) == 2


def test_loopless_store_applies_worker_completion_under_lock() -> None:
    service = _ThreadedService()
    store = AccountSettingsStore(service)

    store.dispatch(SaveUsername(username="bob"))
    service.join()

    assert store.loop is None
    assert store.save_status == SUCCEEDED


@pytest.mark.asyncio
async def test_store_bound_to_explicit_loop_from_another_thread() -> None:
    loop = asyncio.get_running_loop()
    service = _ImmediateService()
    created: list[AccountSettingsStore] = []

    def build_and_dispatch() -> None:
        store = AccountSettingsStore(service, loop=loop)
        store.dispatch(Validate(username="alice"))
        created.append(store)

    worker = threading.Thread(target=build_and_dispatch)
    worker.start()
    worker.join(timeout=5)

    store = created[0]
    await _wait_for(store, lambda state: state.username_validation_status.succeeded)
    assert store.validation_succeeded()


def test_store_outliving_its_loop_still_reaches_terminal_states() -> None:
    service = _ImmediateService()

    async def build() -> AccountSettingsStore:
        return AccountSettingsStore(service)

    store = asyncio.run(build())
    assert store.loop is not None and store.loop.is_closed()

    store.dispatch(Validate(username="alice"))
    assert store.validation_status == SUCCEEDED

    store.dispatch(SaveUsername(username="alice"))
    assert store.save_status == SUCCEEDED
    assert not store.is_loading()


def test_worker_completion_with_closed_explicit_loop_is_applied() -> None:
    loop = asyncio.new_event_loop()
    loop.close()
    service = _ThreadedService(validation_error="username taken")
    store = AccountSettingsStore(service, loop=loop)

    store.dispatch(Validate(username="bad name"))
    service.join()

    assert store.validation_status == OperationStatus.failure("username taken")
    assert not store.is_loading()
