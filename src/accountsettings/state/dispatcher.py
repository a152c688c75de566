"""Action dispatch and observable state plumbing shared by stores.

A :class:`Dispatcher` broadcasts actions to every registered handler. A
:class:`StatefulStore` owns one immutable state value, replaces it wholesale
through a single mutation point and notifies its listeners once per
published version.
"""

from __future__ import annotations

import abc
import asyncio
import itertools
import logging
import threading
from collections.abc import Callable
from typing import Any, ClassVar, Generic, TypeVar

_logger = logging.getLogger(__name__)

S = TypeVar("S")


class Dispatcher:
    """Broadcast dispatcher: every registered handler receives every action.

    Delivery is synchronous, on the dispatching thread, in registration order.
    """

    _global: ClassVar[Dispatcher | None] = None
    _global_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._handlers: dict[int, Callable[[Any], None]] = {}
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()

    @classmethod
    def global_dispatcher(cls) -> Dispatcher:
        """Process-wide shared dispatcher, created on first use."""
        with cls._global_lock:
            if cls._global is None:
                cls._global = cls()
            return cls._global

    def register(self, handler: Callable[[Any], None]) -> int:
        """Register *handler* and return the token used to unregister it."""
        with self._lock:
            token = next(self._tokens)
            self._handlers[token] = handler
        return token

    def unregister(self, token: int) -> None:
        with self._lock:
            self._handlers.pop(token, None)

    def dispatch(self, action: Any) -> None:
        with self._lock:
            handlers = list(self._handlers.values())
        _logger.debug("Dispatching %s to %d handler(s)", type(action).__name__, len(handlers))
        for handler in handlers:
            handler(action)


class StatefulStore(abc.ABC, Generic[S]):
    """Base class for stores holding a single immutable state value.

    All state changes go through :meth:`_replace_state`, which swaps the whole
    value under the store lock and fires exactly one notification.
    Completions arriving from other threads are marshalled with
    :meth:`_schedule` onto the event loop the store is bound to (the running
    loop at construction time unless one is passed explicitly). A store
    created outside any loop applies them directly under its lock instead.
    """

    def __init__(
        self,
        initial_state: S,
        *,
        dispatcher: Dispatcher | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = None
        self._state = initial_state
        self._lock = threading.RLock()
        self._loop = loop
        self._listeners: dict[int, Callable[[S], None]] = {}
        self._listener_ids = itertools.count(1)
        self._dispatcher = dispatcher
        self._dispatch_token: int | None = None
        if dispatcher is not None:
            self._dispatch_token = dispatcher.register(self.on_dispatch)

    @property
    def state(self) -> S:
        """Current published state version."""
        return self._state

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def subscribe(self, listener: Callable[[S], None]) -> Callable[[], None]:
        """Call *listener* with every new state version.

        Returns a callable that removes the subscription.
        """
        with self._lock:
            listener_id = next(self._listener_ids)
            self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(listener_id, None)

        return unsubscribe

    @abc.abstractmethod
    def on_dispatch(self, action: Any) -> None:
        """Handle one dispatched action; ignore kinds the store does not own."""

    def close(self) -> None:
        """Detach from the dispatcher and drop all listeners."""
        dispatcher = self._dispatcher
        token = self._dispatch_token
        self._dispatcher = None
        self._dispatch_token = None
        if dispatcher is not None and token is not None:
            dispatcher.unregister(token)
        with self._lock:
            self._listeners.clear()

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _replace_state(self, new_state: S) -> None:
        with self._lock:
            self._state = new_state
            self._emit(new_state)

    def _transaction(self, mutate: Callable[[S], S]) -> None:
        """Derive the next state from the current one and publish it."""
        with self._lock:
            self._replace_state(mutate(self._state))

    def _schedule(self, callback: Callable[[], None]) -> None:
        """Run *callback* on the store's serialization point.

        A store whose loop has closed falls back to running the callback
        inline under the store lock, so completions are never lost.
        """
        loop = self._loop
        if loop is not None and not loop.is_closed():
            try:
                loop.call_soon_threadsafe(callback)
                return
            except RuntimeError:
                # Closed between the check and the call.
                _logger.debug("Event loop closed while scheduling; applying inline", exc_info=True)
        elif loop is not None:
            _logger.debug("Event loop closed; applying state transition inline")
        with self._lock:
            callback()

    def _emit(self, state: S) -> None:
        listeners = list(self._listeners.values())
        for listener in listeners:
            try:
                listener(state)
            except Exception:
                _logger.exception("State listener %r failed", listener)
