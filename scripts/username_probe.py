#!/usr/bin/env python3
"""Live username flow check against the REST API.

Drives an :class:`AccountSettingsStore` through a real
:class:`RemoteAccountSettingsService` and prints every published state
version.

Credentials come from ``ACCOUNT_SETTINGS_TOKEN`` (see
``AccountSettingsConfig.from_env``).

Default behavior validates the given username only. Pass ``--save`` to also
change the account username once validation succeeds.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from accountsettings import (  # noqa: E402
    AccountSettingsClient,
    AccountSettingsConfig,
    AccountSettingsStore,
    Dispatcher,
    RemoteAccountSettingsService,
    SaveUsername,
    StoreState,
    Validate,
)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("username", help="Username to validate")
    parser.add_argument("--save", action="store_true", help="Change the account username after validation")
    parser.add_argument("--timeout", type=float, default=30.0, help="Seconds to wait for each operation")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging with request traces")
    return parser.parse_args(argv)


async def _settle(store: AccountSettingsStore, timeout: float) -> None:
    settled = asyncio.Event()
    unsubscribe = store.subscribe(lambda state: settled.set() if not state.is_loading else None)
    try:
        if store.is_loading():
            await asyncio.wait_for(settled.wait(), timeout=timeout)
    finally:
        unsubscribe()


def _print_state(state: StoreState) -> None:
    print(f"validation={state.username_validation_status} save={state.username_save_status}")


async def _run(args: argparse.Namespace) -> int:
    config = AccountSettingsConfig.from_env(api_trace_enabled=args.debug)
    dispatcher = Dispatcher()

    async with AccountSettingsClient(config) as client:
        service = RemoteAccountSettingsService(client, loop=asyncio.get_running_loop())
        store = AccountSettingsStore(service, dispatcher=dispatcher)
        store.subscribe(_print_state)
        try:
            dispatcher.dispatch(Validate(username=args.username))
            await _settle(store, args.timeout)
            if not store.validation_succeeded():
                print(f"Validation failed: {store.validation_status.failure_message}")
                return 1

            if args.save:
                dispatcher.dispatch(SaveUsername(username=args.username))
                await _settle(store, args.timeout)
                if not store.save_status.succeeded:
                    print("Saving username failed")
                    return 1
        finally:
            store.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
