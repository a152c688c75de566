"""JSON-over-HTTP transport with bearer authentication."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from accountsettings._constants import USER_AGENT
from accountsettings._redact import redact_for_log
from accountsettings.config import AccountSettingsConfig
from accountsettings.exceptions import AccountSettingsTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`JsonTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        payload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        ...


class JsonTransport:
    """Sends authenticated JSON requests to the REST API.

    Error responses whose body is a JSON object with an ``error`` key are
    returned as-is so endpoint modules can map them to API errors. Anything
    else that is not a successful JSON object raises
    :class:`AccountSettingsTransportError`.
    """

    def __init__(self, config: AccountSettingsConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _headers(self) -> dict[str, str]:
        return {
            "accept": "application/json",
            "authorization": f"Bearer {self._config.require_token()}",
            "user-agent": USER_AGENT,
        }

    async def request_json(
        self,
        method: str,
        endpoint: str,
        *,
        payload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self._config.api_root}{endpoint}"
        headers = self._headers()
        timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled:
            _logger.debug(
                "Request trace endpoint=%s headers=%s payload=%s",
                endpoint,
                redact_for_log(headers),
                redact_for_log(payload),
            )

        try:
            async with self._http.request(
                method,
                url,
                json=dict(payload) if payload is not None else None,
                headers=headers,
                timeout=timeout,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except aiohttp.ClientError as exc:
            raise AccountSettingsTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise AccountSettingsTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise AccountSettingsTransportError(
                f"Invalid JSON from {endpoint} (HTTP {status}): {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise AccountSettingsTransportError(
                f"Expected a JSON object from {endpoint} (HTTP {status})",
                status_code=status,
                endpoint=endpoint,
            )

        if self._config.api_trace_enabled:
            _logger.debug("Response trace endpoint=%s status=%s body=%s", endpoint, status, redact_for_log(body))

        if status >= 400 and "error" not in body:
            raise AccountSettingsTransportError(
                f"HTTP {status} from {endpoint}: {text[:200]}",
                status_code=status,
                endpoint=endpoint,
            )
        return body
