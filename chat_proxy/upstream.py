from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import structlog

from .config import Settings
from .models import FailureKind, InputMessage, UpstreamPayload, UpstreamResult
from .parsing import extract_output_text


log = structlog.get_logger(__name__)


class UpstreamClient:
    """HTTP client wrapper for the upstream /v1/responses API."""

    def __init__(
        self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        self._settings = settings
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "UpstreamClient":
        return cls(settings)

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.upstream_api_key:
            headers["Authorization"] = f"Bearer {self._settings.upstream_api_key}"
        return headers

    def build_payload(self, message: str, system_instruction: str) -> dict[str, Any]:
        payload = UpstreamPayload(
            model=self._settings.model,
            input=[
                InputMessage(role="system", content=system_instruction),
                InputMessage(role="user", content=message),
            ],
        )
        return payload.model_dump()

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._settings.request_timeout, transport=self._transport
        ) as client:
            return await client.post(
                self._settings.upstream_url, headers=self._headers(), json=payload
            )

    async def complete(self, message: str, system_instruction: str) -> UpstreamResult:
        """Send one completion request and return the extracted reply text.

        The whole exchange is bounded by ``request_timeout``. Failures are
        returned as ``UpstreamResult`` values rather than raised.
        """
        payload = self.build_payload(message, system_instruction)
        try:
            resp = await asyncio.wait_for(
                self._post(payload), timeout=self._settings.request_timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return UpstreamResult.failed(
                FailureKind.TIMEOUT,
                f"no response within {self._settings.request_timeout}s",
            )
        except httpx.RequestError as exc:
            return UpstreamResult.failed(
                FailureKind.NETWORK_ERROR, f"{type(exc).__name__}: {exc}"
            )

        if not resp.is_success:
            log.warning(
                "upstream.error_status", status=resp.status_code, body=resp.text
            )
            return UpstreamResult.failed(
                FailureKind.HTTP_ERROR, f"Upstream error {resp.status_code}"
            )

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            return UpstreamResult.failed(FailureKind.PARSE_ERROR, str(exc))

        return UpstreamResult.success(extract_output_text(data))
