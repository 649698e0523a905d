from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx

from hexbooking.core.errors import ProviderError

logger = logging.getLogger(__name__)

INTEGRATION_SOURCE = "HexPropertyTab"


class LegacySystemClient:
    """JSON-over-HTTP client for one legacy system.

    Any transport failure, non-2xx status, or non-object JSON body raises
    ``ProviderError``. Retries use exponential backoff and are off by default.
    """

    def __init__(
        self,
        name: str,
        base_url: str,
        *,
        timeout: float = 5.0,
        max_retries: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self._transport = transport

    async def post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        return await self.request("POST", endpoint, body)

    async def request(
        self, method: str, endpoint: str, body: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        attempt = 0
        while True:
            try:
                return await self._request_once(method, endpoint, body)
            except ProviderError as e:
                if attempt >= self.max_retries:
                    raise
                attempt += 1
                delay = (2**attempt) * 0.1
                logger.info(
                    "%s request failed (%s); retry %d/%d in %.1fs",
                    self.name,
                    e.message,
                    attempt,
                    self.max_retries,
                    delay,
                    extra={"provider": self.name},
                )
                await asyncio.sleep(delay)

    async def _request_once(
        self, method: str, endpoint: str, body: dict[str, Any] | None
    ) -> dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.request(
                    method,
                    url,
                    json=body,
                    headers={
                        "Content-Type": "application/json",
                        "X-Integration-Source": INTEGRATION_SOURCE,
                    },
                )
        except httpx.TimeoutException as e:
            raise ProviderError(
                self.name, f"{self.name} timed out after {self.timeout}s", context={"url": url}
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(
                self.name, f"{self.name} unreachable: {e}", context={"url": url}
            ) from e

        if not resp.is_success:
            raise ProviderError(
                self.name,
                f"{self.name} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
                context={"url": url},
            )

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProviderError(
                self.name,
                f"{self.name} returned malformed JSON",
                status_code=resp.status_code,
                context={"url": url},
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                self.name,
                f"{self.name} returned {type(data).__name__}, expected a JSON object",
                status_code=resp.status_code,
                context={"url": url},
            )
        return data
