"""Resilient KV Client — REST key/value store (Redis over HTTP) with retry, backoff, and error mapping.

Invariants:
    - Every key is namespaced with key_prefix ("sso_" by default)
    - Rate limits (429) and transient errors (5xx, connection, timeout): retried
      up to max_retries with exponential backoff
    - Client errors (other 4xx): immediate failure, no retry
    - All failures mapped to StorageError (core/errors.py)

Design Decisions:
    - httpx.AsyncClient over a Redis driver: the hosted store speaks REST
      (POST {url}/set/{key}, GET {url}/get/{key}) and works from serverless hosts
    - ±25% jitter on backoff: prevents synchronized retries from many clients
    - transport injectable: tests swap in httpx.MockTransport
"""

import asyncio
import json
import logging
import random

import httpx

from santa.core.errors import StorageError

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class ResilientKVClient:
    """Wraps an httpx client with retry logic, timeouts, and error mapping."""

    def __init__(
        self,
        base_url: str,
        token: str,
        key_prefix: str = "sso_",
        timeout_seconds: float = 10.0,
        max_retries: int = 2,
        base_delay_ms: int = 200,
        max_delay_ms: int = 2_000,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout_seconds,
            transport=transport,
        )
        self.key_prefix = key_prefix
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    async def set_json(self, key: str, data: dict) -> bool:
        """Store data as JSON. True when the store acknowledged with OK."""
        body = await self._request(
            "POST", f"/set/{self.key_prefix}{key}",
            content=json.dumps(data, ensure_ascii=False).encode("utf-8"),
        )
        return body.get("result") == "OK"

    async def get_json(self, key: str) -> dict | None:
        """Fetch and parse a stored value. None when the key is absent."""
        body = await self._request("GET", f"/get/{self.key_prefix}{key}")
        result = body.get("result")
        if result is None:
            return None
        if isinstance(result, str):
            try:
                result = json.loads(result)
            except ValueError:
                raise StorageError("stored value is not JSON", "get")
        if not isinstance(result, dict):
            raise StorageError("stored value is not an object", "get")
        return result

    async def ping(self) -> bool:
        """Readiness probe. Never raises."""
        try:
            body = await self._request("GET", "/ping")
        except StorageError as e:
            logger.error(f"KV ping failed: {e}")
            return False
        return body.get("result") == "PONG"

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        """Send one logical request, retrying transient failures."""
        operation = "get" if method == "GET" else "set"
        for attempt in range(self.max_retries + 1):
            try:
                response = await self.client.request(method, path, **kwargs)
            except httpx.TransportError as e:
                await self._handle_transient(f"{type(e).__name__}: {e}", attempt, operation)
                continue

            if response.status_code in _RETRYABLE_STATUS:
                await self._handle_transient(
                    f"HTTP {response.status_code}", attempt, operation,
                )
                continue
            if response.is_error:
                raise StorageError(
                    f"KV rejected request (HTTP {response.status_code})", operation,
                )
            try:
                body = response.json()
            except ValueError:
                raise StorageError("KV returned a non-JSON response", operation)
            if not isinstance(body, dict):
                raise StorageError("KV returned an unexpected response", operation)
            return body

        # _handle_transient raises on the last attempt; unreachable
        raise StorageError("retries exhausted", operation)

    async def _handle_transient(self, reason: str, attempt: int, operation: str) -> None:
        """Sleep before the next attempt, or raise when out of retries."""
        if attempt >= self.max_retries:
            raise StorageError(
                f"transient failure after {self.max_retries} retries ({reason})",
                operation,
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"KV {operation} transient error, retry after {delay}ms: {reason}",
            extra={"attempts": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311
