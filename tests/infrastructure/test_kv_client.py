"""Resilient KV Client — retry, error mapping, and value decoding.

Tests cover:
    - set/get round trip with key prefix and bearer token
    - stored value returned as a JSON string or as an object
    - 5xx / connection errors retried, 4xx not retried
    - exhausted retries and malformed values → StorageError
"""

import httpx
import pytest

from santa.core.errors import StorageError
from santa.infrastructure.kv_client import ResilientKVClient
from tests.infrastructure.fake_kv import FakeKV


def _client(transport, token="test-token", max_retries=2) -> ResilientKVClient:
    return ResilientKVClient(
        "https://kv.test", token, key_prefix="sso_",
        max_retries=max_retries, base_delay_ms=0, max_delay_ms=0,
        transport=transport,
    )


async def test_set_then_get_round_trip():
    kv = FakeKV()
    client = _client(kv.transport())

    assert await client.set_json("evt-1", {"details": {"id": "evt-1"}}) is True
    assert await client.get_json("evt-1") == {"details": {"id": "evt-1"}}
    assert "sso_evt-1" in kv.values
    assert kv.requests[0].method == "POST"
    assert kv.requests[0].url.path == "/set/sso_evt-1"
    await client.aclose()


async def test_get_missing_key_returns_none():
    client = _client(FakeKV().transport())
    assert await client.get_json("nope") is None


async def test_get_accepts_object_result():
    def handler(request):
        return httpx.Response(200, json={"result": {"details": {"id": "x"}}})

    client = _client(httpx.MockTransport(handler))
    assert await client.get_json("x") == {"details": {"id": "x"}}


async def test_get_non_json_string_raises():
    def handler(request):
        return httpx.Response(200, json={"result": "not json"})

    client = _client(httpx.MockTransport(handler))
    with pytest.raises(StorageError):
        await client.get_json("x")


async def test_transient_errors_are_retried():
    kv = FakeKV()
    kv.fail_next = 2
    client = _client(kv.transport(), max_retries=2)

    assert await client.set_json("evt", {"a": 1}) is True
    assert len(kv.requests) == 3


async def test_retries_exhausted_raises_storage_error():
    kv = FakeKV()
    kv.fail_next = 10
    client = _client(kv.transport(), max_retries=1)

    with pytest.raises(StorageError) as exc_info:
        await client.set_json("evt", {"a": 1})
    assert exc_info.value.operation == "set"
    assert len(kv.requests) == 2


async def test_client_errors_are_not_retried():
    kv = FakeKV(token="right")
    client = _client(kv.transport(), token="wrong")

    with pytest.raises(StorageError):
        await client.get_json("evt")
    assert len(kv.requests) == 1


async def test_connection_errors_are_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={"result": "OK"})

    client = _client(httpx.MockTransport(handler))
    assert await client.set_json("evt", {}) is True
    assert len(calls) == 2


async def test_ping():
    kv = FakeKV()
    assert await _client(kv.transport()).ping() is True
    kv.fail_next = 10
    assert await _client(kv.transport(), max_retries=0).ping() is False
