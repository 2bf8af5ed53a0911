"""Event Store — tiered persistence and fallback behavior.

Tests cover:
    - file tier round trip, save modes (server vs local) and backend labels
    - id sanitization keeps files inside data_dir
    - corrupt files → StorageError("Data corruption")
    - concurrent saves of one event all land; no temp files left behind
    - remote tier preferred; remote failure or miss falls back to files
"""

import asyncio
import json

import pytest

from santa.config import Settings
from santa.core.domain_types import SaveMode, StorageBackend
from santa.core.errors import InvalidEventError, StorageError
from santa.infrastructure.event_store import EventStore, build_event_store
from santa.infrastructure.kv_client import ResilientKVClient
from tests.infrastructure.fake_kv import FakeKV

BUNDLE = {"details": {"id": "evt-1", "eventName": "Party"}, "participants": [], "pairings": []}


def _kv_store(tmp_path, kv: FakeKV) -> EventStore:
    client = ResilientKVClient(
        "https://kv.test", kv.token, max_retries=0, base_delay_ms=0,
        transport=kv.transport(),
    )
    return EventStore(tmp_path, kv=client)


# ─── File tier ───────────────────────────────────────────────────

async def test_file_round_trip(tmp_path):
    store = EventStore(tmp_path)

    mode = await store.save("evt-1", BUNDLE)

    assert mode == SaveMode.SERVER
    assert await store.load("evt-1") == BUNDLE
    assert (tmp_path / "evt-1.json").exists()


async def test_ephemeral_file_tier_reports_local(tmp_path):
    store = EventStore(tmp_path, ephemeral=True)
    assert await store.save("evt-1", BUNDLE) == SaveMode.LOCAL
    assert store.backend == StorageBackend.EPHEMERAL_TMP


async def test_missing_event_returns_none(tmp_path):
    assert await EventStore(tmp_path).load("unknown") is None


async def test_creates_data_dir_on_first_save(tmp_path):
    store = EventStore(tmp_path / "nested" / "data")
    await store.save("evt-1", BUNDLE)
    assert (tmp_path / "nested" / "data" / "evt-1.json").exists()


async def test_ids_are_sanitized(tmp_path):
    store = EventStore(tmp_path / "data")
    await store.save("../evil", BUNDLE)
    assert (tmp_path / "data" / "evil.json").exists()
    assert await store.load("evil") == BUNDLE


async def test_empty_id_after_sanitization_is_rejected(tmp_path):
    with pytest.raises(InvalidEventError):
        await EventStore(tmp_path).save("../", BUNDLE)


async def test_corrupt_file_raises(tmp_path):
    (tmp_path / "evt-1.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(StorageError) as exc_info:
        await EventStore(tmp_path).load("evt-1")
    assert exc_info.value.reason == "Data corruption"


async def test_concurrent_saves_of_one_event_all_succeed(tmp_path):
    store = EventStore(tmp_path)
    bundles = [
        {**BUNDLE, "participants": [{"id": f"p{n}", "name": "x" * 5000, "email": "x@x.com"}]}
        for n in range(8)
    ]

    for _ in range(10):
        modes = await asyncio.gather(*(store.save("evt-1", b) for b in bundles))
        assert modes == [SaveMode.SERVER] * len(bundles)

    assert await store.load("evt-1") in bundles
    assert [p.name for p in tmp_path.iterdir()] == ["evt-1.json"]


async def test_failed_replace_leaves_no_temp_file(tmp_path, monkeypatch):
    def refuse(src, dst):
        raise PermissionError("read-only")

    monkeypatch.setattr("santa.infrastructure.event_store.os.replace", refuse)
    with pytest.raises(StorageError):
        await EventStore(tmp_path).save("evt-1", BUNDLE)
    assert list(tmp_path.iterdir()) == []


async def test_file_health_check(tmp_path):
    assert await EventStore(tmp_path).health_check() is True


# ─── Remote tier ─────────────────────────────────────────────────

async def test_remote_tier_preferred(tmp_path):
    kv = FakeKV()
    store = _kv_store(tmp_path, kv)

    assert await store.save("evt-1", BUNDLE) == SaveMode.SERVER
    assert json.loads(kv.values["sso_evt-1"]) == BUNDLE
    assert not (tmp_path / "evt-1.json").exists()
    assert await store.load("evt-1") == BUNDLE
    assert store.backend == StorageBackend.REDIS


async def test_remote_failure_falls_back_to_file(tmp_path):
    kv = FakeKV()
    kv.fail_next = 100
    store = _kv_store(tmp_path, kv)

    assert await store.save("evt-1", BUNDLE) == SaveMode.SERVER
    assert (tmp_path / "evt-1.json").exists()
    assert await store.load("evt-1") == BUNDLE


async def test_remote_miss_reads_file(tmp_path):
    await EventStore(tmp_path).save("evt-1", BUNDLE)
    store = _kv_store(tmp_path, FakeKV())
    assert await store.load("evt-1") == BUNDLE


async def test_remote_health_check_uses_ping(tmp_path):
    kv = FakeKV()
    store = _kv_store(tmp_path, kv)
    assert await store.health_check() is True
    kv.fail_next = 10
    assert await store.health_check() is False
    await store.close()


# ─── Construction from settings ──────────────────────────────────

def test_build_from_settings_without_kv(tmp_path):
    settings = Settings(_env_file=None, data_dir=tmp_path, kv_rest_api_url=None)
    store = build_event_store(settings)
    assert store.kv is None
    assert store.backend == StorageBackend.DISK


def test_build_from_settings_with_kv(tmp_path):
    settings = Settings(
        _env_file=None, data_dir=tmp_path,
        kv_rest_api_url="https://kv.test/", kv_rest_api_token="t",
    )
    assert settings.kv_rest_api_url == "https://kv.test"
    store = build_event_store(settings)
    assert store.kv is not None
    assert store.backend == StorageBackend.REDIS
