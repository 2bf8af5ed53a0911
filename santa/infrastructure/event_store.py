"""Event Store — tiered persistence of event bundles keyed by event id.

Invariants:
    - Keys are sanitized ([A-Za-z0-9-] only) before touching any tier
    - Save order: remote KV (when configured) → JSON file in data_dir
    - Load order: remote KV (when configured) → JSON file in data_dir
    - A remote failure degrades to the file tier; it never loses the save
    - Save reports SaveMode.LOCAL when the file tier is ephemeral (serverless /tmp),
      telling the client to keep its own copy
    - Corrupt file contents raise StorageError, a missing event returns None

Design Decisions:
    - Singleton event_store initialized on startup: FastAPI lifespan manages lifecycle
      (no global import side effects)
    - File I/O via asyncio.to_thread: keeps the event loop free without a new dependency
    - Write to a per-write temp file then os.replace: readers never see a
      half-written bundle, concurrent saves of one event end last-writer-wins
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from uuid import uuid4

from santa.config import Settings
from santa.core.domain_types import EventId, SaveMode, StorageBackend
from santa.core.errors import ErrorContext, InvalidEventError, StorageError
from santa.core.event_ids import sanitize_event_id
from santa.infrastructure.kv_client import ResilientKVClient

logger = logging.getLogger(__name__)


class EventStore:
    """Loads and saves raw event bundles (JSON dicts) across storage tiers."""

    def __init__(
        self,
        data_dir: Path,
        kv: ResilientKVClient | None = None,
        ephemeral: bool = False,
    ):
        self.data_dir = Path(data_dir)
        self.kv = kv
        self.ephemeral = ephemeral

    @property
    def backend(self) -> StorageBackend:
        if self.kv is not None:
            return StorageBackend.REDIS
        if self.ephemeral:
            return StorageBackend.EPHEMERAL_TMP
        return StorageBackend.DISK

    @property
    def file_mode(self) -> SaveMode:
        return SaveMode.LOCAL if self.ephemeral else SaveMode.SERVER

    async def save(self, event_id: str, data: dict) -> SaveMode:
        """Persist a bundle. Returns where it landed."""
        key = self._key(event_id)
        if self.kv is not None:
            if await self._save_remote(key, data):
                return SaveMode.SERVER
        await asyncio.to_thread(self._write_file, key, data)
        mode = self.file_mode
        logger.info(
            "Event saved to file tier",
            extra={"event_id": key, "storage": "file", "mode": mode.value},
        )
        return mode

    async def load(self, event_id: str) -> dict | None:
        """Fetch a bundle, or None when no tier has it."""
        key = self._key(event_id)
        if self.kv is not None:
            try:
                data = await self.kv.get_json(key)
            except StorageError as e:
                logger.warning(
                    f"KV load failed, trying file tier: {e.message}",
                    extra={"event_id": key, "error_code": e.code},
                )
            else:
                if data is not None:
                    return data
        return await asyncio.to_thread(self._read_file, key)

    async def health_check(self) -> bool:
        """Readiness: remote store answers, or the data dir is writable."""
        if self.kv is not None:
            return await self.kv.ping()
        return await asyncio.to_thread(self._data_dir_writable)

    async def close(self) -> None:
        if self.kv is not None:
            await self.kv.aclose()

    async def _save_remote(self, key: EventId, data: dict) -> bool:
        try:
            ok = await self.kv.set_json(key, data)
        except StorageError as e:
            logger.warning(
                f"KV save failed, falling back to file tier: {e.message}",
                extra={"event_id": key, "error_code": e.code},
            )
            return False
        if not ok:
            logger.warning(
                "KV save not acknowledged, falling back to file tier",
                extra={"event_id": key},
            )
        return ok

    def _key(self, event_id: str) -> EventId:
        key = sanitize_event_id(event_id)
        if not key:
            raise InvalidEventError("Event id is empty after sanitization")
        return key

    def _path(self, key: EventId) -> Path:
        return self.data_dir / f"{key}.json"

    def _write_file(self, key: EventId, data: dict) -> None:
        path = self._path(key)
        # One temp file per write: overlapping saves of one event must not share it
        tmp = self.data_dir / f"{key}.{uuid4().hex}.tmp"
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            logger.error(f"Error saving file {path}: {e}")
            raise StorageError("could not write event file", "save",
                               ErrorContext(event_id=key))
        finally:
            tmp.unlink(missing_ok=True)

    def _read_file(self, key: EventId) -> dict | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Error reading file {path}: {e}")
            raise StorageError("Read error", "load", ErrorContext(event_id=key))
        try:
            data = json.loads(raw)
        except ValueError:
            raise StorageError("Data corruption", "load", ErrorContext(event_id=key))
        if not isinstance(data, dict):
            raise StorageError("Data corruption", "load", ErrorContext(event_id=key))
        return data

    def _data_dir_writable(self) -> bool:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Data dir unavailable: {e}")
            return False
        return os.access(self.data_dir, os.W_OK)


def build_event_store(settings: Settings) -> EventStore:
    kv = None
    if settings.kv_enabled:
        kv = ResilientKVClient(
            settings.kv_rest_api_url,
            settings.kv_rest_api_token,
            key_prefix=settings.kv_key_prefix,
            timeout_seconds=settings.kv_timeout_seconds,
            max_retries=settings.kv_max_retries,
            base_delay_ms=settings.kv_base_delay_ms,
            max_delay_ms=settings.kv_max_delay_ms,
        )
    return EventStore(
        settings.effective_data_dir, kv=kv, ephemeral=settings.vercel,
    )


# Singleton (initialized on startup)
event_store: EventStore | None = None


def init_store(settings: Settings) -> EventStore:
    global event_store
    event_store = build_event_store(settings)
    return event_store


async def close_store() -> None:
    global event_store
    if event_store is not None:
        await event_store.close()
        event_store = None


def get_store() -> EventStore:
    """FastAPI dependency for the event store."""
    if event_store is None:
        raise RuntimeError("Event store not initialized")
    return event_store
