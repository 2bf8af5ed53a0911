"""Health & Readiness Probes — liveness, version, and storage-tier reporting.

Invariants:
    - Liveness endpoints always return 200 if the process is up
    - GET /api/v1/health/ready returns 503 if the active store is unreachable
    - storage is one of redis / ephemeral-tmp / disk

Design Decisions:
    - /health, /api/health and /api/version kept as aliases: existing clients
      poll them for the version and storage mode
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from santa.config import get_settings
from santa.core.domain_types import StorageBackend
import santa.infrastructure.event_store as store_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])
legacy_router = APIRouter(tags=["health"])


def _storage_label() -> str:
    if store_module.event_store is not None:
        return store_module.event_store.backend.value
    settings = get_settings()
    if settings.kv_enabled:
        return StorageBackend.REDIS.value
    return (
        StorageBackend.EPHEMERAL_TMP.value if settings.vercel
        else StorageBackend.DISK.value
    )


def _liveness() -> dict:
    return {
        "status": "OK",
        "version": get_settings().app_version,
        "storage": _storage_label(),
    }


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return _liveness()


@legacy_router.get("/health")
@legacy_router.get("/api/health")
@legacy_router.get("/api/version")
async def legacy_health_check():
    """Version check used by existing clients."""
    return _liveness()


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes storage connectivity."""
    store = store_module.event_store
    store_ok = await store.health_check() if store else False
    if not store_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable",
            },
        )
    return {"status": "ready", "checks": {"storage": store.backend.value}}
