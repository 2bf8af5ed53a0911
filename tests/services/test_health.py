"""Health routes — liveness, legacy aliases, readiness."""

import pytest

import santa.infrastructure.event_store as store_module


@pytest.mark.parametrize("path", ["/health", "/api/health", "/api/version", "/api/v1/health/"])
async def test_liveness_reports_version_and_storage(client, path):
    response = await client.get(path)
    assert response.status_code == 200
    assert response.json() == {"status": "OK", "version": "1.1.0", "storage": "disk"}


async def test_ready_with_writable_store(client):
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"storage": "disk"}}


async def test_not_ready_without_store(client):
    store_module.event_store = None
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["reason"] == "storage_unavailable"
