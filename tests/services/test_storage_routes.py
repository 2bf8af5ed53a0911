"""Bundle storage routes — /api/save and /api/get response shapes."""

BUNDLE = {
    "details": {"id": "evt-1", "eventName": "Party", "organizerEmail": "a@x.com"},
    "participants": [{"id": "p1", "name": "Ana", "email": "ana@x.com"}],
    "pairings": [],
    "clientOnlyField": {"kept": True},
}


async def test_save_then_get(client):
    response = await client.post("/api/save", json=BUNDLE)
    assert response.status_code == 200
    assert response.json() == {"success": True, "mode": "server"}

    response = await client.get("/api/get", params={"id": "evt-1"})
    assert response.status_code == 200
    assert response.json() == BUNDLE


async def test_save_without_id_rejected(client):
    response = await client.post("/api/save", json={"details": {"eventName": "x"}})
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid data structure"}


async def test_save_non_object_rejected(client):
    response = await client.post("/api/save", json=["not", "a", "bundle"])
    assert response.status_code == 400
    assert response.json()["success"] is False


async def test_save_malformed_participants_rejected(client):
    payload = {"details": {"id": "evt-2"}, "participants": [{"name": "no id"}]}
    response = await client.post("/api/save", json=payload)
    assert response.status_code == 400


async def test_save_unusable_id_rejected(client):
    response = await client.post("/api/save", json={"details": {"id": "../"}})
    assert response.status_code == 400


async def test_get_without_id(client):
    response = await client.get("/api/get")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing ID"}


async def test_get_unknown(client):
    response = await client.get("/api/get", params={"id": "nope"})
    assert response.status_code == 404
    assert response.json() == {"error": "Event not found"}


async def test_get_corrupt_file(client, store):
    store.data_dir.mkdir(parents=True, exist_ok=True)
    (store.data_dir / "evt-9.json").write_text("{oops", encoding="utf-8")
    response = await client.get("/api/get", params={"id": "evt-9"})
    assert response.status_code == 500
    assert response.json() == {"error": "Data corruption"}


async def test_saved_bundle_visible_to_event_api(client):
    await client.post("/api/save", json=BUNDLE)
    response = await client.get("/api/v1/events/evt-1")
    assert response.status_code == 200
    assert response.json()["participants"][0]["name"] == "Ana"
