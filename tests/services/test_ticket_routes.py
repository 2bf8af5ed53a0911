"""Ticket routes — join-page code generation and decoding."""

ZOE_TICKET = (
    "eyJuIjoiWm/DqyIsImUiOiJ6b2VAeC5jb20iLCJnIjoiRmFtw61saWEiLCJ3IjoiTGl2cm9zIPCfk5oifQ=="
)


async def test_create_ticket_matches_browser_encoding(client):
    response = await client.post(
        "/api/v1/tickets",
        json={"name": "Zoë", "email": "zoe@x.com", "group": "Família", "wishlist": "Livros 📚"},
    )
    assert response.status_code == 200
    assert response.json() == {"ticket": ZOE_TICKET}


async def test_decode_ticket(client):
    response = await client.post("/api/v1/tickets/decode", json={"ticket": ZOE_TICKET})
    assert response.status_code == 200
    assert response.json() == {
        "name": "Zoë", "email": "zoe@x.com", "group": "Família",
        "department": None, "wishlist": "Livros 📚",
    }


async def test_decode_invalid_ticket(client):
    response = await client.post("/api/v1/tickets/decode", json={"ticket": "not a ticket"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TICKET"


async def test_create_ticket_requires_email(client):
    response = await client.post("/api/v1/tickets", json={"name": "Ana", "email": "  "})
    assert response.status_code == 400
