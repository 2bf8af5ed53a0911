"""Bundle Storage — whole-bundle save/get used by the browser client's autosave.

Invariants:
    - POST /api/save requires details.id; otherwise 400 {success: false}
    - Success body is {success: true, mode: "server" | "local"}
    - Storage failure on save returns 500 {success: false} so the client keeps
      its local copy
    - GET /api/get: 400 without id, 404 when unknown, 500 on corrupt data

Design Decisions:
    - Response shapes kept as the client expects them (not the SantaError envelope):
      the client branches on `success` / HTTP status only
    - Body parsed as a raw dict, then validated: a shape error must produce the
      {success: false} body rather than the generic 400 envelope
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from santa.core.errors import InvalidEventError, StorageError
from santa.infrastructure.event_store import EventStore, get_store
from santa.schemas.event import EventBundle

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["storage"])


def _invalid_structure() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid data structure"},
    )


@router.post("/save")
async def save_bundle(
    payload: Any = Body(None), store: EventStore = Depends(get_store),
):
    """Save a full event bundle."""
    details = payload.get("details") if isinstance(payload, dict) else None
    if not isinstance(details, dict) or not details.get("id"):
        return _invalid_structure()
    try:
        bundle = EventBundle.model_validate(payload)
    except ValidationError:
        return _invalid_structure()

    try:
        mode = await store.save(bundle.details.id, payload)
    except InvalidEventError:
        return _invalid_structure()
    except StorageError as e:
        logger.error(f"Server error during save: {e.message}", extra={"error_code": e.code})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": e.reason},
        )
    return {"success": True, "mode": mode.value}


@router.get("/get")
async def get_bundle(
    id: str | None = Query(None), store: EventStore = Depends(get_store),
):
    """Load a full event bundle by id."""
    if not id:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Missing ID"},
        )
    try:
        data = await store.load(id)
    except InvalidEventError:
        data = None
    except StorageError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": e.reason},
        )
    if data is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"error": "Event not found"},
        )
    return data
