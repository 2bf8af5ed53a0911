"""Event Routes — create events, manage participants, draw, and reveal.

Invariants:
    - Routes never contain business logic (delegate to EventService)
    - Unknown event / participant → 404 via ResourceNotFoundError
    - Draw failures → 422 (INSUFFICIENT_PARTICIPANTS / DRAW_EXHAUSTED)
    - Reveal returns one giver's assignment only; the full list lives at /pairings
"""

import logging

from fastapi import APIRouter, Depends, status

from santa.config import get_settings
from santa.core.event_ids import manage_path, manage_url
from santa.core.reveal import build_manage_mailto
from santa.schemas.draw import PairingListResponse, RevealResponse
from santa.schemas.event import EventBundle, EventCreate, EventCreatedResponse, EventDetails
from santa.schemas.participant import ImportRequest, ParticipantCreate
from santa.services.event_service import EventService, get_event_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.post(
    "", response_model=EventCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_event(
    body: EventCreate, service: EventService = Depends(get_event_service),
):
    """Create a new gift-exchange event."""
    bundle, mode = await service.create_event(body)
    details = bundle.details
    url = manage_url(get_settings().public_base_url, details.id)
    return EventCreatedResponse(
        event=bundle,
        manage_path=manage_path(details.id),
        manage_url=url,
        manage_mailto=build_manage_mailto(details.event_name, details.organizer_email, url),
        mode=mode.value,
    )


@router.get("/{event_id}", response_model=EventBundle)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    return await service.get_event(event_id)


@router.put(
    "/{event_id}/details", response_model=EventBundle,
)
async def update_details(
    event_id: str,
    body: EventDetails,
    service: EventService = Depends(get_event_service),
):
    """Replace event details. The event id cannot change."""
    return await service.update_details(event_id, body)


@router.post(
    "/{event_id}/participants", response_model=EventBundle,
    status_code=status.HTTP_201_CREATED,
)
async def add_participant(
    event_id: str,
    body: ParticipantCreate,
    service: EventService = Depends(get_event_service),
):
    return await service.add_participant(event_id, body)


@router.delete(
    "/{event_id}/participants/{participant_id}", response_model=EventBundle,
)
async def remove_participant(
    event_id: str,
    participant_id: str,
    service: EventService = Depends(get_event_service),
):
    return await service.remove_participant(event_id, participant_id)


@router.post("/{event_id}/participants/import")
async def import_participants(
    event_id: str,
    body: ImportRequest,
    service: EventService = Depends(get_event_service),
):
    """Bulk intake from pasted CSV or a single ticket code."""
    bundle, added = await service.import_participants(event_id, body)
    return {
        "imported": len(added),
        "event": bundle.model_dump(by_alias=True, mode="json"),
    }


@router.post("/{event_id}/draw")
async def run_draw(event_id: str, service: EventService = Depends(get_event_service)):
    """Run the draw and store the resulting pairings."""
    bundle, result = await service.run_draw(event_id)
    return {
        "attempts": result.attempts,
        "event": bundle.model_dump(by_alias=True, mode="json"),
    }


@router.get("/{event_id}/pairings", response_model=PairingListResponse)
async def list_pairings(event_id: str, service: EventService = Depends(get_event_service)):
    """Organizer's master list."""
    pairings, stale = await service.list_pairings(event_id)
    return PairingListResponse(pairings=pairings, stale=stale)


@router.get("/{event_id}/reveal/{giver_id}", response_model=RevealResponse)
async def reveal(
    event_id: str, giver_id: str, service: EventService = Depends(get_event_service),
):
    """One giver's assignment and the message to send them."""
    return await service.reveal(event_id, giver_id)
