"""Ticket Routes — join-page ticket generation and decoding.

Invariants:
    - POST /api/v1/tickets requires name and email (ParticipantCreate)
    - Undecodable tickets → 400 INVALID_TICKET
"""

from fastapi import APIRouter
from pydantic import ValidationError

from santa.core.errors import InvalidTicketError
from santa.core.ticket_codec import decode_ticket, encode_ticket
from santa.schemas.participant import ParticipantCreate
from santa.schemas.ticket import (
    TicketDecodeRequest,
    TicketResponse,
    form_from_ticket,
    ticket_from_form,
)

router = APIRouter(prefix="/api/v1/tickets", tags=["tickets"])


@router.post("", response_model=TicketResponse)
async def create_ticket(body: ParticipantCreate):
    """Encode a join form into a code the participant sends to the organizer."""
    return TicketResponse(ticket=encode_ticket(ticket_from_form(body)))


@router.post("/decode", response_model=ParticipantCreate)
async def decode(body: TicketDecodeRequest):
    ticket = decode_ticket(body.ticket)
    if ticket is None:
        raise InvalidTicketError()
    try:
        return form_from_ticket(ticket)
    except ValidationError:
        raise InvalidTicketError()
