"""Ticket Schemas — join-page ticket encode/decode contracts."""

from pydantic import BaseModel, Field

from santa.core.ticket_codec import TicketData
from santa.schemas.participant import ParticipantCreate


class TicketResponse(BaseModel):
    ticket: str


class TicketDecodeRequest(BaseModel):
    ticket: str = Field(min_length=1, max_length=20_000)


def ticket_from_form(form: ParticipantCreate) -> TicketData:
    return TicketData(
        name=form.name, email=form.email, group=form.group,
        department=form.department, wishlist=form.wishlist,
    )


def form_from_ticket(ticket: TicketData) -> ParticipantCreate:
    return ParticipantCreate(
        name=ticket.name, email=ticket.email, group=ticket.group,
        department=ticket.department, wishlist=ticket.wishlist,
    )
