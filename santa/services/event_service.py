"""Event Service — imperative shell around the pure core: load bundle, apply, save.

Invariants:
    - Every mutation is load → new bundle → save; stored bundles are never patched in place
    - Any change to the participant list discards the stored pairings
    - A draw replaces the pairing set wholesale or leaves the bundle untouched
    - Draw failures become InsufficientParticipantsError / DrawExhaustedError here,
      not in the engine
    - Pairing contents are never logged

Design Decisions:
    - Service owns id generation (participants, events): core stays deterministic
    - Stale pairings (participants edited by a client that does not clear them)
      are detected with validate_pairing_set rather than trusted
"""

import logging
import random
from collections.abc import Sequence

from fastapi import Depends
from pydantic import ValidationError

from santa.config import get_settings
from santa.core.csv_import import parse_csv
from santa.core.domain_types import DrawFailure, ImportFormat, SaveMode
from santa.core.draw_engine import DrawResult, generate, validate_pairing_set
from santa.core.errors import (
    DrawExhaustedError,
    ErrorContext,
    InsufficientParticipantsError,
    InvalidTicketError,
    ResourceNotFoundError,
    StaleDrawError,
    StorageError,
)
from santa.core.event_ids import new_event_id, new_participant_id
from santa.core.participants import Participant
from santa.core.reveal import (
    RevealContext,
    build_mailto_link,
    compose_reveal_message,
    find_pairing,
)
from santa.core.ticket_codec import decode_ticket
from santa.infrastructure.event_store import EventStore, get_store
from santa.schemas.draw import RevealResponse
from santa.schemas.event import (
    EventBundle,
    EventCreate,
    EventDetails,
    PairingSchema,
    ParticipantSchema,
)
from santa.schemas.participant import ImportRequest, ParticipantCreate

logger = logging.getLogger(__name__)


def draw_or_raise(
    participants: Sequence[Participant],
    max_attempts: int,
    *,
    rng: random.Random | None = None,
    context: ErrorContext | None = None,
) -> DrawResult:
    """Run the engine and convert a failed DrawResult into a domain error."""
    result = generate(participants, rng=rng, max_attempts=max_attempts)
    if result.failure == DrawFailure.INSUFFICIENT_PARTICIPANTS:
        raise InsufficientParticipantsError(len(participants), context)
    if result.failure == DrawFailure.DRAW_EXHAUSTED:
        ctx = context or ErrorContext()
        ctx.attempts = result.attempts
        raise DrawExhaustedError(max_attempts, ctx)
    return result


class EventService:
    """Event operations for one request."""

    def __init__(self, store: EventStore, max_draw_attempts: int = 1000):
        self.store = store
        self.max_draw_attempts = max_draw_attempts

    # ─── Bundle I/O ──────────────────────────────────────────────

    async def get_event(self, event_id: str) -> EventBundle:
        data = await self.store.load(event_id)
        if data is None:
            raise ResourceNotFoundError(
                "Event", event_id, ErrorContext(event_id=event_id),
            )
        try:
            return EventBundle.model_validate(data)
        except ValidationError:
            logger.error("Stored bundle failed validation", extra={"event_id": event_id})
            raise StorageError("Data corruption", "load", ErrorContext(event_id=event_id))

    async def save_event(self, bundle: EventBundle) -> SaveMode:
        mode = await self.store.save(bundle.details.id, bundle.to_storage())
        logger.info(
            "Event saved",
            extra={
                "event_id": bundle.details.id,
                "participant_count": len(bundle.participants),
                "mode": mode.value,
            },
        )
        return mode

    async def create_event(self, details: EventCreate) -> tuple[EventBundle, SaveMode]:
        """Create an empty event. Generates the id when the client sent none."""
        fields = details.model_dump()
        fields["id"] = fields["id"] or new_event_id()
        bundle = EventBundle(details=EventDetails(**fields))
        mode = await self.save_event(bundle)
        return bundle, mode

    async def update_details(self, event_id: str, details: EventDetails) -> EventBundle:
        bundle = await self.get_event(event_id)
        fields = details.model_dump()
        fields["id"] = bundle.details.id
        updated = bundle.model_copy(update={"details": EventDetails(**fields)})
        await self.save_event(updated)
        return updated

    # ─── Participants ────────────────────────────────────────────

    async def add_participant(self, event_id: str, form: ParticipantCreate) -> EventBundle:
        bundle = await self.get_event(event_id)
        added = _participant_from_form(form)
        return await self._replace_participants(bundle, [*bundle.participants, added])

    async def remove_participant(self, event_id: str, participant_id: str) -> EventBundle:
        bundle = await self.get_event(event_id)
        remaining = [p for p in bundle.participants if p.id != participant_id]
        if len(remaining) == len(bundle.participants):
            raise ResourceNotFoundError(
                "Participant", participant_id,
                ErrorContext(event_id=event_id, participant_id=participant_id),
            )
        return await self._replace_participants(bundle, remaining)

    async def import_participants(
        self, event_id: str, request: ImportRequest,
    ) -> tuple[EventBundle, list[ParticipantSchema]]:
        """Bulk intake. A bad ticket raises; CSV lines that do not parse are skipped."""
        bundle = await self.get_event(event_id)
        if request.format == ImportFormat.TICKET:
            ticket = decode_ticket(request.text)
            if ticket is None:
                raise InvalidTicketError(ErrorContext(event_id=event_id))
            added = [ParticipantSchema(
                id=new_participant_id(), name=ticket.name, email=ticket.email,
                group=ticket.group, department=ticket.department,
                wishlist=ticket.wishlist,
            )]
        else:
            added = [
                ParticipantSchema(
                    id=new_participant_id(), name=d.name, email=d.email, group=d.group,
                )
                for d in parse_csv(request.text)
            ]
        if not added:
            return bundle, []
        updated = await self._replace_participants(bundle, [*bundle.participants, *added])
        return updated, added

    async def _replace_participants(
        self, bundle: EventBundle, participants: list[ParticipantSchema],
    ) -> EventBundle:
        updated = bundle.model_copy(update={"participants": participants, "pairings": []})
        await self.save_event(updated)
        return updated

    # ─── Draw & reveal ───────────────────────────────────────────

    async def run_draw(
        self, event_id: str, rng: random.Random | None = None,
    ) -> tuple[EventBundle, DrawResult]:
        bundle = await self.get_event(event_id)
        result = draw_or_raise(
            bundle.participants_domain(), self.max_draw_attempts,
            rng=rng, context=ErrorContext(event_id=event_id),
        )
        logger.info(
            "Draw completed",
            extra={
                "event_id": event_id,
                "participant_count": len(bundle.participants),
                "attempts": result.attempts,
            },
        )
        pairings = [PairingSchema.from_domain(p) for p in result.pairings]
        updated = bundle.model_copy(update={"pairings": pairings})
        await self.save_event(updated)
        return updated, result

    async def list_pairings(self, event_id: str) -> tuple[list[PairingSchema], bool]:
        """Admin master list plus whether it still matches the participants."""
        bundle = await self.get_event(event_id)
        return bundle.pairings, _is_stale(bundle)

    async def reveal(self, event_id: str, giver_id: str) -> RevealResponse:
        bundle = await self.get_event(event_id)
        if not bundle.pairings:
            raise ResourceNotFoundError(
                "Draw", event_id, ErrorContext(event_id=event_id),
            )
        if _is_stale(bundle):
            raise StaleDrawError(ErrorContext(event_id=event_id))

        pairing = find_pairing(bundle.pairings_domain(), giver_id)
        if pairing is None:
            raise ResourceNotFoundError(
                "Participant", giver_id,
                ErrorContext(event_id=event_id, participant_id=giver_id),
            )
        ctx = RevealContext(
            event_name=bundle.details.event_name,
            exchange_date=bundle.details.exchange_date,
            budget=bundle.details.budget,
            message=bundle.details.message,
        )
        return RevealResponse(
            giver=ParticipantSchema.from_domain(pairing.giver),
            receiver=ParticipantSchema.from_domain(pairing.receiver),
            message=compose_reveal_message(pairing, ctx),
            mailto=build_mailto_link(pairing, ctx),
        )


def _participant_from_form(form: ParticipantCreate) -> ParticipantSchema:
    return ParticipantSchema(id=new_participant_id(), **form.model_dump())


def _is_stale(bundle: EventBundle) -> bool:
    if not bundle.pairings:
        return False
    error = validate_pairing_set(bundle.participants_domain(), bundle.pairings_domain())
    return error is not None


def get_event_service(store: EventStore = Depends(get_store)) -> EventService:
    """FastAPI dependency — one service per request."""
    return EventService(store, max_draw_attempts=get_settings().max_draw_attempts)
