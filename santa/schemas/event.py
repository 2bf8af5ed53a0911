"""Event Schemas — Pydantic models for the persisted event bundle and its parts.

Invariants:
    - Wire format is camelCase (eventName, organizerEmail, ...) — the shape the
      browser client stores; Python attributes are snake_case
    - Unknown keys are ignored, so older/newer clients round-trip without 422s
    - to_domain()/from_domain() are the only bridge to core dataclasses

Design Decisions:
    - alias_generator=to_camel + populate_by_name: accept both spellings on input,
      always dump by_alias for storage
    - EventCreate tightens EventDetails (name and organizer email required) at
      the boundary; stored bundles stay lenient
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from santa.core.domain_types import ParticipantId
from santa.core.participants import Pairing, Participant


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class ParticipantSchema(_WireModel):
    """Participant as stored and transmitted."""
    id: str = Field(min_length=1)
    name: str
    email: str
    group: str | None = None
    department: str | None = None
    wishlist: str | None = None

    def to_domain(self) -> Participant:
        return Participant(
            id=ParticipantId(self.id), name=self.name, email=self.email,
            group=self.group, department=self.department, wishlist=self.wishlist,
        )

    @classmethod
    def from_domain(cls, p: Participant) -> "ParticipantSchema":
        return cls(
            id=p.id, name=p.name, email=p.email,
            group=p.group, department=p.department, wishlist=p.wishlist,
        )


class PairingSchema(_WireModel):
    giver: ParticipantSchema
    receiver: ParticipantSchema

    def to_domain(self) -> Pairing:
        return Pairing(giver=self.giver.to_domain(), receiver=self.receiver.to_domain())

    @classmethod
    def from_domain(cls, pairing: Pairing) -> "PairingSchema":
        return cls(
            giver=ParticipantSchema.from_domain(pairing.giver),
            receiver=ParticipantSchema.from_domain(pairing.receiver),
        )


class EventDetails(_WireModel):
    """Organizer-supplied event settings."""
    id: str = ""
    event_name: str = ""
    organizer_name: str | None = None
    organizer_email: str = ""
    budget: str = ""
    exchange_date: str = ""
    draw_date: str = ""
    message: str = ""


class EventCreate(EventDetails):
    """Event creation — name and organizer email must be present."""
    event_name: str = Field(min_length=1, max_length=200)
    organizer_email: str = Field(min_length=3, max_length=320)

    @field_validator("event_name", "organizer_email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v


class EventBundle(_WireModel):
    """Everything persisted for one event (FullEventData on the client)."""
    details: EventDetails
    participants: list[ParticipantSchema] = Field(default_factory=list)
    pairings: list[PairingSchema] = Field(default_factory=list)

    def participants_domain(self) -> list[Participant]:
        return [p.to_domain() for p in self.participants]

    def pairings_domain(self) -> list[Pairing]:
        return [p.to_domain() for p in self.pairings]

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class EventCreatedResponse(_WireModel):
    """New event plus the organizer's management links."""
    event: EventBundle
    manage_path: str
    manage_url: str
    manage_mailto: str
    mode: str
