"""Draw & Reveal Schemas — request/response contracts for pairing endpoints."""

from pydantic import BaseModel, Field

from santa.schemas.event import PairingSchema, ParticipantSchema


class DrawRequest(BaseModel):
    """Stateless draw over a posted participant list."""
    participants: list[ParticipantSchema] = Field(max_length=5000)


class DrawResponse(BaseModel):
    pairings: list[PairingSchema]
    attempts: int


class PairingListResponse(BaseModel):
    """Admin master list. stale=True when participants changed after the draw."""
    pairings: list[PairingSchema]
    stale: bool


class RevealResponse(BaseModel):
    giver: ParticipantSchema
    receiver: ParticipantSchema
    message: str
    mailto: str
