"""Stateless Draw — run the pairing engine over a posted participant list.

Invariants:
    - Nothing is persisted; the same input may yield a different valid draw each call
    - < 2 participants → 422 INSUFFICIENT_PARTICIPANTS; unsatisfiable → 422 DRAW_EXHAUSTED
"""

from fastapi import APIRouter

from santa.config import get_settings
from santa.schemas.draw import DrawRequest, DrawResponse
from santa.schemas.event import PairingSchema
from santa.services.event_service import draw_or_raise

router = APIRouter(prefix="/api/v1/draw", tags=["draw"])


@router.post("", response_model=DrawResponse)
async def draw(body: DrawRequest):
    participants = [p.to_domain() for p in body.participants]
    result = draw_or_raise(participants, get_settings().max_draw_attempts)
    return DrawResponse(
        pairings=[PairingSchema.from_domain(p) for p in result.pairings],
        attempts=result.attempts,
    )
