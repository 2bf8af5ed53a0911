"""Reveal — per-giver lookup, the message each giver receives, and the organizer link mail.

Invariants:
    - find_pairing matches on giver id only; never on name or email
    - compose_reveal_message mentions only the giver's own receiver
    - Wishlist line present only when the receiver has a wishlist

Design Decisions:
    - Plain-text message (not HTML): the same text goes into copy-to-clipboard
      and into the mailto body
    - mailto encoding mirrors encodeURIComponent so links match what a browser builds
"""

from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import quote

from santa.core.participants import Pairing

_URI_COMPONENT_SAFE = "!*'()"


@dataclass(frozen=True)
class RevealContext:
    """Event fields shown alongside an assignment."""
    event_name: str
    exchange_date: str = ""
    budget: str = ""
    message: str = ""


def find_pairing(pairings: Sequence[Pairing], giver_id: str) -> Pairing | None:
    for pairing in pairings:
        if pairing.giver.id == giver_id:
            return pairing
    return None


def compose_reveal_message(pairing: Pairing, ctx: RevealContext) -> str:
    """Build the "you are the Secret Santa for ..." text for one giver."""
    lines = (
        f"Ho ho ho {pairing.giver.name}! 🎅\n\n"
        f"You are the Secret Santa for: {pairing.receiver.name}!\n\n"
        f"Event: {ctx.event_name}\n"
        f"Date: {ctx.exchange_date}\n"
        f"Budget: {ctx.budget}\n\n"
    )
    if pairing.receiver.wishlist:
        lines += f"They wished for: {pairing.receiver.wishlist}\n\n"
    return lines + ctx.message


def build_mailto_link(pairing: Pairing, ctx: RevealContext) -> str:
    subject = quote(f"Secret Santa: {ctx.event_name}", safe=_URI_COMPONENT_SAFE)
    body = quote(compose_reveal_message(pairing, ctx), safe=_URI_COMPONENT_SAFE)
    return f"mailto:{pairing.giver.email}?subject={subject}&body={body}"


def build_manage_mailto(event_name: str, organizer_email: str, url: str) -> str:
    """Mail the organizer their management link so they can reopen the event."""
    subject = quote(f"Secret Santa Management Link: {event_name}", safe=_URI_COMPONENT_SAFE)
    body = quote(
        f'Hi!\n\nHere is the link to manage your Secret Santa event "{event_name}".'
        f"\n\nManagement Link: {url}\n\nKeep this link safe!",
        safe=_URI_COMPONENT_SAFE,
    )
    return f"mailto:{organizer_email}?subject={subject}&body={body}"
