"""Ticket Codec — reversible encoding of one participant's join form into a shareable code.

Invariants:
    - encode_ticket output is standard Base64 of compact UTF-8 JSON with keys n/e/g/d/w
    - decode_ticket(encode_ticket(t)) == t for any ticket with non-empty name and email
    - decode_ticket never raises: any malformed code returns None
    - Optional fields that are empty strings decode to None

Design Decisions:
    - Byte-compatible with browser-made tickets (btoa over UTF-8 JSON), so codes
      generated by an existing join page import unchanged
    - Short keys keep the pasted code small
"""

import base64
import binascii
import json
from dataclasses import dataclass

_OPTIONAL_KEYS = (("g", "group"), ("d", "department"), ("w", "wishlist"))


@dataclass(frozen=True)
class TicketData:
    """Fields a participant fills in on the join page."""
    name: str
    email: str
    group: str | None = None
    department: str | None = None
    wishlist: str | None = None

    def to_payload(self) -> dict:
        payload = {"n": self.name, "e": self.email}
        for key, attr in _OPTIONAL_KEYS:
            value = getattr(self, attr)
            if value:
                payload[key] = value
        return payload


def encode_ticket(ticket: TicketData) -> str:
    """Serialize a ticket into an opaque Base64 code."""
    raw = json.dumps(ticket.to_payload(), ensure_ascii=False, separators=(",", ":"))
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def decode_ticket(code: str) -> TicketData | None:
    """Parse a ticket code. Returns None when the code is not a valid ticket."""
    cleaned = "".join(code.split())
    if not cleaned:
        return None
    cleaned += "=" * (-len(cleaned) % 4)
    try:
        raw = base64.b64decode(cleaned, validate=True).decode("utf-8")
        payload = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        return None
    return _ticket_from_payload(payload)


def _ticket_from_payload(payload: object) -> TicketData | None:
    if not isinstance(payload, dict):
        return None
    name, email = payload.get("n"), payload.get("e")
    if not isinstance(name, str) or not isinstance(email, str):
        return None
    if not name.strip() or not email.strip():
        return None

    optional = {}
    for key, attr in _OPTIONAL_KEYS:
        value = payload.get(key)
        if value is not None and not isinstance(value, str):
            return None
        optional[attr] = value or None
    return TicketData(name=name.strip(), email=email.strip(), **optional)
