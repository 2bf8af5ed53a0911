"""Event Identifiers — generation and storage-key sanitization.

Invariants:
    - sanitize_event_id keeps only ASCII letters, digits and '-'
    - A sanitized id is safe as a file name and as a KV key suffix
    - new_event_id / new_participant_id return UUID4 text
    - manage_url never doubles the slash between base URL and path
"""

import re
from uuid import uuid4

from santa.core.domain_types import EventId, ParticipantId

_UNSAFE_ID_CHARS = re.compile(r"[^a-z0-9-]", re.IGNORECASE)


def sanitize_event_id(raw: str) -> EventId:
    """Strip every character that is not [A-Za-z0-9-]. May return ''."""
    return EventId(_UNSAFE_ID_CHARS.sub("", raw))


def new_event_id() -> EventId:
    return EventId(str(uuid4()))


def new_participant_id() -> ParticipantId:
    return ParticipantId(str(uuid4()))


def manage_path(event_id: str) -> str:
    """Relative link the organizer keeps to reopen the dashboard."""
    return f"/?manage={event_id}"


def manage_url(base_url: str, event_id: str) -> str:
    """Absolute dashboard link: public base URL plus the manage path."""
    return base_url.rstrip("/") + manage_path(event_id)
