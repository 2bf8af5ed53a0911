"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EventId and ParticipantId wrap opaque strings — never compare by name or email
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EventId = NewType("EventId", str)
ParticipantId = NewType("ParticipantId", str)


# ─── Enums ───────────────────────────────────────────────────────

class DrawFailure(str, Enum):
    """Why a draw returned no pairing set."""
    INSUFFICIENT_PARTICIPANTS = "insufficient_participants"
    DRAW_EXHAUSTED = "draw_exhausted"


class PairingViolation(str, Enum):
    """Constraint broken by a single giver → receiver candidate."""
    SELF_DRAW = "SELF_DRAW"
    SAME_GROUP = "SAME_GROUP"


class SaveMode(str, Enum):
    """Where a save landed, as reported to the client.

    LOCAL tells the client the server copy is ephemeral and it should keep
    its own (browser) copy.
    """
    SERVER = "server"
    LOCAL = "local"


class StorageBackend(str, Enum):
    """Active storage tier — reported by the health endpoint."""
    REDIS = "redis"
    EPHEMERAL_TMP = "ephemeral-tmp"
    DISK = "disk"


class ImportFormat(str, Enum):
    """Bulk participant intake formats."""
    CSV = "csv"
    TICKET = "ticket"
