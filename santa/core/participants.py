"""Participants & Pairings — immutable data model consumed and produced by the draw engine.

Invariants:
    - Participant is frozen: a draw never observes a participant changing under it
    - Participant.id is the only identity; names and emails may repeat
    - Exclusion groups compare case-insensitively; empty or missing group = no group
    - Pairing(giver, receiver) is ordered: giver buys for receiver

Design Decisions:
    - Frozen dataclasses over pydantic models: core stays free of API concerns;
      schemas/ converts at the HTTP boundary
    - PairingSet is a tuple: replaced wholesale by each draw, never edited in place
"""

from dataclasses import dataclass

from santa.core.domain_types import ParticipantId


@dataclass(frozen=True)
class Participant:
    """One person taking part in the exchange."""
    id: ParticipantId
    name: str
    email: str
    group: str | None = None
    department: str | None = None
    wishlist: str | None = None

    @property
    def group_key(self) -> str | None:
        """Normalized exclusion group, None when unset."""
        return self.group.lower() if self.group else None

    def shares_group_with(self, other: "Participant") -> bool:
        """True only when both have a group and the groups match."""
        mine, theirs = self.group_key, other.group_key
        return mine is not None and mine == theirs


@dataclass(frozen=True)
class Pairing:
    """giver → receiver."""
    giver: Participant
    receiver: Participant


PairingSet = tuple[Pairing, ...]
