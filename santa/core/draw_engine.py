"""Draw Engine — constrained random pairing by rejection sampling over full shuffles.

Invariants:
    - All functions are PURE: no IO, no async, no mutation of the input sequence
    - generate() never raises for a bad draw: failures are returned in DrawResult
    - Fewer than 2 participants fails before any attempt (attempts == 0)
    - An accepted PairingSet is a permutation with no self-draw and no same-group draw
    - At most max_attempts shuffles; exhaustion is reported the same way whether
      no solution exists or sampling was unlucky

Design Decisions:
    - Rejection sampling over full permutations: correct for any exclusion-group
      shape, including shapes with no valid assignment at all
    - random.Random.shuffle (Fisher-Yates) over comparator-sort shuffles: every
      permutation equally likely per attempt
    - rng injectable: tests seed it, production uses a fresh Random per call so
      concurrent callers share no state
    - check_pairing / validate_pairing_set return error dicts (not exceptions),
      same shape as the other pure validators
"""

import random
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from santa.core.domain_types import DrawFailure, PairingViolation
from santa.core.participants import Pairing, PairingSet, Participant


MAX_DRAW_ATTEMPTS: int = 1000
MIN_PARTICIPANTS: int = 2


@dataclass(frozen=True)
class DrawResult:
    """Outcome of one generate() call: pairings XOR failure."""
    pairings: PairingSet | None = None
    failure: DrawFailure | None = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.pairings is not None


def check_pairing(giver: Participant, receiver: Participant) -> dict | None:
    """Validate one candidate pair. Self-draw is checked before group."""
    if giver.id == receiver.id:
        return {
            "status": "error",
            "error_code": PairingViolation.SELF_DRAW.value,
            "giver_id": giver.id,
        }
    if giver.shares_group_with(receiver):
        return {
            "status": "error",
            "error_code": PairingViolation.SAME_GROUP.value,
            "giver_id": giver.id,
            "receiver_id": receiver.id,
            "group": giver.group_key,
        }
    return None


def _build_candidate(
    participants: Sequence[Participant], shuffled: Sequence[Participant],
) -> PairingSet | None:
    """Pair original[i] with shuffled[i]; first violation rejects the whole candidate."""
    pairings = []
    for giver, receiver in zip(participants, shuffled):
        if check_pairing(giver, receiver) is not None:
            return None
        pairings.append(Pairing(giver=giver, receiver=receiver))
    return tuple(pairings)


def generate(
    participants: Sequence[Participant],
    *,
    rng: random.Random | None = None,
    max_attempts: int = MAX_DRAW_ATTEMPTS,
) -> DrawResult:
    """Draw a giver → receiver assignment honoring self and group exclusions."""
    if len(participants) < MIN_PARTICIPANTS:
        return DrawResult(failure=DrawFailure.INSUFFICIENT_PARTICIPANTS)

    rng = rng or random.Random()
    original = tuple(participants)

    for attempt in range(1, max_attempts + 1):
        shuffled = list(original)
        rng.shuffle(shuffled)
        candidate = _build_candidate(original, shuffled)
        if candidate is not None:
            return DrawResult(pairings=candidate, attempts=attempt)

    return DrawResult(failure=DrawFailure.DRAW_EXHAUSTED, attempts=max_attempts)


def validate_pairing_set(
    participants: Sequence[Participant], pairings: Sequence[Pairing],
) -> dict | None:
    """Check that pairings form a valid draw over exactly these participants.

    Returns the first problem found as an error dict, or None when every
    participant gives once, receives once, and every pair passes check_pairing.
    """
    expected = {p.id for p in participants}
    givers = Counter(p.giver.id for p in pairings)
    receivers = Counter(p.receiver.id for p in pairings)

    missing_givers = expected - givers.keys()
    missing_receivers = expected - receivers.keys()
    unknown = (givers.keys() | receivers.keys()) - expected

    issues = []
    if missing_givers:
        issues.append(f"missing givers: {sorted(missing_givers)}")
    if missing_receivers:
        issues.append(f"missing receivers: {sorted(missing_receivers)}")
    if unknown:
        issues.append(f"unknown participants: {sorted(unknown)}")
    if any(n > 1 for n in givers.values()):
        issues.append("duplicate givers")
    if any(n > 1 for n in receivers.values()):
        issues.append("duplicate receivers")
    if issues:
        return {
            "status": "error",
            "error_code": "NOT_A_PERMUTATION",
            "message": "; ".join(issues),
        }

    for pairing in pairings:
        error = check_pairing(pairing.giver, pairing.receiver)
        if error is not None:
            return error
    return None
