"""Domain Types — verifies identity wrappers and enum wire values.

Tests:
    - NewType wrappers exist and are callable
    - Enums serialize to the strings clients and the health endpoint expect
"""

import json

from santa.core.domain_types import (
    EventId, ParticipantId,
    DrawFailure, PairingViolation, SaveMode, StorageBackend, ImportFormat,
)


def test_identity_types_wrap_str():
    assert EventId("evt-1") == "evt-1"
    assert ParticipantId("p-1") == "p-1"


def test_save_mode_values():
    assert {m.value for m in SaveMode} == {"server", "local"}


def test_storage_backend_values():
    assert {b.value for b in StorageBackend} == {"redis", "ephemeral-tmp", "disk"}


def test_draw_failure_has_two_members():
    assert len(DrawFailure) == 2


def test_pairing_violations():
    assert PairingViolation.SELF_DRAW.value == "SELF_DRAW"
    assert PairingViolation.SAME_GROUP.value == "SAME_GROUP"


def test_enums_serialize_as_strings():
    payload = json.dumps({"mode": SaveMode.LOCAL, "format": ImportFormat.CSV})
    assert payload == '{"mode": "local", "format": "csv"}'
