"""Event schemas — camelCase wire format and boundary validation."""

import pytest
from pydantic import ValidationError

from santa.core.domain_types import ImportFormat
from santa.schemas.event import EventBundle, EventCreate, ParticipantSchema
from santa.schemas.participant import ImportRequest, ParticipantCreate

STORED = {
    "details": {
        "id": "evt-1", "eventName": "Party", "organizerName": "Bea",
        "organizerEmail": "bea@x.com", "budget": "20", "exchangeDate": "2026-12-20",
        "drawDate": "2026-12-01", "message": "Hi",
    },
    "participants": [
        {"id": "a", "name": "Ana", "email": "ana@x.com", "group": "fam"},
        {"id": "b", "name": "Bo", "email": "bo@x.com"},
    ],
    "pairings": [],
}


def test_bundle_reads_camel_case_and_dumps_it_back():
    bundle = EventBundle.model_validate(STORED)
    assert bundle.details.event_name == "Party"
    assert bundle.details.exchange_date == "2026-12-20"
    stored = bundle.to_storage()
    assert stored["details"]["organizerEmail"] == "bea@x.com"
    assert stored["details"]["drawDate"] == "2026-12-01"
    assert stored["participants"][1]["group"] is None


def test_bundle_ignores_unknown_keys():
    bundle = EventBundle.model_validate({**STORED, "uiState": {"tab": 2}})
    assert "uiState" not in bundle.to_storage()


def test_bundle_defaults_for_minimal_payload():
    bundle = EventBundle.model_validate({"details": {"id": "x"}})
    assert bundle.participants == [] and bundle.pairings == []
    assert bundle.details.organizer_name is None


def test_participant_to_domain_preserves_fields():
    schema = ParticipantSchema.model_validate(STORED["participants"][0])
    participant = schema.to_domain()
    assert participant.group_key == "fam"
    assert ParticipantSchema.from_domain(participant) == schema


def test_participant_requires_id():
    with pytest.raises(ValidationError):
        ParticipantSchema(id="", name="x", email="x@x.com")


def test_event_create_strips_and_requires_name():
    created = EventCreate(event_name="  Party ", organizer_email=" a@x.com ")
    assert created.event_name == "Party"
    assert created.organizer_email == "a@x.com"
    with pytest.raises(ValidationError):
        EventCreate(event_name="   ", organizer_email="a@x.com")


def test_participant_create_blank_optionals_become_none():
    form = ParticipantCreate(name=" Ana ", email="ana@x.com", group="  ", wishlist="")
    assert form.name == "Ana"
    assert form.group is None
    assert form.wishlist is None


def test_import_request_validates_format():
    assert ImportRequest(format="csv", text="a,b").format == ImportFormat.CSV
    with pytest.raises(ValidationError):
        ImportRequest(format="xlsx", text="a,b")
    with pytest.raises(ValidationError):
        ImportRequest(format="csv", text="")
