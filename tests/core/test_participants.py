"""Participants — group normalization and immutability."""

import dataclasses

import pytest

from santa.core.domain_types import ParticipantId
from santa.core.participants import Participant


def _p(group):
    return Participant(ParticipantId("x"), "X", "x@x.com", group=group)


def test_group_key_lowercases():
    assert _p("Couple A").group_key == "couple a"


@pytest.mark.parametrize("group", [None, ""])
def test_missing_group_has_no_key(group):
    assert _p(group).group_key is None


def test_shares_group_requires_both_sides():
    assert _p("g").shares_group_with(_p("G"))
    assert not _p("g").shares_group_with(_p(None))
    assert not _p(None).shares_group_with(_p(None))


def test_participant_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        _p("g").name = "changed"
