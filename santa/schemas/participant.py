"""Participant Intake Schemas — manual add and bulk import requests.

Invariants:
    - ParticipantCreate.name / email: stripped, non-empty
    - Optional text fields: blank → None
    - ImportRequest.text: non-empty, at most 1 MB of pasted text
"""

from pydantic import BaseModel, Field, field_validator

from santa.core.domain_types import ImportFormat


class ParticipantCreate(BaseModel):
    """Manual participant entry (also the join-page ticket form)."""
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=3, max_length=320)
    group: str | None = Field(None, max_length=100)
    department: str | None = Field(None, max_length=200)
    wishlist: str | None = Field(None, max_length=2000)

    @field_validator("name", "email")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty or whitespace")
        return v

    @field_validator("group", "department", "wishlist")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class ImportRequest(BaseModel):
    """Bulk intake: pasted CSV lines or one ticket code."""
    format: ImportFormat
    text: str = Field(min_length=1, max_length=1_000_000)
