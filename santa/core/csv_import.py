"""CSV Intake — line-oriented `name,email[,group]` participant import.

Invariants:
    - Lines split on \\n or \\r\\n; columns split on plain commas (no quoting)
    - Lines with fewer than 2 columns are skipped silently
    - Every field is whitespace-trimmed; name and email must be non-empty
    - Empty or missing third column → group None; columns beyond the third ignored

Design Decisions:
    - Plain comma split over the csv module: the format is what organizers
      paste from a spreadsheet, and quoting rules would change which lines import
    - Returns drafts (no id): the service assigns ids when adding to an event
"""

import re
from dataclasses import dataclass

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class ParticipantDraft:
    """A participant not yet added to an event."""
    name: str
    email: str
    group: str | None = None


def parse_csv(text: str) -> list[ParticipantDraft]:
    """Parse pasted CSV text into participant drafts, skipping unusable lines."""
    drafts = []
    for line in _LINE_BREAK.split(text):
        parts = [part.strip() for part in line.split(",")]
        if len(parts) < 2:
            continue
        name, email = parts[0], parts[1]
        group = parts[2] if len(parts) > 2 else ""
        if name and email:
            drafts.append(ParticipantDraft(name=name, email=email, group=group or None))
    return drafts
