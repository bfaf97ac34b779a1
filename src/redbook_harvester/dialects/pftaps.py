"""Field extraction for the fixed-field APS text format (``pftapsYYYYMMDD``).

Each record line starts with a field token left-justified in a five column
prefix (``TTL  A Widget``); the claims follow a ``CLMS`` (utility) or
``DCLM`` (design) section line.
"""

from __future__ import annotations

from typing import Sequence

from redbook_harvester.claims import assemble_claims
from redbook_harvester.dialects.base import complete_record, optional_field
from redbook_harvester.models import PatentRecord

PREFIX_WIDTH = 5

APPLICATION_NUMBER = "PNO"
APPLICATION_DATE = "APD"
ISSUE_DATE = "ISD"
TITLE = "TTL"

UTILITY_CLAIMS = "CLMS"
DESIGN_CLAIMS = "DCLM"


def _prefix(token: str) -> str:
    return token.ljust(PREFIX_WIDTH)


def field_value(lines: Sequence[str], token: str) -> str | None:
    """Return the value of the first line tagged with ``token``."""

    prefix = _prefix(token)
    for line in lines:
        if line.startswith(prefix):
            return line[len(prefix) :]
    return None


def _is_section(line: str, *names: str) -> bool:
    return line.rstrip() in names


def _record_type(lines: Sequence[str]) -> str:
    if any(_is_section(line, DESIGN_CLAIMS) for line in lines):
        return "design"
    return "utility"


def claims_section(lines: Sequence[str]) -> list[str] | None:
    """Lines after the last claims section marker, or None without one."""

    start: int | None = None
    for index, line in enumerate(lines):
        if _is_section(line, UTILITY_CLAIMS, DESIGN_CLAIMS):
            start = index + 1
    if start is None:
        return None
    return list(lines[start:])


def _claims(lines: Sequence[str]) -> tuple[str, ...] | None:
    section = claims_section(lines)
    if section is None:
        return None
    return assemble_claims(section)


def extract(section: str, file_name: str | None = None) -> PatentRecord:
    lines = section.splitlines()

    record = PatentRecord(
        application_number=optional_field(
            lambda: field_value(lines, APPLICATION_NUMBER)
        ),
        date_produced=optional_field(lambda: field_value(lines, APPLICATION_DATE)),
        date_published=optional_field(lambda: field_value(lines, ISSUE_DATE)),
        patent_claims=optional_field(lambda: _claims(lines)),
        invention_title=optional_field(lambda: field_value(lines, TITLE)),
        # APS carries no separate invention id; the issue date line stands in.
        invention_id=optional_field(lambda: field_value(lines, ISSUE_DATE)),
    )
    return complete_record(
        record, record_type=_record_type(lines), file_name=file_name
    )


__all__ = [
    "DESIGN_CLAIMS",
    "UTILITY_CLAIMS",
    "claims_section",
    "extract",
    "field_value",
]
