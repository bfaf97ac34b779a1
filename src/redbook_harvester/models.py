from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path


@dataclass(frozen=True)
class PatentRecord:
    application_number: str | None = None
    record_type: str | None = None
    language: str | None = None
    country: str | None = None
    date_produced: str | None = None
    date_published: str | None = None
    dtd_version: str | None = None
    file_name: str | None = None
    patent_status: str | None = None
    patent_claims: tuple[str, ...] | None = None
    invention_title: str | None = None
    invention_id: str | None = None


PATENT_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(PatentRecord))


def is_empty(record: PatentRecord) -> bool:
    return all(getattr(record, name) is None for name in PATENT_FIELDS)


# Attribute name -> key of the persisted row.
STORAGE_KEYS: dict[str, str] = {
    "application_number": "applicationNumber",
    "record_type": "recordType",
    "language": "language",
    "country": "country",
    "date_produced": "dateProduced",
    "date_published": "datePublished",
    "dtd_version": "dtdVersion",
    "file_name": "fileName",
    "patent_status": "patentStatus",
    "patent_claims": "patentClaims",
    "invention_title": "inventionTitle",
    "invention_id": "inventionId",
}


@dataclass(frozen=True)
class ArchiveEntry:
    """One decompressed file pulled out of a bulk zip archive."""

    name: str
    data: bytes


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


__all__ = [
    "ArchiveEntry",
    "PATENT_FIELDS",
    "PatentRecord",
    "STORAGE_KEYS",
    "ensure_parent",
    "is_empty",
]
