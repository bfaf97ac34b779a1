from __future__ import annotations

import json
import logging
from typing import Iterable, Iterator

from redbook_harvester.models import (
    PATENT_FIELDS,
    STORAGE_KEYS,
    PatentRecord,
    is_empty,
)

logger = logging.getLogger(__name__)

StorageRow = dict[str, str | None]


def serialize_claims(claims: tuple[str, ...] | None) -> str | None:
    if claims is None:
        return None
    return json.dumps(list(claims), ensure_ascii=False)


def normalize_record(record: PatentRecord) -> StorageRow | None:
    """Return the persisted row shape, or None for an all-absent record."""

    if is_empty(record):
        return None
    row: StorageRow = {}
    for name in PATENT_FIELDS:
        value = getattr(record, name)
        if name == "patent_claims":
            value = serialize_claims(value)
        row[STORAGE_KEYS[name]] = value
    return row


def normalize_records(records: Iterable[PatentRecord]) -> Iterator[StorageRow]:
    dropped = 0
    for record in records:
        row = normalize_record(record)
        if row is None:
            dropped += 1
            continue
        yield row
    if dropped:
        logger.info("Dropped %d record(s) with no recognizable fields", dropped)


__all__ = [
    "StorageRow",
    "is_empty",
    "normalize_record",
    "normalize_records",
    "serialize_claims",
]
