"""Entry points converting one bulk archive entry into normalized patent rows.

The engine is a pure transformation: it performs no I/O and keeps no state
between calls, so independent blobs may be converted concurrently.
"""

from __future__ import annotations

import logging
from typing import Iterator

from redbook_harvester.dialects import Dialect, register_default_dialects, registry
from redbook_harvester.models import PatentRecord
from redbook_harvester.normalizer import StorageRow, normalize_records
from redbook_harvester.sections import split_sections

logger = logging.getLogger(__name__)


class ExtractionError(RuntimeError):
    pass


def decode_blob(
    blob: str | bytes | bytearray,
    encoding: str = "utf-8",
) -> str:
    if isinstance(blob, str):
        return blob
    if not isinstance(blob, (bytes, bytearray)):
        raise ExtractionError(
            f"Expected str or bytes for a bulk entry, got {type(blob).__name__}"
        )
    try:
        return bytes(blob).decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        msg = f"Bulk entry is not readable as {encoding} text: {exc}"
        raise ExtractionError(msg) from exc


def _extract_all(
    text: str, dialect: Dialect, file_name: str | None
) -> Iterator[PatentRecord]:
    register_default_dialects()
    extract = registry.extractor(dialect)
    for section in split_sections(text, dialect):
        yield extract(section, file_name)


def iter_patent_records(
    blob: str | bytes | bytearray,
    dialect: Dialect,
    file_name: str | None = None,
    *,
    encoding: str = "utf-8",
) -> Iterator[PatentRecord]:
    """Yield one extracted record per source section, in source order.

    Empty records are included; ``convert`` culls them while normalizing.
    """

    text = decode_blob(blob, encoding)
    return _extract_all(text, dialect, file_name)


def convert(
    blob: str | bytes | bytearray,
    dialect: Dialect,
    file_name: str | None = None,
    *,
    encoding: str = "utf-8",
) -> list[StorageRow]:
    records = iter_patent_records(blob, dialect, file_name, encoding=encoding)
    rows = list(normalize_records(records))
    logger.debug(
        "Converted %d %s record(s) from %s",
        len(rows),
        dialect.value,
        file_name or "<blob>",
    )
    return rows


def convert_grant_v4(
    blob: str | bytes | bytearray, file_name: str | None = None
) -> list[StorageRow]:
    return convert(blob, Dialect.GRANT_V4, file_name)


def convert_grant_v2(
    blob: str | bytes | bytearray, file_name: str | None = None
) -> list[StorageRow]:
    return convert(blob, Dialect.GRANT_V2, file_name)


def convert_pftaps(
    blob: str | bytes | bytearray, file_name: str | None = None
) -> list[StorageRow]:
    return convert(blob, Dialect.PFTAPS, file_name)


__all__ = [
    "ExtractionError",
    "convert",
    "convert_grant_v2",
    "convert_grant_v4",
    "convert_pftaps",
    "decode_blob",
    "iter_patent_records",
]
