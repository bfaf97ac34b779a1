from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Callable, Protocol, TypeVar

from redbook_harvester.models import PatentRecord, is_empty
from redbook_harvester.xml_tree import XmlNode

T = TypeVar("T")


class UnknownDialectError(KeyError):
    pass


class Dialect(str, Enum):
    GRANT_V4 = "grant-v4"
    GRANT_V2 = "grant-v2"
    PFTAPS = "pftaps"

    @classmethod
    def from_name(cls, name: str) -> Dialect:
        """Resolve ``grant-v4``, ``GRANT_V4`` and similar spellings."""

        key = name.strip().lower().replace("_", "-")
        for dialect in cls:
            if dialect.value == key:
                return dialect
        raise UnknownDialectError(f"Unknown dialect {name!r}")


class Extractor(Protocol):
    def __call__(self, section: str, file_name: str | None = None) -> PatentRecord: ...


def optional_field(lookup: Callable[[], T | None]) -> T | None:
    """Run one field lookup, collapsing any failure or empty value to None."""

    try:
        value = lookup()
    except (LookupError, AttributeError, TypeError, ValueError):
        return None
    if isinstance(value, str):
        value = value.strip()  # type: ignore[assignment]
        return value or None  # type: ignore[return-value]
    if isinstance(value, (tuple, list)) and not value:
        return None
    return value


def complete_record(record: PatentRecord, **derived: str | None) -> PatentRecord:
    """Fill unset fields from ``derived`` once the record has content.

    Caller hints and values inferred from the record's shape are only
    attached to a record that carries at least one field of its own, so a
    vacuous section stays empty and is culled.
    """

    if is_empty(record):
        return record
    changes: dict[str, str] = {}
    for name, value in derived.items():
        cleaned = value.strip() if value else None
        if cleaned and getattr(record, name) is None:
            changes[name] = cleaned
    return replace(record, **changes) if changes else record


def text_at(node: XmlNode | None, *path: str) -> str | None:
    if node is None:
        return None
    target = node.first(*path)
    if target is None:
        return None
    return target.full_text()


def attribute_at(node: XmlNode | None, *path: str, name: str) -> str | None:
    if node is None:
        return None
    target = node.first(*path)
    if target is None:
        return None
    return target.attribute(name)


__all__ = [
    "Dialect",
    "Extractor",
    "UnknownDialectError",
    "attribute_at",
    "complete_record",
    "optional_field",
    "text_at",
]
