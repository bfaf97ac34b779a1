from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Dict

from redbook_harvester.dialects.base import Dialect, Extractor, UnknownDialectError


@dataclass(frozen=True)
class DialectInfo:
    dialect: Dialect
    title: str
    description: str
    file_prefixes: tuple[str, ...] = ()
    root_tag: str | None = None
    years: str | None = None


@dataclass
class DialectEntry:
    extractor: Extractor
    info: DialectInfo = field(repr=False)


class DialectRegistry:
    def __init__(self) -> None:
        self._dialects: Dict[Dialect, DialectEntry] = {}

    def register(self, extractor: Extractor, info: DialectInfo) -> None:
        self._dialects[info.dialect] = DialectEntry(extractor=extractor, info=info)

    def entry(self, dialect: Dialect) -> DialectEntry:
        if dialect not in self._dialects:
            raise UnknownDialectError(f"Dialect '{dialect.value}' is not registered")
        return self._dialects[dialect]

    def extractor(self, dialect: Dialect) -> Extractor:
        return self.entry(dialect).extractor

    def info(self, dialect: Dialect) -> DialectInfo:
        return self.entry(dialect).info

    def available(self) -> list[Dialect]:
        return [dialect for dialect in Dialect if dialect in self._dialects]

    def entries(self) -> list[DialectEntry]:
        return [self._dialects[dialect] for dialect in self.available()]

    def for_file_name(self, file_name: str) -> Dialect | None:
        base = PurePosixPath(file_name.replace("\\", "/")).name.lower()
        for entry in self.entries():
            if base.startswith(entry.info.file_prefixes):
                return entry.info.dialect
        return None


registry = DialectRegistry()


def register_default_dialects() -> None:
    """Register the built-in dialects (idempotent)."""

    from redbook_harvester.dialects import grant_v2, grant_v4, pftaps

    available = registry.available()
    if Dialect.GRANT_V4 not in available:
        registry.register(
            grant_v4.extract,
            DialectInfo(
                dialect=Dialect.GRANT_V4,
                title="Red Book grant XML v4",
                description="us-patent-grant XML documents, one per grant",
                file_prefixes=("ipg",),
                root_tag=grant_v4.ROOT_TAG,
                years="2005-present",
            ),
        )
    if Dialect.GRANT_V2 not in available:
        registry.register(
            grant_v2.extract,
            DialectInfo(
                dialect=Dialect.GRANT_V2,
                title="Red Book grant XML v2",
                description="PATDOC documents with SGML-derived B-tags",
                file_prefixes=("pg0",),
                root_tag=grant_v2.ROOT_TAG,
                years="2001-2004",
            ),
        )
    if Dialect.PFTAPS not in available:
        registry.register(
            pftaps.extract,
            DialectInfo(
                dialect=Dialect.PFTAPS,
                title="APS fixed-field text",
                description="PATN-delimited records with 5 column field tags",
                file_prefixes=("pftaps",),
                years="1976-2000",
            ),
        )


def dialect_for_file_name(file_name: str) -> Dialect | None:
    """Pick the dialect from an archive or entry file name prefix."""

    register_default_dialects()
    return registry.for_file_name(file_name)


__all__ = [
    "DialectEntry",
    "DialectInfo",
    "DialectRegistry",
    "dialect_for_file_name",
    "register_default_dialects",
    "registry",
]
