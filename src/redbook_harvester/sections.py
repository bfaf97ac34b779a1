from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterator

from redbook_harvester.dialects import (
    Dialect,
    UnknownDialectError,
    register_default_dialects,
    registry,
)

PFTAPS_RECORD_START = re.compile(r"^PATN\r?\n", re.MULTILINE)


@lru_cache(maxsize=None)
def _xml_span(root_tag: str) -> re.Pattern[str]:
    tag = re.escape(root_tag)
    return re.compile(
        rf"<{tag}\s.*?</{tag}>",
        re.IGNORECASE | re.DOTALL | re.MULTILINE,
    )


def _split_on_marker(blob: str, marker: re.Pattern[str]) -> Iterator[str]:
    # Everything before the first marker is the file header.
    matches = marker.finditer(blob)
    previous = next(matches, None)
    while previous is not None:
        current = next(matches, None)
        end = current.start() if current is not None else len(blob)
        yield blob[previous.end() : end]
        previous = current


def split_sections(blob: str, dialect: Dialect) -> Iterator[str]:
    """Yield one raw substring per candidate record, in source order."""

    if dialect is Dialect.PFTAPS:
        return _split_on_marker(blob, PFTAPS_RECORD_START)
    register_default_dialects()
    root_tag = registry.info(dialect).root_tag
    if root_tag is None:
        raise UnknownDialectError(f"No record delimiter for {dialect!r}")
    span = _xml_span(root_tag)
    return (match.group(0) for match in span.finditer(blob))


__all__ = ["PFTAPS_RECORD_START", "split_sections"]
