"""Claim reconstruction for the legacy fixed-field (PFTAPS) text format.

A claims section is a run of tagged lines::

    NUM  1.
    PAR  A widget comprising:
    PA1  a frame; and
    NUM  2.
    PAR  The widget of claim 1 ...

Each ``NUM`` line starts a new claim; the paragraph lines that follow are
joined into that claim's text.
"""

from __future__ import annotations

import re
from typing import Iterable

CLAIM_NUMBER = re.compile(r"^NUM\s{2}([0-9]+)\.$")
STRUCTURAL_MARKER = re.compile(r"^(STM|NCL)\s{2}")
PARAGRAPH_PREFIX = re.compile(r"^PAR\s{2}[0-9]+\.|^(PAR|PAL|PA[1-9])\s{2}")


class ClaimAssembler:
    def __init__(self) -> None:
        self.claims: list[str] = []
        self.last_claim_number: int | None = None
        self._accumulated: list[str] = []

    def _flush(self) -> None:
        text = " ".join(self._accumulated).strip()
        if text:
            self.claims.append(text)
        self._accumulated = []

    def feed(self, line: str) -> None:
        line = line.rstrip()
        number = CLAIM_NUMBER.match(line)
        if number:
            self._flush()
            self.last_claim_number = int(number.group(1))
            return
        if STRUCTURAL_MARKER.match(line):
            return
        text = PARAGRAPH_PREFIX.sub("", line, count=1).strip()
        if text:
            self._accumulated.append(text)

    def finish(self) -> tuple[str, ...]:
        self._flush()
        return tuple(self.claims)


def assemble_claims(lines: Iterable[str]) -> tuple[str, ...]:
    assembler = ClaimAssembler()
    for line in lines:
        assembler.feed(line)
    return assembler.finish()


__all__ = ["ClaimAssembler", "assemble_claims"]
