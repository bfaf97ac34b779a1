"""Field extraction for the 2001-2004 grant XML (``pgYYMMDD``, SGML-derived tags)."""

from __future__ import annotations

from redbook_harvester.dialects.base import (
    complete_record,
    optional_field,
    text_at,
)
from redbook_harvester.models import PatentRecord
from redbook_harvester.xml_tree import XmlNode, parse_record

ROOT_TAG = "PATDOC"


def _claim_texts(root: XmlNode) -> tuple[str, ...] | None:
    claims = root.first("SDOCL")
    if claims is None:
        return None
    texts: list[str] = []
    for claim in claims.child("CL") or []:
        text = text_at(claim, "CLM", "PARA", "PTEXT", "PDAT")
        if text is None:
            return None
        if text:
            texts.append(text)
    return tuple(texts)


def extract(section: str, file_name: str | None = None) -> PatentRecord:
    root = parse_record(section)
    if root is None:
        return PatentRecord()

    # B540 is the only title element this DTD carries; the invention id is
    # read from the same path.
    title_path = ("SDOBI", "B500", "B540", "STEXT", "PDAT")

    record = PatentRecord(
        application_number=optional_field(
            lambda: text_at(root, "SDOBI", "B100", "B110", "DNUM", "PDAT")
        ),
        country=optional_field(
            lambda: text_at(root, "SDOBI", "B100", "B190", "PDAT")
        ),
        date_produced=optional_field(
            lambda: text_at(root, "SDOBI", "B100", "B140", "DATE", "PDAT")
        ),
        date_published=optional_field(
            lambda: text_at(root, "SDOBI", "B200", "B220", "DATE", "PDAT")
        ),
        dtd_version=optional_field(lambda: root.attribute("DTD")),
        patent_status=optional_field(lambda: root.attribute("STATUS")),
        patent_claims=optional_field(lambda: _claim_texts(root)),
        invention_title=optional_field(lambda: text_at(root, *title_path)),
        invention_id=optional_field(lambda: text_at(root, *title_path)),
    )
    return complete_record(record, file_name=file_name)


__all__ = ["ROOT_TAG", "extract"]
