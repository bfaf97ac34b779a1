"""Field extraction for the current Red Book grant XML (``ipgYYMMDD``, 2005+)."""

from __future__ import annotations

from redbook_harvester.dialects.base import (
    attribute_at,
    complete_record,
    optional_field,
    text_at,
)
from redbook_harvester.models import PatentRecord
from redbook_harvester.xml_tree import XmlNode, parse_record

ROOT_TAG = "us-patent-grant"
BIBLIO = "us-bibliographic-data-grant"


def _claim_texts(root: XmlNode) -> tuple[str, ...] | None:
    claims = root.first("claims")
    if claims is None:
        return None
    texts: list[str] = []
    for claim in claims.child("claim") or []:
        text = text_at(claim, "claim-text")
        if text is None:
            return None
        if text:
            texts.append(text)
    return tuple(texts)


def extract(section: str, file_name: str | None = None) -> PatentRecord:
    root = parse_record(section)
    if root is None:
        return PatentRecord()

    record = PatentRecord(
        application_number=optional_field(
            lambda: text_at(
                root,
                BIBLIO,
                "publication-reference",
                "document-id",
                "doc-number",
            )
        ),
        record_type=optional_field(
            lambda: attribute_at(
                root, BIBLIO, "application-reference", name="appl-type"
            )
        ),
        language=optional_field(lambda: root.attribute("lang")),
        country=optional_field(lambda: root.attribute("country")),
        date_produced=optional_field(lambda: root.attribute("date-produced")),
        date_published=optional_field(lambda: root.attribute("date-publ")),
        dtd_version=optional_field(lambda: root.attribute("dtd-version")),
        file_name=optional_field(lambda: root.attribute("file")),
        patent_status=optional_field(lambda: root.attribute("status")),
        patent_claims=optional_field(lambda: _claim_texts(root)),
        invention_title=optional_field(
            lambda: text_at(root, BIBLIO, "invention-title")
        ),
        invention_id=optional_field(
            lambda: attribute_at(root, BIBLIO, "invention-title", name="id")
        ),
    )
    return complete_record(record, file_name=file_name)


__all__ = ["BIBLIO", "ROOT_TAG", "extract"]
