from __future__ import annotations

from samples import GRANT_V4_RECORD, GRANT_V4_SECOND

from redbook_harvester.dialects import grant_v4
from redbook_harvester.models import PatentRecord


def test_extracts_every_field_from_a_full_record() -> None:
    record = grant_v4.extract(GRANT_V4_RECORD, "ipg180619.xml")

    assert record == PatentRecord(
        application_number="10000001",
        record_type="utility",
        language="EN",
        country="US",
        date_produced="20180605",
        date_published="20180619",
        dtd_version="v4.5 2014-04-03",
        file_name="US10000001-20180619.XML",
        patent_status="PRODUCTION",
        patent_claims=(
            "1. A mold comprising: a cavity; and a gate.",
            "2. The mold of claim 1.",
        ),
        invention_title="Injection molding & tooling",
        invention_id="d2e53",
    )


def test_root_attributes_and_single_claim() -> None:
    record = grant_v4.extract(GRANT_V4_SECOND, "ipg180619.xml")

    assert record.language == "EN"
    assert record.country == "US"
    assert record.patent_status == "B1"
    assert record.patent_claims == ("1. A widget.",)


def test_missing_parts_are_absent_independently() -> None:
    record = grant_v4.extract(GRANT_V4_SECOND, "ipg180619.xml")

    assert record.application_number == "10000002"
    assert record.file_name == "ipg180619.xml"
    assert record.record_type is None
    assert record.invention_title is None
    assert record.invention_id is None
    assert record.dtd_version is None


def test_claim_without_text_makes_claims_absent() -> None:
    section = (
        '<us-patent-grant lang="EN"><claims>'
        "<claim><claim-text>1. Fine.</claim-text></claim>"
        '<claim><figref idref="f1"/></claim>'
        "</claims></us-patent-grant>"
    )
    record = grant_v4.extract(section)

    assert record.patent_claims is None
    assert record.language == "EN"


def test_malformed_record_is_entirely_empty() -> None:
    assert grant_v4.extract('<us-patent-grant lang="EN"><oops>', "x") == PatentRecord()


def test_vacuous_record_stays_empty_with_a_file_name() -> None:
    section = '<us-patent-grant x="1"><foo/></us-patent-grant>'
    assert grant_v4.extract(section, "ipg180619.xml") == PatentRecord()


def test_file_attribute_counts_as_record_content() -> None:
    section = '<us-patent-grant file="US1-20180619.XML"><foo/></us-patent-grant>'
    record = grant_v4.extract(section, "ipg180619.xml")

    assert record == PatentRecord(file_name="US1-20180619.XML")


def test_blank_values_are_absent_not_empty() -> None:
    section = (
        '<us-patent-grant lang="" country="  " status="B2">'
        "<us-bibliographic-data-grant>"
        '<invention-title id="">   </invention-title>'
        "</us-bibliographic-data-grant></us-patent-grant>"
    )
    record = grant_v4.extract(section, "ipg.xml")

    assert record.language is None
    assert record.country is None
    assert record.invention_title is None
    assert record.invention_id is None
    assert record.patent_status == "B2"
    assert record.file_name == "ipg.xml"
