from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from samples import GRANT_V4_FILE, PFTAPS_FILE, FakeResponse, make_zip
from sqlalchemy import func, select
from sqlalchemy.orm import Session

import redbook_harvester.sync.fetch as fetch_mod
from redbook_harvester.config import HarvestSettings
from redbook_harvester.models import ArchiveEntry
from redbook_harvester.sync.database import PatentGrant, create_db_engine
from redbook_harvester.sync.ledger import SyncLedger
from redbook_harvester.sync.processor import BulkGrantProcessor

BASE = "https://bulk.example/fulltext"

LISTING_2005 = """
<a href="ipg050104.zip">ipg050104.zip</a>
<a href="ipg050104-supp.zip">supplement</a>
<a href="ipa050106.zip">application</a>
<a href="ipg050111.zip">ipg050111.zip</a>
"""

LISTING_2004 = '<a href="pg041228.zip">pg041228.zip</a>'


def _settings(tmp_path: Path, **overrides: Any) -> HarvestSettings:
    options: dict[str, Any] = {
        "base_url": BASE,
        "start_year": 2004,
        "end_year": 2005,
        "sync_file": tmp_path / "sync.json",
        "local_raw_dir": tmp_path / "raw",
        "local_json_dir": tmp_path / "json",
        "database_url": f"sqlite:///{tmp_path / 'grants.db'}",
        "backoff_factor": 0.0,
        "max_retries": 1,
    }
    options.update(overrides)
    return HarvestSettings(**options)


def _serve(monkeypatch: Any, routes: dict[str, FakeResponse]) -> list[str]:
    requested: list[str] = []

    def fake_get(url: str, **kwargs: Any) -> FakeResponse:
        requested.append(url)
        return routes.get(url, FakeResponse(404))

    monkeypatch.setattr(fetch_mod.requests, "get", fake_get)
    return requested


def _routes() -> dict[str, FakeResponse]:
    return {
        f"{BASE}/2005": FakeResponse(200, LISTING_2005.encode()),
        f"{BASE}/2004": FakeResponse(200, LISTING_2004.encode()),
        f"{BASE}/2005/ipg050104.zip": FakeResponse(
            200, make_zip({"ipg050104.xml": GRANT_V4_FILE})
        ),
    }


def _count_rows(database_url: str) -> int:
    with Session(create_db_engine(database_url)) as session:
        return int(session.scalar(select(func.count()).select_from(PatentGrant)) or 0)


def test_run_processes_new_archives_and_records_them(
    tmp_path: Path, monkeypatch: Any
) -> None:
    settings = _settings(tmp_path)
    SyncLedger(settings.sync_file).add(f"{BASE}/2004/pg041228.zip")
    requested = _serve(monkeypatch, _routes())

    summary = BulkGrantProcessor(settings).run()

    assert requested[0] == f"{BASE}/2005"
    assert summary.archives_processed == [f"{BASE}/2005/ipg050104.zip"]
    assert summary.archives_unsupported == [f"{BASE}/2005/ipa050106.zip"]
    assert summary.archives_skipped == [f"{BASE}/2004/pg041228.zip"]
    assert list(summary.archives_failed) == [f"{BASE}/2005/ipg050111.zip"]
    assert summary.records_written == 2
    assert f"{BASE}/2005/ipa050106.zip" not in requested
    assert f"{BASE}/2004/pg041228.zip" not in requested

    assert (tmp_path / "raw" / "ipg050104.xml").read_text(encoding="utf-8") == (
        GRANT_V4_FILE
    )
    rows = json.loads((tmp_path / "json" / "ipg050104.json").read_text("utf-8"))
    assert [row["applicationNumber"] for row in rows] == ["10000001", "10000002"]
    assert _count_rows(str(settings.database_url)) == 2

    ledger = SyncLedger(settings.sync_file)
    assert f"{BASE}/2005/ipg050104.zip" in ledger
    assert f"{BASE}/2005/ipg050111.zip" not in ledger


def test_second_run_skips_synced_archives(tmp_path: Path, monkeypatch: Any) -> None:
    settings = _settings(tmp_path, start_year=2005)
    _serve(monkeypatch, _routes())
    BulkGrantProcessor(settings).run()

    summary = BulkGrantProcessor(settings).run()

    assert summary.archives_processed == []
    assert f"{BASE}/2005/ipg050104.zip" in summary.archives_skipped
    assert _count_rows(str(settings.database_url)) == 2


def test_file_limit_stops_the_run(tmp_path: Path, monkeypatch: Any) -> None:
    settings = _settings(tmp_path, file_limit=1)
    requested = _serve(monkeypatch, _routes())

    summary = BulkGrantProcessor(settings).run()

    assert len(summary.archives_processed) == 1
    assert f"{BASE}/2005/ipg050111.zip" not in requested
    assert f"{BASE}/2004" not in requested


def test_listing_failure_is_recorded(tmp_path: Path, monkeypatch: Any) -> None:
    settings = _settings(tmp_path, start_year=2003, end_year=2003)
    _serve(monkeypatch, {})

    summary = BulkGrantProcessor(settings).run()

    assert summary.listings_failed == [f"{BASE}/2003"]
    assert summary.archives_processed == []


def test_process_archive_without_optional_sinks(tmp_path: Path) -> None:
    settings = _settings(
        tmp_path, local_raw_dir=None, local_json_dir=None, database_url=None
    )
    processor = BulkGrantProcessor(settings)
    entry = ArchiveEntry("pftaps19761228_wk52.txt", PFTAPS_FILE.encode("utf-8"))

    rows = processor.process_archive(
        "pftaps19761228_wk52.zip", f"{BASE}/1976/pftaps19761228_wk52.zip", entry
    )

    assert [row["recordType"] for row in rows] == ["utility", "design"]
    assert rows[0]["fileName"] == "pftaps19761228_wk52.txt"
    assert not (tmp_path / "raw").exists()
    assert f"{BASE}/1976/pftaps19761228_wk52.zip" in processor.ledger
