"""Fetch, convert and store the Red Book grant archives year by year."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from redbook_harvester.config import HarvestSettings
from redbook_harvester.dialects import (
    Dialect,
    UnknownDialectError,
    dialect_for_file_name,
)
from redbook_harvester.engine import ExtractionError, convert
from redbook_harvester.models import ArchiveEntry
from redbook_harvester.normalizer import StorageRow
from redbook_harvester.sync.database import create_db_engine, save_rows
from redbook_harvester.sync.fetch import (
    ArchiveError,
    download_archive,
    get_with_backoff,
    read_first_entry,
)
from redbook_harvester.sync.ledger import SyncLedger
from redbook_harvester.sync.listing import (
    archive_name,
    archive_url,
    extract_archive_links,
    year_listing_url,
)
from redbook_harvester.sync.storage import (
    json_file_name,
    save_to_local_directory,
    save_to_remote,
)

logger = logging.getLogger(__name__)


@dataclass
class ProcessorSummary:
    listings_failed: list[str] = field(default_factory=list)
    archives_processed: list[str] = field(default_factory=list)
    archives_skipped: list[str] = field(default_factory=list)
    archives_unsupported: list[str] = field(default_factory=list)
    archives_failed: dict[str, str] = field(default_factory=dict)
    records_written: int = 0


class BulkGrantProcessor:
    def __init__(
        self,
        settings: HarvestSettings | None = None,
        *,
        ledger: SyncLedger | None = None,
    ) -> None:
        self.settings = settings or HarvestSettings()
        self.ledger = ledger or SyncLedger(self.settings.sync_file)
        self._db_engine: Engine | None = None

    def _database(self) -> Engine | None:
        if not self.settings.database_url:
            return None
        if self._db_engine is None:
            self._db_engine = create_db_engine(self.settings.database_url)
        return self._db_engine

    def _limit_reached(self, summary: ProcessorSummary) -> bool:
        limit = self.settings.file_limit
        return limit is not None and len(summary.archives_processed) >= limit

    def _store(
        self,
        file_name: str,
        contents: bytes,
        *,
        remote_url: str | None,
        local_dir: Path | None,
    ) -> None:
        save_to_local_directory(local_dir, file_name, contents)
        save_to_remote(
            remote_url,
            file_name,
            contents,
            headers={"User-Agent": self.settings.user_agent},
            timeout=self.settings.http_timeout,
        )

    def process_archive(
        self,
        zip_name: str,
        zip_url: str,
        entry: ArchiveEntry,
        dialect: Dialect | None = None,
    ) -> list[StorageRow]:
        """Store, convert and persist one archive entry, then mark it synced."""

        settings = self.settings
        if dialect is None:
            dialect = dialect_for_file_name(zip_name)
        if dialect is None:
            raise UnknownDialectError(f"No dialect for archive {zip_name!r}")

        self._store(
            entry.name,
            entry.data,
            remote_url=settings.remote_raw_url,
            local_dir=settings.local_raw_dir,
        )

        rows = convert(entry.data, dialect, entry.name, encoding=settings.encoding)
        logger.info(
            "Converted %d %s record(s) from %s", len(rows), dialect.value, entry.name
        )

        payload = json.dumps(rows, ensure_ascii=False).encode("utf-8")
        self._store(
            json_file_name(entry.name),
            payload,
            remote_url=settings.remote_json_url,
            local_dir=settings.local_json_dir,
        )

        db = self._database()
        if db is not None:
            save_rows(None, rows, engine=db)

        self.ledger.add(zip_url)
        return rows

    def run(self) -> ProcessorSummary:
        settings = self.settings
        summary = ProcessorSummary()

        for year in range(settings.end_year, settings.start_year - 1, -1):
            if self._limit_reached(summary):
                break
            listing_url = year_listing_url(settings.base_url, year)
            resp = get_with_backoff(listing_url, settings)
            if resp is None or not resp.ok:
                status = "no response" if resp is None else resp.status_code
                logger.error("Failed to fetch %s (%s)", listing_url, status)
                summary.listings_failed.append(listing_url)
                continue
            logger.info("Fetched %s", listing_url)

            for href in extract_archive_links(resp.text):
                if self._limit_reached(summary):
                    break
                name = archive_name(href)
                url = archive_url(listing_url, href)
                dialect = dialect_for_file_name(name)
                if dialect is None:
                    logger.debug("No dialect for %s, skipping", name)
                    summary.archives_unsupported.append(url)
                    continue
                if url in self.ledger:
                    summary.archives_skipped.append(url)
                    continue
                try:
                    entry = read_first_entry(download_archive(url, settings))
                    rows = self.process_archive(name, url, entry, dialect)
                except (
                    ArchiveError,
                    ExtractionError,
                    httpx.HTTPError,
                    SQLAlchemyError,
                    OSError,
                ) as exc:
                    logger.error("Failed to process %s: %s", url, exc)
                    summary.archives_failed[url] = str(exc)
                    continue
                summary.archives_processed.append(url)
                summary.records_written += len(rows)

        return summary


__all__ = ["BulkGrantProcessor", "ProcessorSummary"]
