from __future__ import annotations

from pathlib import Path

import typer

from redbook_harvester.config import load_settings
from redbook_harvester.dialects import (
    Dialect,
    UnknownDialectError,
    dialect_for_file_name,
    register_default_dialects,
    registry,
)
from redbook_harvester.engine import ExtractionError, convert
from redbook_harvester.log_utils import configure_logging, write_jsonl
from redbook_harvester.models import ArchiveEntry
from redbook_harvester.sync.fetch import ArchiveError, read_first_entry
from redbook_harvester.sync.processor import BulkGrantProcessor

app = typer.Typer(
    help="Convert USPTO Red Book bulk grant archives into patent records",
)


def _read_entry(path: Path) -> ArchiveEntry:
    data = path.read_bytes()
    if path.suffix.lower() == ".zip":
        return read_first_entry(data)
    return ArchiveEntry(name=path.name, data=data)


def _resolve_dialect(
    name: str | None, path: Path, entry: ArchiveEntry
) -> Dialect | None:
    if name:
        try:
            return Dialect.from_name(name)
        except UnknownDialectError as exc:
            raise typer.BadParameter(
                f"Unknown dialect {name!r}; run 'dialects' for the list"
            ) from exc
    return dialect_for_file_name(path.name) or dialect_for_file_name(entry.name)


@app.command()
def extract(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="Bulk entry file or .zip archive",
    ),
    dialect: str | None = typer.Option(
        None,
        help="grant-v4 | grant-v2 | pftaps (default: from the file name)",
    ),
    file_name: str | None = typer.Option(
        None,
        help="fileName recorded on each row (default: the entry name)",
    ),
    out: Path | None = typer.Option(
        None,
        help="Output JSONL path (default: <stem>.jsonl beside the input)",
    ),
    encoding: str = typer.Option("utf-8", help="Text encoding of the entry"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Convert one local bulk file into JSONL patent rows."""

    configure_logging(verbose)
    try:
        entry = _read_entry(path)
    except ArchiveError as exc:
        typer.echo(f"Cannot read {path}: {exc}")
        raise SystemExit(1) from exc

    chosen = _resolve_dialect(dialect, path, entry)
    if chosen is None:
        typer.echo(f"No dialect matches {path.name}; pass --dialect")
        raise SystemExit(1)

    try:
        rows = convert(
            entry.data,
            chosen,
            file_name or entry.name,
            encoding=encoding,
        )
    except ExtractionError as exc:
        typer.echo(f"Extraction failed for {path}: {exc}")
        raise SystemExit(1) from exc

    out_path = out or path.with_suffix(".jsonl")
    count = write_jsonl(out_path, rows)
    typer.echo(f"Wrote {count} {chosen.value} record(s) to {out_path}")


@app.command()
def sync(
    config: Path | None = typer.Option(
        None,
        exists=True,
        dir_okay=False,
        help="YAML settings file (optionally under a 'harvest:' key)",
    ),
    start_year: int | None = typer.Option(None, help="Oldest year to sync"),
    end_year: int | None = typer.Option(None, help="Newest year to sync"),
    file_limit: int | None = typer.Option(
        None,
        help="Stop after this many archives were processed",
    ),
    sync_file: Path | None = typer.Option(
        None,
        help="JSON list of archive URLs already processed",
    ),
    local_raw_dir: Path | None = typer.Option(
        None,
        help="Directory for the raw archive entries",
    ),
    local_json_dir: Path | None = typer.Option(
        None,
        help="Directory for the converted JSON files",
    ),
    database_url: str | None = typer.Option(
        None,
        help="SQLAlchemy URL for the patent_grants table",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Download, convert and store every grant archive in the year range."""

    configure_logging(verbose)
    try:
        settings = load_settings(config).with_overrides(
            start_year=start_year,
            end_year=end_year,
            file_limit=file_limit,
            sync_file=sync_file,
            local_raw_dir=local_raw_dir,
            local_json_dir=local_json_dir,
            database_url=database_url,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    summary = BulkGrantProcessor(settings).run()
    typer.echo(
        f"Processed {len(summary.archives_processed)} archive(s), "
        f"{summary.records_written} record(s); "
        f"skipped {len(summary.archives_skipped)}, "
        f"failed {len(summary.archives_failed)}"
    )
    if summary.archives_failed or summary.listings_failed:
        raise SystemExit(1)


@app.command()
def dialects() -> None:
    """List the supported bulk dialects and their file prefixes."""

    register_default_dialects()
    for entry in registry.entries():
        info = entry.info
        prefixes = ", ".join(info.file_prefixes)
        years = f" ({info.years})" if info.years else ""
        typer.echo(f"{info.dialect.value}\t{prefixes}\t{info.title}{years}")


def run() -> None:
    app()


__all__ = ["app", "dialects", "extract", "run", "sync"]


if __name__ == "__main__":
    run()
