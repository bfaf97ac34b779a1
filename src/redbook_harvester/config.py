from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml  # type: ignore[import-untyped]

DEFAULT_BASE_URL = "https://bulkdata.uspto.gov/data/patent/grant/redbook/fulltext"
DEFAULT_DATABASE_URL_ENV = "CONNECTION_STRING"


def _current_year() -> int:
    return datetime.now(timezone.utc).year


def _optional_path(value: Any) -> Path | None:
    if value is None or value == "":
        return None
    return Path(str(value))


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class HarvestSettings:
    base_url: str = DEFAULT_BASE_URL
    start_year: int = 1985
    end_year: int = field(default_factory=_current_year)
    file_limit: int | None = None
    sync_file: Path = Path("sync.json")
    local_raw_dir: Path | None = Path("uspto_xml_data")
    local_json_dir: Path | None = Path("uspto_json_data")
    remote_raw_url: str | None = None
    remote_json_url: str | None = None
    database_url: str | None = None
    database_url_env: str = DEFAULT_DATABASE_URL_ENV
    user_agent: str = "redbook-harvester/0.1"
    http_timeout: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 0.5
    throttle_seconds: float = 0.0
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.start_year > self.end_year:
            raise ValueError(
                f"start_year {self.start_year} is after end_year {self.end_year}"
            )

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> HarvestSettings:
        defaults = cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        def _get(name: str) -> Any:
            value = options.get(name)
            return getattr(defaults, name) if value is None else value

        database_url_env = str(_get("database_url_env"))
        database_url = _optional_str(options.get("database_url"))
        if database_url is None:
            database_url = _optional_str(os.environ.get(database_url_env))

        return cls(
            base_url=str(_get("base_url")).rstrip("/"),
            start_year=int(_get("start_year")),
            end_year=int(_get("end_year")),
            file_limit=_optional_int(options.get("file_limit")),
            sync_file=Path(str(_get("sync_file"))),
            local_raw_dir=_optional_path(
                options.get("local_raw_dir", defaults.local_raw_dir)
            ),
            local_json_dir=_optional_path(
                options.get("local_json_dir", defaults.local_json_dir)
            ),
            remote_raw_url=_optional_str(options.get("remote_raw_url")),
            remote_json_url=_optional_str(options.get("remote_json_url")),
            database_url=database_url,
            database_url_env=database_url_env,
            user_agent=str(_get("user_agent")),
            http_timeout=float(_get("http_timeout")),
            max_retries=int(_get("max_retries")),
            backoff_factor=float(_get("backoff_factor")),
            throttle_seconds=float(_get("throttle_seconds")),
            encoding=str(_get("encoding")),
        )

    def with_overrides(self, **overrides: Any) -> HarvestSettings:
        """Return a copy with the non-None overrides applied."""

        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def load_settings(path: str | Path | None = None) -> HarvestSettings:
    """Build settings from an optional YAML file plus the environment."""

    if path is None:
        return HarvestSettings.from_options({})
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    section = data.get("harvest", data)
    if not isinstance(section, dict):
        raise ValueError(f"'harvest' section of {path} must be a mapping")
    return HarvestSettings.from_options(section)


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_DATABASE_URL_ENV",
    "HarvestSettings",
    "load_settings",
]
