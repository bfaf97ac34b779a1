from __future__ import annotations

import io
import logging
import time
import zipfile

import requests  # type: ignore[import-untyped]

from redbook_harvester.config import HarvestSettings
from redbook_harvester.models import ArchiveEntry

logger = logging.getLogger(__name__)


class ArchiveError(RuntimeError):
    pass


def _retry_delay(
    resp: requests.Response | None, attempt: int, settings: HarvestSettings
) -> float:
    backoff_cap = settings.backoff_factor * max(1, settings.max_retries)
    delay = 0.0
    if resp is not None:
        retry_after = resp.headers.get("Retry-After")
        try:
            delay = float(retry_after) if retry_after else 0.0
        except ValueError:
            delay = 0.0
    if delay <= 0:
        delay = min(settings.backoff_factor * (2 ** (attempt - 1)), backoff_cap)
    return delay


def get_with_backoff(
    url: str, settings: HarvestSettings
) -> requests.Response | None:
    """GET ``url``, retrying connection errors, 429 and 5xx responses.

    Returns the last response received, or None when every attempt failed to
    connect.
    """

    attempt = 0
    max_attempts = max(1, settings.max_retries)
    last_resp: requests.Response | None = None
    while attempt < max_attempts:
        try:
            resp = requests.get(
                url,
                headers={"User-Agent": settings.user_agent},
                timeout=settings.http_timeout,
            )
            last_resp = resp
        except requests.RequestException as exc:
            logger.warning("GET %s failed: %s", url, exc)
            resp = None

        if settings.throttle_seconds > 0:
            time.sleep(settings.throttle_seconds)

        if resp is None:
            attempt += 1
            if attempt < max_attempts:
                time.sleep(_retry_delay(None, attempt, settings))
            continue

        status = int(resp.status_code)
        if status == 429 or status >= 500:
            attempt += 1
            logger.warning("GET %s returned %d (attempt %d)", url, status, attempt)
            if attempt < max_attempts:
                time.sleep(_retry_delay(resp, attempt, settings))
            continue

        return resp

    return last_resp


def download_archive(url: str, settings: HarvestSettings) -> bytes:
    resp = get_with_backoff(url, settings)
    if resp is None:
        raise ArchiveError(f"Could not connect to {url}")
    if not resp.ok:
        raise ArchiveError(f"Download of {url} failed with {resp.status_code}")
    return resp.content


def read_first_entry(archive: bytes) -> ArchiveEntry:
    """Return the first file entry of a zip archive."""

    try:
        with zipfile.ZipFile(io.BytesIO(archive)) as bundle:
            members = [info for info in bundle.infolist() if not info.is_dir()]
            if not members:
                raise ArchiveError("Archive contains no file entries")
            first = members[0]
            name = first.filename.rsplit("/", 1)[-1]
            return ArchiveEntry(name=name, data=bundle.read(first))
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Not a zip archive: {exc}") from exc


__all__ = [
    "ArchiveError",
    "download_archive",
    "get_with_backoff",
    "read_first_entry",
]
