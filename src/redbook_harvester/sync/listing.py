from __future__ import annotations

import re
from urllib.parse import urljoin

HREF = re.compile(r"""href\s*=\s*["']([^"']+)["']""", re.IGNORECASE)

SUPPLEMENT_SUFFIX = "-supp.zip"
DTD_SUFFIX = "dtd.zip"


def year_listing_url(base_url: str, year: int) -> str:
    return f"{base_url.rstrip('/')}/{year}"


def is_grant_archive(href: str) -> bool:
    name = href.lower()
    if not name.endswith(".zip"):
        return False
    # Supplements and DTD bundles carry no grant records.
    if name.endswith(SUPPLEMENT_SUFFIX) or name.endswith(DTD_SUFFIX):
        return False
    return True


def extract_archive_links(html: str) -> list[str]:
    """Return grant archive hrefs in document order, without duplicates."""

    links: list[str] = []
    seen: set[str] = set()
    for href in HREF.findall(html):
        cleaned = href.strip()
        if not is_grant_archive(cleaned) or cleaned in seen:
            continue
        seen.add(cleaned)
        links.append(cleaned)
    return links


def archive_url(listing_url: str, href: str) -> str:
    return urljoin(listing_url.rstrip("/") + "/", href)


def archive_name(href: str) -> str:
    return href.rstrip("/").rsplit("/", 1)[-1]


__all__ = [
    "archive_name",
    "archive_url",
    "extract_archive_links",
    "is_grant_archive",
    "year_listing_url",
]
