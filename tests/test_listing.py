from __future__ import annotations

from redbook_harvester.sync.listing import (
    archive_name,
    archive_url,
    extract_archive_links,
    is_grant_archive,
    year_listing_url,
)

LISTING = """
<html><body><table>
<tr><td><a href="ipg180102.zip">ipg180102.zip</a></td></tr>
<tr><td><a href="ipg180102-SUPP.zip">supplement</a></td></tr>
<tr><td><a href='ipg180109.ZIP'>ipg180109.ZIP</a></td></tr>
<tr><td><a href="ipgdtd.zip">DTD</a></td></tr>
<tr><td><a href="ipg180102.zip">again</a></td></tr>
<tr><td><a href="README.txt">readme</a></td></tr>
<tr><td><a href="?C=M;O=A">sort</a></td></tr>
</table></body></html>
"""


def test_year_listing_url() -> None:
    url = year_listing_url("https://host/fulltext/", 2018)
    assert url == "https://host/fulltext/2018"


def test_links_filtered_and_deduplicated_in_order() -> None:
    assert extract_archive_links(LISTING) == ["ipg180102.zip", "ipg180109.ZIP"]


def test_is_grant_archive() -> None:
    assert is_grant_archive("pftaps19760106_wk01.zip")
    assert not is_grant_archive("pg011225-supp.zip")
    assert not is_grant_archive("PGDTD.ZIP")
    assert not is_grant_archive("pg011225.tar")


def test_archive_url_and_name() -> None:
    url = archive_url("https://host/fulltext/2018", "ipg180102.zip")

    assert url == "https://host/fulltext/2018/ipg180102.zip"
    assert archive_url("https://host/fulltext/2018", "https://cdn/x/pg0.zip") == (
        "https://cdn/x/pg0.zip"
    )
    assert archive_name("sub/dir/ipg180102.zip") == "ipg180102.zip"
