from __future__ import annotations

import base64
import hashlib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import redbook_harvester.sync.storage as storage_mod
from redbook_harvester.sync.storage import (
    json_file_name,
    save_to_local_directory,
    save_to_remote,
)


@dataclass
class _FakeHttpxResponse:
    status_code: int = 200

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")


def test_local_save_never_overwrites(tmp_path: Path) -> None:
    target = tmp_path / "raw"
    first = save_to_local_directory(target, "ipg.xml", b"first")
    second = save_to_local_directory(target, "ipg.xml", b"second")

    assert first == second == target / "ipg.xml"
    assert (target / "ipg.xml").read_bytes() == b"first"


def test_local_save_without_directory_is_noop() -> None:
    assert save_to_local_directory(None, "ipg.xml", b"data") is None


def test_remote_save_posts_base64_payload(monkeypatch: Any) -> None:
    calls: list[dict[str, Any]] = []

    def fake_post(url: str, **kwargs: Any) -> _FakeHttpxResponse:
        calls.append({"url": url, **kwargs})
        return _FakeHttpxResponse()

    monkeypatch.setattr(storage_mod, "_http_post", fake_post)
    save_to_remote(
        "https://store.example/raw",
        "ipg.xml",
        b"<xml/>",
        headers={"User-Agent": "t"},
        timeout=5.0,
    )

    (call,) = calls
    assert call["url"] == "https://store.example/raw"
    assert call["json"]["fileName"] == "ipg.xml"
    assert base64.b64decode(call["json"]["data"]) == b"<xml/>"
    assert call["json"]["sha256"] == hashlib.sha256(b"<xml/>").hexdigest()
    assert call["headers"] == {"User-Agent": "t"}
    assert call["timeout"] == 5.0


def test_remote_save_skipped_without_url(monkeypatch: Any) -> None:
    def fail_post(*args: Any, **kwargs: Any) -> None:
        raise AssertionError("should not post")

    monkeypatch.setattr(storage_mod, "_http_post", fail_post)
    assert save_to_remote(None, "ipg.xml", b"x") is None


def test_json_file_name() -> None:
    assert json_file_name("ipg180102.xml") == "ipg180102.json"
    assert json_file_name("pftaps19760106_wk01.txt") == "pftaps19760106_wk01.json"
