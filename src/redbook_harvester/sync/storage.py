from __future__ import annotations

import base64
import hashlib
import logging
from pathlib import Path
from typing import Callable, Mapping

import httpx

logger = logging.getLogger(__name__)

_http_post: Callable[..., httpx.Response] = httpx.post


def save_to_local_directory(
    directory: Path | None, file_name: str, contents: bytes
) -> Path | None:
    """Write ``contents`` under ``directory`` unless the file already exists."""

    if directory is None:
        return None
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / file_name
    if path.exists():
        logger.debug("Keeping existing %s", path)
        return path
    path.write_bytes(contents)
    return path


def save_to_remote(
    url: str | None,
    file_name: str,
    contents: bytes,
    *,
    headers: Mapping[str, str] | None = None,
    timeout: float = 30.0,
) -> httpx.Response | None:
    """POST a file to a remote endpoint as base64 JSON."""

    if not url:
        return None
    payload = {
        "fileName": file_name,
        "sha256": hashlib.sha256(contents).hexdigest(),
        "data": base64.b64encode(contents).decode("ascii"),
    }
    resp = _http_post(url, json=payload, headers=dict(headers or {}), timeout=timeout)
    resp.raise_for_status()
    return resp


def json_file_name(entry_name: str) -> str:
    return f"{entry_name.split('.', 1)[0]}.json"


__all__ = ["json_file_name", "save_to_local_directory", "save_to_remote"]
