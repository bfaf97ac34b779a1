from __future__ import annotations

import json
from pathlib import Path

from redbook_harvester.models import ensure_parent


class SyncLedger:
    """JSON list of archive URLs that finished processing."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _ensure(self) -> None:
        if not self.path.exists():
            ensure_parent(self.path)
            self.path.write_text("[]\n", encoding="utf-8")

    def urls(self) -> list[str]:
        self._ensure()
        payload = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        if not isinstance(payload, list):
            raise ValueError(f"Sync file {self.path} must hold a JSON list")
        return [str(url) for url in payload]

    def __contains__(self, url: object) -> bool:
        return url in self.urls()

    def add(self, url: str) -> None:
        urls = self.urls()
        if url in urls:
            return
        urls.append(url)
        self.path.write_text(
            json.dumps(urls, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )


__all__ = ["SyncLedger"]
