from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Mapping

from redbook_harvester.models import ensure_parent

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def write_jsonl(path: Path, records: Iterable[Mapping[str, object]]) -> int:
    ensure_parent(path)
    count = 0
    with path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(json.dumps(record, ensure_ascii=False))
            handle.write("\n")
            count += 1
    return count


__all__ = ["LOG_FORMAT", "configure_logging", "write_jsonl"]
