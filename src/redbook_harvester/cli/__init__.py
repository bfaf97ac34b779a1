"""CLI entry points for Redbook Harvester."""

import importlib
from typing import Any, cast

_cli_mod = importlib.import_module("redbook_harvester.cli.app")
app = cast(Any, _cli_mod).app
dialects = cast(Any, _cli_mod).dialects
extract = cast(Any, _cli_mod).extract
run = cast(Any, _cli_mod).run
sync = cast(Any, _cli_mod).sync

__all__ = [
    "app",
    "dialects",
    "extract",
    "run",
    "sync",
]
