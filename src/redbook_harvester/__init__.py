"""Redbook Harvester primary package."""

from . import (
    claims,
    config,
    dialects,
    engine,
    log_utils,
    models,
    normalizer,
    sections,
)

__all__ = [
    "claims",
    "config",
    "dialects",
    "engine",
    "log_utils",
    "models",
    "normalizer",
    "sections",
]
