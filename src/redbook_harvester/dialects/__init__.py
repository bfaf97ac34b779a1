"""Dialect exports for Redbook Harvester."""

from .base import Dialect, UnknownDialectError, optional_field
from .registry import (
    DialectEntry,
    DialectInfo,
    DialectRegistry,
    dialect_for_file_name,
    register_default_dialects,
    registry,
)

__all__ = [
    "Dialect",
    "DialectEntry",
    "DialectInfo",
    "DialectRegistry",
    "UnknownDialectError",
    "dialect_for_file_name",
    "optional_field",
    "register_default_dialects",
    "registry",
]
