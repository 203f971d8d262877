"""Resolve inspected guest OS facts to libosinfo short ids."""
from __future__ import annotations

__version__ = "0.1.0"

from .facts import InspectionFacts, parse_unsigned_int
from .resolver import UNKNOWN, MissingFactsError, resolve_osinfo

__all__ = [
    "__version__",
    "InspectionFacts",
    "MissingFactsError",
    "UNKNOWN",
    "parse_unsigned_int",
    "resolve_osinfo",
]
