"""Inspection fact bundles and the accessor contract the resolver reads.

An inspected root is described by a handful of facts produced elsewhere
(type, distro, version numbers and, for Windows, product fields and the
build number). `InspectionFacts` holds them as an immutable value and
exposes the same `get_*` accessors as a live inspection handle, so the
resolver accepts either.

Absent facts are `None`; an empty string is a present (empty) fact.
"""
from __future__ import annotations

import dataclasses
import hashlib
import json
import re
import typing as t


_UINT_RE = re.compile(r"\s*\+?([0-9]+)", re.ASCII)
_UINT_MAX = 2**31 - 1
_UINT_MAX_DIGITS = len(str(_UINT_MAX))

# canonical key -> accepted input keys, first present wins
_KEY_ALIASES = {
    "os_type": ("os_type", "type"),
    "distro": ("distro",),
    "major_version": ("major_version", "major"),
    "minor_version": ("minor_version", "minor"),
    "product_name": ("product_name", "product"),
    "product_variant": ("product_variant", "variant"),
    "build_id": ("build_id", "build"),
}


def parse_unsigned_int(s: t.Optional[str]) -> int:
    """Parse a non-negative decimal integer, returning -1 on failure.

    Leading whitespace and a leading ``+`` are accepted; any trailing
    character, a minus sign or a value above 2**31-1 is a failure.
    """
    if not isinstance(s, str):
        return -1
    m = _UINT_RE.fullmatch(s)
    if not m:
        return -1
    digits = m.group(1).lstrip("0") or "0"
    # checked before int() so oversized strings never reach the conversion
    if len(digits) > _UINT_MAX_DIGITS:
        return -1
    val = int(digits)
    if val > _UINT_MAX:
        return -1
    return val


def _lookup(d: dict, key: str) -> t.Tuple[bool, t.Any]:
    for alias in _KEY_ALIASES[key]:
        if alias in d:
            return True, d[alias]
    return False, None


def _opt_str(v) -> t.Optional[str]:
    if v is None:
        return None
    if isinstance(v, str):
        return v
    return str(v)


def _version(v) -> int:
    if isinstance(v, bool):
        return 0
    if isinstance(v, int):
        return v
    if isinstance(v, str):
        n = parse_unsigned_int(v)
        return n if n >= 0 else 0
    return 0


@dataclasses.dataclass(frozen=True)
class InspectionFacts:
    os_type: t.Optional[str] = None
    distro: t.Optional[str] = None
    major_version: int = 0
    minor_version: int = 0
    product_name: t.Optional[str] = None
    product_variant: t.Optional[str] = None
    build_id: t.Optional[str] = None

    def get_type(self) -> t.Optional[str]:
        return self.os_type

    def get_distro(self) -> t.Optional[str]:
        return self.distro

    def get_major_version(self) -> int:
        return self.major_version

    def get_minor_version(self) -> int:
        return self.minor_version

    def get_product_name(self) -> t.Optional[str]:
        return self.product_name

    def get_product_variant(self) -> t.Optional[str]:
        return self.product_variant

    def get_build_id(self) -> t.Optional[str]:
        return self.build_id

    @classmethod
    def from_dict(cls, d: dict) -> "InspectionFacts":
        """Build facts from a JSON-shaped dict.

        Both the snake_case field names and the short inspection keys
        (`type`, `major`, `minor`, `product`, `variant`, `build`) are
        accepted. Version numbers given as strings are parsed as unsigned
        decimals; anything unparsable counts as 0.
        """
        if not isinstance(d, dict):
            raise ValueError(f"fact bundle must be a JSON object, got {type(d).__name__}")
        kwargs = {}
        for key in ("os_type", "distro", "product_name", "product_variant", "build_id"):
            found, v = _lookup(d, key)
            if found:
                kwargs[key] = _opt_str(v)
        for key in ("major_version", "minor_version"):
            found, v = _lookup(d, key)
            if found:
                kwargs[key] = _version(v)
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


def canonical_bytes(obj: object) -> bytes:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def facts_sha1(facts: InspectionFacts) -> str:
    """Return a deterministic SHA1 hex id for a fact bundle."""
    return hashlib.sha1(canonical_bytes(facts.to_dict())).hexdigest()
