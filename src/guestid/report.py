"""Versioned resolution records for single and batched fact bundles.

Each record carries the canonical facts, their SHA1 id, the outcome
status and the resolved id, so a run over the same input always
serializes to the same bytes.
"""
from __future__ import annotations

import logging
import typing as t

from .facts import InspectionFacts, canonical_bytes, facts_sha1
from .resolver import UNKNOWN, MissingFactsError, resolve_osinfo
from .rules import RULES_VERSION


log = logging.getLogger("guestid.report")

RECORD_SCHEMA_VERSION = "osinfo_record/v1"

STATUS_OK = "ok"
STATUS_UNKNOWN = "unknown"
STATUS_MISSING = "missing_facts"


def canonical_json(obj: t.Any) -> str:
    return canonical_bytes(obj).decode("utf-8")


def build_record(facts: InspectionFacts, name: t.Optional[str] = None) -> dict:
    """Resolve `facts` and wrap the outcome in a record dict.

    A missing fact yields a `missing_facts` record; it is never reported
    as `unknown`.
    """
    osinfo = None
    missing = None
    try:
        osinfo = resolve_osinfo(facts)
    except MissingFactsError as e:
        missing = e.fact
        log.warning("cannot resolve %s: %s", name or facts_sha1(facts)[:12], e)

    if missing is not None:
        status = STATUS_MISSING
    elif osinfo == UNKNOWN:
        status = STATUS_UNKNOWN
    else:
        status = STATUS_OK

    record = {
        "schema_version": RECORD_SCHEMA_VERSION,
        "rules_version": RULES_VERSION,
        "facts": facts.to_dict(),
        "facts_sha1": facts_sha1(facts),
        "status": status,
        "osinfo": osinfo,
        "missing": missing,
    }
    if name is not None:
        record["name"] = name
    return record


def _iter_bundles(data) -> t.Iterator[t.Tuple[t.Optional[str], t.Any]]:
    # accepted shapes: [bundle, ...], {"bundles": [...]}, {name: bundle, ...}
    if isinstance(data, list):
        for b in data:
            yield None, b
        return
    if isinstance(data, dict):
        if isinstance(data.get("bundles"), list):
            for b in data["bundles"]:
                yield None, b
            return
        for k, v in data.items():
            yield str(k), v
        return
    raise ValueError(f"unrecognized fact bundle input: {type(data).__name__}")


def resolve_batch(data) -> t.Tuple[t.List[dict], dict]:
    """Resolve every bundle in `data`; return (records, summary)."""
    records = []
    skipped = 0
    for name, bundle in _iter_bundles(data):
        try:
            facts = InspectionFacts.from_dict(bundle)
        except ValueError as e:
            log.warning("skipping malformed bundle %s: %s", name if name is not None else len(records) + skipped, e)
            skipped += 1
            continue
        if name is None and isinstance(bundle.get("name"), str):
            name = bundle["name"]
        records.append(build_record(facts, name=name))

    summary = {
        "total": len(records) + skipped,
        STATUS_OK: sum(1 for r in records if r["status"] == STATUS_OK),
        STATUS_UNKNOWN: sum(1 for r in records if r["status"] == STATUS_UNKNOWN),
        STATUS_MISSING: sum(1 for r in records if r["status"] == STATUS_MISSING),
        "skipped": skipped,
    }
    log.info("resolved %d bundle(s): %s", summary["total"], summary)
    return records, summary
