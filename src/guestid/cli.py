"""Command line front end for guestid."""
from __future__ import annotations

import argparse
import json
import logging
import sys

from .facts import InspectionFacts
from .logging_config import setup_logging
from .report import STATUS_MISSING, build_record, canonical_json, resolve_batch
from .rules import RULES_VERSION, rules_as_dict
from . import __version__


log = logging.getLogger("guestid.cli")


# exit codes: 0 success, 2 missing facts, 10 unreadable input / internal
EXIT_OK = 0
EXIT_MISSING = 2
EXIT_INTERNAL = 10


def build_parser():
    p = argparse.ArgumentParser(prog="guestid", description="Resolve inspected OS facts to libosinfo short ids")
    p.add_argument("--log", default="INFO", help="Log level")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd")

    r = sub.add_parser("resolve", help="Resolve one fact bundle given as options")
    r.add_argument("--type", dest="os_type", help="OS type (linux, windows, freebsd, netbsd, openbsd, dos)")
    r.add_argument("--distro", help="Distribution name")
    r.add_argument("--major", type=int, default=0, help="Major version (default 0)")
    r.add_argument("--minor", type=int, default=0, help="Minor version (default 0)")
    r.add_argument("--product-name", help="Windows product name")
    r.add_argument("--product-variant", help="Windows product variant (e.g. Client, Server)")
    r.add_argument("--build-id", help="Windows build number")
    r.add_argument("--json", action="store_true", help="Emit the canonical JSON record instead of the bare id")

    b = sub.add_parser("batch", help="Resolve every fact bundle in a JSON file")
    b.add_argument("input", help="JSON file: list of bundles, {\"bundles\": [...]} or {name: bundle}")
    b.add_argument("--out", help="Write the JSON result here instead of stdout", metavar="FILE")
    b.add_argument("--quiet", action="store_true", help="Suppress the human summary on stderr")

    t = sub.add_parser("rules", help="Print the ordered rule tables")
    t.add_argument("--json", action="store_true", help="Emit canonical JSON")
    return p, {"resolve": r, "batch": b, "rules": t}


def _cmd_resolve(args) -> int:
    facts = InspectionFacts(
        os_type=args.os_type,
        distro=args.distro,
        major_version=args.major,
        minor_version=args.minor,
        product_name=args.product_name,
        product_variant=args.product_variant,
        build_id=args.build_id,
    )
    record = build_record(facts)
    if args.json:
        print(canonical_json(record))
    elif record["status"] == STATUS_MISSING:
        print(f"error: missing inspection fact: {record['missing']}", file=sys.stderr)
    else:
        print(record["osinfo"])
    return EXIT_MISSING if record["status"] == STATUS_MISSING else EXIT_OK


def _cmd_batch(args) -> int:
    try:
        with open(args.input, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        log.error("cannot read fact bundles from %s: %s", args.input, e)
        return EXIT_INTERNAL

    try:
        records, summary = resolve_batch(data)
    except ValueError as e:
        log.error("%s: %s", args.input, e)
        return EXIT_INTERNAL

    out = {
        "meta": {"version": __version__, "rules_version": RULES_VERSION, "input": args.input},
        "records": records,
        "summary": summary,
    }
    payload = canonical_json(out)
    if args.out:
        try:
            with open(args.out, "w", encoding="utf-8") as fh:
                fh.write(payload)
        except OSError:
            log.exception("failed to write %s", args.out)
            return EXIT_INTERNAL
    else:
        print(payload)

    if not args.quiet:
        print(
            f"guestid v{__version__} - {summary['total']} bundle(s): ok={summary['ok']} "
            f"unknown={summary['unknown']} missing_facts={summary['missing_facts']} skipped={summary['skipped']}",
            file=sys.stderr,
        )
    return EXIT_MISSING if summary[STATUS_MISSING] else EXIT_OK


def _cmd_rules(args) -> int:
    tables = rules_as_dict()
    if args.json:
        print(canonical_json(tables))
        return EXIT_OK
    print(f"# {tables['rules_version']}")
    print("# linux: distro, template, min_major")
    for r in tables["linux"]:
        tmpl = r["template"] if r["template"] is not None else "<distro>"
        floor = r["min_major"] if r["min_major"] is not None else "any"
        print(f"{r['distro']}\t{tmpl}\t{floor}")
    print("# windows: major.minor, id, variant contains, name contains")
    for r in tables["windows"]:
        print(f"{r['major']}.{r['minor']}\t{r['osinfo_id']}\t{r['variant_contains'] or '*'}\t{r['name_contains'] or '*'}")
    return EXIT_OK


def main(argv=None):
    parser, _ = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log)

    handlers = {"resolve": _cmd_resolve, "batch": _cmd_batch, "rules": _cmd_rules}
    handler = handlers.get(args.cmd)
    if handler is None:
        parser.print_help()
        return EXIT_OK
    try:
        code = handler(args)
    except SystemExit:
        raise
    except Exception:
        log.exception("%s failed unexpectedly", args.cmd)
        sys.exit(EXIT_INTERNAL)
    if code:
        sys.exit(code)
    return code


if __name__ == "__main__":
    main()
