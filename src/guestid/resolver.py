"""Map inspected OS facts to a libosinfo short id.

`resolve_osinfo(facts)` is a pure function of the facts it reads and
the rule tables in `guestid.rules`. It returns either an id token or
the literal ``"unknown"`` when every required fact was available but no
rule matched. A required fact that cannot be obtained raises
`MissingFactsError` instead; the two outcomes are never conflated.

`facts` is anything exposing the accessor contract of
`guestid.facts.InspectionFacts` (`get_type()`, `get_distro()`, ...).
`get_build_id()` is only called on the Windows 10.0 client path.
"""
from __future__ import annotations

import logging

from .facts import parse_unsigned_int
from .rules import LINUX_RULES, WINDOWS_RULES, WIN11_FIRST_BUILD


log = logging.getLogger("guestid.resolver")

UNKNOWN = "unknown"

_BSD_TYPES = ("freebsd", "netbsd", "openbsd")


class MissingFactsError(Exception):
    """A fact the resolver needs could not be obtained or parsed."""

    def __init__(self, fact: str, detail: str | None = None):
        self.fact = fact
        self.detail = detail
        msg = f"missing inspection fact: {fact}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


def _resolve_linux(distro: str, major: int, minor: int) -> str:
    for rule in LINUX_RULES:
        if rule.matches(distro, major):
            log.debug("linux rule matched: %r", rule)
            return rule.render(distro, major, minor)

    # SLE drops the trailing "s" from 15 onwards: sle15sp3, sles12, sles11sp3
    if distro == "sles":
        base = "sle" if major >= 15 else "sles"
        if minor == 0:
            return f"{base}{major}"
        return f"{base}{major}sp{minor}"

    if distro != UNKNOWN and (major > 0 or minor > 0):
        log.debug("no linux rule for %s, using version fallback", distro)
        return f"{distro}{major}.{minor}"

    return UNKNOWN


def _resolve_windows(facts, major: int, minor: int) -> str:
    product_name = facts.get_product_name()
    if product_name is None:
        raise MissingFactsError("product_name")
    product_variant = facts.get_product_variant()
    if product_variant is None:
        raise MissingFactsError("product_variant")

    for rule in WINDOWS_RULES:
        if rule.matches(major, minor, product_name, product_variant):
            log.debug("windows rule matched: %r", rule)
            return rule.osinfo_id

    # 10.0 clients only differ by build number (Windows 11 starts at 22000)
    if major == 10 and minor == 0 and "Server" not in product_variant:
        build_id_str = facts.get_build_id()
        if build_id_str is None:
            raise MissingFactsError("build_id")
        build_id = parse_unsigned_int(build_id_str)
        if build_id == -1:
            raise MissingFactsError("build_id", f"not an unsigned integer: {build_id_str!r}")
        return "win11" if build_id >= WIN11_FIRST_BUILD else "win10"

    return UNKNOWN


def resolve_osinfo(facts) -> str:
    """Return the libosinfo short id for `facts`, or ``"unknown"``.

    Raises `MissingFactsError` when the OS type or distro is absent, when
    a Windows product name/variant is absent, or when the build id needed
    to tell Windows 10 from 11 is absent or unparsable.
    """
    os_type = facts.get_type()
    if os_type is None:
        raise MissingFactsError("type")
    distro = facts.get_distro()
    if distro is None:
        raise MissingFactsError("distro")

    major = facts.get_major_version()
    minor = facts.get_minor_version()

    if os_type == "linux":
        return _resolve_linux(distro, major, minor)
    if os_type in _BSD_TYPES:
        return f"{distro}{major}.{minor}"
    if os_type == "dos":
        # the catalog carries a single DOS entry
        if distro == "msdos":
            return "msdos6.22"
        return UNKNOWN
    if os_type == "windows":
        return _resolve_windows(facts, major, minor)

    log.debug("no mapping for os type %r", os_type)
    return UNKNOWN
