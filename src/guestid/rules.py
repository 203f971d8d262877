"""Static, ordered rule tables mapping inspected facts to libosinfo ids.

Both tables are scanned front to back and the first matching rule
wins, so order encodes priority: version-floor rules for a distro come
before the unbounded rule for the same distro, and Windows rules with a
substring condition come before wildcard siblings sharing the same
major/minor.
"""
from __future__ import annotations

import dataclasses
import typing as t


RULES_VERSION = "osinfo-rules/v1"


@dataclasses.dataclass(frozen=True)
class LinuxRule:
    distro: str
    # str.format template over distro/major/minor; None returns the distro as is
    template: t.Optional[str]
    # None matches any major version
    min_major: t.Optional[int]

    def matches(self, distro: str, major: int) -> bool:
        if distro != self.distro:
            return False
        return self.min_major is None or major >= self.min_major

    def render(self, distro: str, major: int, minor: int) -> str:
        if self.template is None:
            return distro
        return self.template.format(distro=distro, major=major, minor=minor)


@dataclasses.dataclass(frozen=True)
class WindowsRule:
    major: int
    minor: int
    osinfo_id: str
    variant_contains: t.Optional[str] = None
    name_contains: t.Optional[str] = None

    def matches(self, major: int, minor: int, product_name: str, product_variant: str) -> bool:
        if major != self.major or minor != self.minor:
            return False
        if self.variant_contains is not None and self.variant_contains not in product_variant:
            return False
        if self.name_contains is not None and self.name_contains not in product_name:
            return False
        return True


LINUX_RULES: t.Tuple[LinuxRule, ...] = (
    LinuxRule("centos", "{distro}{major}", 8),
    LinuxRule("centos", "{distro}{major}.0", 7),
    LinuxRule("centos", "{distro}{major}.{minor}", 6),
    LinuxRule("circle", "{distro}{major}", 8),
    LinuxRule("rocky", "{distro}{major}", 8),
    LinuxRule("debian", "{distro}{major}", 4),
    LinuxRule("fedora", "{distro}{major}", None),
    LinuxRule("mageia", "{distro}{major}", None),
    LinuxRule("ubuntu", "{distro}{major}.{minor:02d}", None),
    LinuxRule("archlinux", None, None),
    LinuxRule("gentoo", None, None),
    LinuxRule("voidlinux", None, None),
    LinuxRule("altlinux", "{distro}{major}.{minor}", 8),
    LinuxRule("altlinux", "{distro}{major}.{minor}", None),
)


WINDOWS_RULES: t.Tuple[WindowsRule, ...] = (
    WindowsRule(5, 1, "winxp"),
    WindowsRule(5, 2, "winxp", name_contains="XP"),
    WindowsRule(5, 2, "win2k3r2", name_contains="R2"),
    WindowsRule(5, 2, "win2k3"),
    WindowsRule(6, 0, "win2k8", variant_contains="Server"),
    WindowsRule(6, 0, "winvista"),
    WindowsRule(6, 1, "win2k8r2", variant_contains="Server"),
    WindowsRule(6, 1, "win7"),
    WindowsRule(6, 2, "win2k12", variant_contains="Server"),
    WindowsRule(6, 2, "win8"),
    WindowsRule(6, 3, "win2k12r2", variant_contains="Server"),
    WindowsRule(6, 3, "win8.1"),
    WindowsRule(10, 0, "win2k25", variant_contains="Server", name_contains="2025"),
    WindowsRule(10, 0, "win2k22", variant_contains="Server", name_contains="2022"),
    WindowsRule(10, 0, "win2k19", variant_contains="Server", name_contains="2019"),
    WindowsRule(10, 0, "win2k16", variant_contains="Server"),
)

# first Windows 10.0 client build shipped as Windows 11
WIN11_FIRST_BUILD = 22000


def rules_as_dict() -> dict:
    """Return both tables in order as JSON-safe data."""
    return {
        "rules_version": RULES_VERSION,
        "linux": [dataclasses.asdict(r) for r in LINUX_RULES],
        "windows": [dataclasses.asdict(r) for r in WINDOWS_RULES],
    }
