import json

from guestid.facts import InspectionFacts
from guestid.resolver import resolve_osinfo
from guestid.rules import LINUX_RULES, RULES_VERSION, WINDOWS_RULES, LinuxRule, WindowsRule, rules_as_dict


def test_tables_are_ordered_tuples():
    assert isinstance(LINUX_RULES, tuple)
    assert isinstance(WINDOWS_RULES, tuple)
    assert all(isinstance(r, LinuxRule) for r in LINUX_RULES)
    assert all(isinstance(r, WindowsRule) for r in WINDOWS_RULES)


def test_version_floors_descend_within_a_distro():
    # a later rule for the same distro must never have a higher floor
    seen = {}
    for r in LINUX_RULES:
        floor = -1 if r.min_major is None else r.min_major
        if r.distro in seen:
            assert floor <= seen[r.distro], r
        seen[r.distro] = floor


def test_windows_wildcards_follow_specific_siblings():
    def specificity(r):
        return (r.variant_contains is not None) + (r.name_contains is not None)

    for i, r in enumerate(WINDOWS_RULES):
        for later in WINDOWS_RULES[i + 1:]:
            if (later.major, later.minor) == (r.major, r.minor):
                # wildcard rows never shadow a more constrained row after them
                assert specificity(later) <= specificity(r), (r, later)


def test_every_windows_rule_reachable():
    samples = {
        "winxp": [(5, 1, "Windows XP", ""), (5, 2, "Windows XP x64", "")],
        "win2k3r2": [(5, 2, "Windows Server 2003 R2", "")],
        "win2k3": [(5, 2, "Windows Server 2003", "")],
        "winvista": [(6, 0, "Windows Vista", "Client")],
        "win2k8": [(6, 0, "Windows Server 2008", "Server")],
        "win7": [(6, 1, "Windows 7", "Client")],
        "win2k8r2": [(6, 1, "Windows Server 2008 R2", "Server")],
        "win8": [(6, 2, "Windows 8", "Client")],
        "win2k12": [(6, 2, "Windows Server 2012", "Server")],
        "win8.1": [(6, 3, "Windows 8.1", "Client")],
        "win2k12r2": [(6, 3, "Windows Server 2012 R2", "Server")],
        "win2k25": [(10, 0, "Windows Server 2025", "Server")],
        "win2k22": [(10, 0, "Windows Server 2022", "Server")],
        "win2k19": [(10, 0, "Windows Server 2019", "Server")],
        "win2k16": [(10, 0, "Windows Server 2016", "Server")],
    }
    assert set(samples) == {r.osinfo_id for r in WINDOWS_RULES}
    for expected, cases in samples.items():
        for major, minor, name, variant in cases:
            f = InspectionFacts("windows", "windows", major, minor, name, variant)
            assert resolve_osinfo(f) == expected


def test_linux_rule_render():
    assert LinuxRule("ubuntu", "{distro}{major}.{minor:02d}", None).render("ubuntu", 18, 4) == "ubuntu18.04"
    assert LinuxRule("gentoo", None, None).render("gentoo", 2, 1) == "gentoo"


def test_windows_rule_wildcards():
    r = WindowsRule(6, 1, "win7")
    assert r.matches(6, 1, "", "")
    assert not r.matches(6, 2, "", "")


def test_rules_as_dict_is_json_safe_and_ordered():
    d = rules_as_dict()
    assert d["rules_version"] == RULES_VERSION
    json.dumps(d)
    assert [r["osinfo_id"] for r in d["windows"]] == [r.osinfo_id for r in WINDOWS_RULES]
    assert d["linux"][0] == {"distro": "centos", "template": "{distro}{major}", "min_major": 8}
