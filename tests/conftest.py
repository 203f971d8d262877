import pytest

from guestid.facts import InspectionFacts


def pytest_addoption(parser):
    parser.addoption(
        "--update-snapshots",
        action="store_true",
        default=False,
        help="Rewrite the expected ids in tests/data/golden_osinfo.json from the current run",
    )


@pytest.fixture
def update_snapshots(request):
    return request.config.getoption("--update-snapshots")


@pytest.fixture
def make_facts():
    def _make(os_type, distro, major=0, minor=0, **kw):
        return InspectionFacts(os_type=os_type, distro=distro, major_version=major, minor_version=minor, **kw)
    return _make


class RecordingProvider:
    """Fact provider that records which accessors the resolver called."""

    def __init__(self, facts: InspectionFacts):
        self._facts = facts
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("get_"):
            raise AttributeError(name)
        fn = getattr(self._facts, name)

        def _wrapped():
            self.calls.append(name)
            return fn()
        return _wrapped


@pytest.fixture
def recording_provider():
    return RecordingProvider
