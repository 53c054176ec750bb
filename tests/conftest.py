import sys
import pathlib
from unittest.mock import MagicMock

import pytest

# Ensure project root is on sys.path so 'import pgcheck' works when pytest runs from
# different working directories or when running individual tests.
_ROOT = pathlib.Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from pgcheck import create_app, periodic
from pgcheck.config import CheckerConfig
from pgcheck.fetch import FetchFailure, FetchSuccess
from pgcheck.logging_utils import reset_suppressed
from pgcheck.pipeline import VersionCheckPipeline
from pgcheck.service import CheckService

PRIMARY = 'https://pgsharp.test'
FALLBACK = 'https://pgsharp.test/download'

PRIMARY_HTML = '<html><body><h1>PGSharp 1.150.0</h1><p>Supports Pokemon Go (0.386.0-G)</p></body></html>'
DOWNLOAD_HTML = '<html><body><a href="/apk">Download PGSharp (0.387.1-G)</a></body></html>'


class FakeFetcher:
    """Returns canned FetchResults per URL and records the call order."""

    def __init__(self, responses):
        self.responses = dict(responses)
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        return self.responses[url]


class FakeProvider:
    def __init__(self, version='0.385.2'):
        self.version = version

    def get_installed_version(self):
        return self.version


def ok(url, html):
    return FetchSuccess(url=url, html=html)


def transport_error(url, kind='conn'):
    return FetchFailure(url=url, kind=kind, reason='Connection refused')


def make_pipeline(primary, fallback):
    fetcher = FakeFetcher({PRIMARY: primary, FALLBACK: fallback})
    return VersionCheckPipeline(fetcher, PRIMARY, FALLBACK), fetcher


def make_service(primary=None, fallback=None, installed='0.385.2'):
    pipeline, _ = make_pipeline(primary or ok(PRIMARY, PRIMARY_HTML), fallback or ok(FALLBACK, DOWNLOAD_HTML))
    notifier = MagicMock()
    notifier.notify_test.return_value = True
    return CheckService(pipeline, FakeProvider(installed), notifier)


@pytest.fixture(autouse=True)
def _clean_state():
    reset_suppressed()
    yield
    periodic.stop_periodic_checks()


@pytest.fixture
def config(tmp_path):
    return CheckerConfig(primary_url=PRIMARY, data_dir=str(tmp_path), rate_limit='100 per minute')


@pytest.fixture
def service():
    return make_service()


@pytest.fixture
def app(config, service):
    app = create_app(config=config, service=service, start_scheduler=False)
    app.testing = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
