"""Tests for pgcheck.config — environment driven settings."""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pgcheck.config import (
    CheckerConfig,
    DEFAULT_CHECK_INTERVAL_S,
    DEFAULT_TIMEOUT_S,
    MIN_CHECK_INTERVAL_S,
    derive_fallback_url,
    load_config,
)
from pgcheck.exceptions import ConfigurationError

_ENV = [
    'PGCHECK_PRIMARY_URL', 'PGCHECK_FALLBACK_URL', 'PGCHECK_USER_AGENT', 'PGCHECK_TIMEOUT_S',
    'PGCHECK_CHECK_INTERVAL_S', 'PGCHECK_INSTALLED_VERSION', 'PGCHECK_ADB_PATH', 'PGCHECK_ADB_SERIAL',
    'PGCHECK_WEBHOOK_URL', 'PGCHECK_DATA_DIR', 'PGCHECK_RATE_LIMIT',
]


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


class TestDefaults:

    def test_defaults(self):
        config = load_config()
        assert config.primary_url == 'https://pgsharp.com'
        assert config.fallback_url == 'https://pgsharp.com/download'
        assert config.timeout_s == DEFAULT_TIMEOUT_S == 15.0
        assert config.check_interval_s == DEFAULT_CHECK_INTERVAL_S == 12 * 3600
        assert 'Mozilla/5.0' in config.user_agent
        assert config.installed_version is None
        assert config.packages[0] == 'com.nianticlabs.pokemongo'

    def test_derive_fallback_url(self):
        assert derive_fallback_url('https://example.test/') == 'https://example.test/download'


class TestOverrides:

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv('PGCHECK_PRIMARY_URL', 'https://mirror.test')
        monkeypatch.setenv('PGCHECK_TIMEOUT_S', '5')
        monkeypatch.setenv('PGCHECK_INSTALLED_VERSION', '0.385.2')
        monkeypatch.setenv('PGCHECK_DATA_DIR', '/tmp/pgcheck-test')
        config = load_config()
        assert config.fallback_url == 'https://mirror.test/download'
        assert config.timeout_s == 5.0
        assert config.installed_version == '0.385.2'
        assert config.preferences_path == os.path.join('/tmp/pgcheck-test', 'preferences.json')

    def test_explicit_fallback_url(self, monkeypatch):
        monkeypatch.setenv('PGCHECK_FALLBACK_URL', 'https://other.test/dl')
        assert load_config().fallback_url == 'https://other.test/dl'

    def test_invalid_numbers_fall_back(self, monkeypatch):
        monkeypatch.setenv('PGCHECK_TIMEOUT_S', 'soon')
        monkeypatch.setenv('PGCHECK_CHECK_INTERVAL_S', '-5')
        config = load_config()
        assert config.timeout_s == DEFAULT_TIMEOUT_S
        assert config.check_interval_s == DEFAULT_CHECK_INTERVAL_S

    def test_interval_clamped_to_minimum(self, monkeypatch):
        monkeypatch.setenv('PGCHECK_CHECK_INTERVAL_S', '5')
        assert load_config().check_interval_s == MIN_CHECK_INTERVAL_S


def test_empty_primary_url_rejected():
    with pytest.raises(ConfigurationError) as exc:
        CheckerConfig(primary_url='  ')
    assert exc.value.to_dict()['error_code'] == 'CONFIGURATION_ERROR'
