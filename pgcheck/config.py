"""Runtime configuration read from ``PGCHECK_*`` environment variables."""

import logging
import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

_LOG = logging.getLogger('pgcheck.config')

DEFAULT_PRIMARY_URL = 'https://pgsharp.com'
DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)
DEFAULT_TIMEOUT_S = 15.0
DEFAULT_CHECK_INTERVAL_S = 12 * 3600
MIN_CHECK_INTERVAL_S = 60
DEFAULT_RATE_LIMIT = '10 per minute'

POKEMON_GO_PACKAGES = (
    'com.nianticlabs.pokemongo',
    'com.pgsharp.pokemongo',
    'com.nianticproject.holoholo',
)


@dataclass(frozen=True)
class CheckerConfig:
    primary_url: str = DEFAULT_PRIMARY_URL
    fallback_url: str = ''
    user_agent: str = DEFAULT_USER_AGENT
    timeout_s: float = DEFAULT_TIMEOUT_S
    check_interval_s: int = DEFAULT_CHECK_INTERVAL_S
    installed_version: str | None = None
    adb_path: str = 'adb'
    adb_serial: str | None = None
    webhook_url: str | None = None
    data_dir: str = ''
    rate_limit: str = DEFAULT_RATE_LIMIT
    packages: tuple = POKEMON_GO_PACKAGES

    def __post_init__(self):
        if not self.primary_url or not self.primary_url.strip():
            raise ConfigurationError('PGCHECK_PRIMARY_URL', 'primary URL must not be empty')
        if not self.fallback_url:
            object.__setattr__(self, 'fallback_url', derive_fallback_url(self.primary_url))
        if not self.data_dir:
            object.__setattr__(self, 'data_dir', os.path.join(os.path.expanduser('~'), '.pgcheck'))

    @property
    def preferences_path(self) -> str:
        return os.path.join(self.data_dir, 'preferences.json')


def derive_fallback_url(primary_url: str) -> str:
    """Download page on the same host as the primary page."""
    return primary_url.strip().rstrip('/') + '/download'


def _env_float(name: str, default: float, minimum: float | None = None) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        value = float(raw)
    except ValueError:
        _LOG.warning('invalid %s=%r; using default %s', name, raw, default)
        return default
    if value <= 0:
        _LOG.warning('non-positive %s=%r; using default %s', name, raw, default)
        return default
    if minimum is not None and value < minimum:
        _LOG.warning('%s=%s below minimum; clamped to %s', name, value, minimum)
        return minimum
    return value


def _env_str(name: str) -> str | None:
    value = os.environ.get(name, '').strip()
    return value or None


def load_config() -> CheckerConfig:
    """Build a CheckerConfig from the environment."""
    return CheckerConfig(
        primary_url=os.environ.get('PGCHECK_PRIMARY_URL', DEFAULT_PRIMARY_URL),
        fallback_url=os.environ.get('PGCHECK_FALLBACK_URL', ''),
        user_agent=_env_str('PGCHECK_USER_AGENT') or DEFAULT_USER_AGENT,
        timeout_s=_env_float('PGCHECK_TIMEOUT_S', DEFAULT_TIMEOUT_S),
        check_interval_s=int(_env_float('PGCHECK_CHECK_INTERVAL_S', DEFAULT_CHECK_INTERVAL_S,
                                        minimum=MIN_CHECK_INTERVAL_S)),
        installed_version=_env_str('PGCHECK_INSTALLED_VERSION'),
        adb_path=_env_str('PGCHECK_ADB_PATH') or 'adb',
        adb_serial=_env_str('PGCHECK_ADB_SERIAL'),
        webhook_url=_env_str('PGCHECK_WEBHOOK_URL'),
        data_dir=_env_str('PGCHECK_DATA_DIR') or '',
        rate_limit=_env_str('PGCHECK_RATE_LIMIT') or DEFAULT_RATE_LIMIT,
    )
