"""Installed Pokemon Go version lookup.

The version is read from an Android device over adb
(``dumpsys package <pkg>`` -> ``versionName=...``), trying candidate package
names in order. ``PGCHECK_INSTALLED_VERSION`` short-circuits the lookup for
hosts without a device attached.
"""

import logging
import re
from typing import List, Optional, Sequence

from . import safe_subprocess
from .config import CheckerConfig, POKEMON_GO_PACKAGES

_LOG = logging.getLogger('pgcheck.installed')

ADB_TIMEOUT_S = 10
SEARCH_KEYWORDS = ('pokemon', 'niantic', 'pgsharp', 'pogo')

_VERSION_NAME_RE = re.compile(r'versionName=(\S+)')
_PACKAGE_LINE_RE = re.compile(r'^package:(\S+)$', re.MULTILINE)


class InstalledVersionProvider:

    def __init__(self, config: Optional[CheckerConfig] = None,
                 packages: Optional[Sequence[str]] = None):
        self.config = config or CheckerConfig()
        self.packages = tuple(packages or self.config.packages or POKEMON_GO_PACKAGES)
        safe_subprocess.register_allowed_executable(self.config.adb_path)

    def _adb(self, *args: str) -> Optional[str]:
        cmd = [self.config.adb_path]
        if self.config.adb_serial:
            cmd += ['-s', self.config.adb_serial]
        cmd += list(args)
        try:
            proc = safe_subprocess.safe_run(cmd, timeout=ADB_TIMEOUT_S)
        except FileNotFoundError:
            _LOG.error('adb executable not found: %s', self.config.adb_path)
            return None
        except safe_subprocess.TimeoutExpired:
            _LOG.error('adb timed out after %ss: %s', ADB_TIMEOUT_S, ' '.join(args))
            return None
        if proc.returncode != 0:
            _LOG.warning('adb exited %s: %s', proc.returncode, (proc.stderr or '').strip()[:200])
            return None
        return proc.stdout

    def version_of(self, package: str) -> Optional[str]:
        output = self._adb('shell', 'dumpsys', 'package', package)
        if not output:
            return None
        match = _VERSION_NAME_RE.search(output)
        return match.group(1) if match else None

    def get_installed_version(self) -> Optional[str]:
        """First installed candidate's version, or None if none is present."""
        if self.config.installed_version:
            _LOG.debug('using configured installed version %s', self.config.installed_version)
            return self.config.installed_version
        for package in self.packages:
            version = self.version_of(package)
            if version:
                _LOG.info('found package %s with version %s', package, version)
                return version
            _LOG.debug('package %s not found, trying next', package)
        _LOG.error('no Pokemon Go package found on device')
        return None

    def search_packages(self) -> List[str]:
        """Installed packages that look related (pokemon/niantic/pgsharp/pogo)."""
        output = self._adb('shell', 'pm', 'list', 'packages')
        if not output:
            return []
        return [
            name for name in _PACKAGE_LINE_RE.findall(output)
            if any(key in name.lower() for key in SEARCH_KEYWORDS)
        ]
