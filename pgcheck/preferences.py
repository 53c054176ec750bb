"""User preferences persisted as JSON (auto-check on/off)."""

import json
import logging
import os
import threading
from dataclasses import asdict, dataclass

_LOG = logging.getLogger('pgcheck.preferences')


@dataclass
class Preferences:
    auto_check_enabled: bool = False


class PreferenceStore:
    """Load/save Preferences at ``path``; a missing or unreadable file gives defaults."""

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()
        self._prefs = self._load()

    def _load(self) -> Preferences:
        if not os.path.isfile(self.path):
            return Preferences()
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as err:
            _LOG.warning('failed to load preferences from %s: %s', self.path, err)
            return Preferences()
        if not isinstance(data, dict):
            return Preferences()
        return Preferences(**{k: v for k, v in data.items() if k in Preferences.__dataclass_fields__})

    def _save(self):
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp = self.path + '.tmp'
        with open(tmp, 'w', encoding='utf-8') as f:
            json.dump(asdict(self._prefs), f, indent=2)
        os.replace(tmp, self.path)

    @property
    def auto_check_enabled(self) -> bool:
        with self._lock:
            return bool(self._prefs.auto_check_enabled)

    def set_auto_check(self, enabled: bool):
        with self._lock:
            self._prefs.auto_check_enabled = bool(enabled)
            try:
                self._save()
            except OSError as err:
                _LOG.warning('failed to save preferences to %s: %s', self.path, err)
                return
        _LOG.info('auto check %s', 'enabled' if enabled else 'disabled')
