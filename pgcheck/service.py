"""One check cycle: installed version -> pipeline -> notifier.

The service also keeps the most recent outcome for the status endpoint and
hands every outcome to subscribed callbacks.
"""

import logging
import threading
from typing import Callable, List, Optional

from . import metrics
from .config import CheckerConfig
from .installed import InstalledVersionProvider
from .models import CheckOutcome, INSTALLED_NOT_FOUND
from .notifier import Notifier, build_notifier
from .pipeline import VersionCheckPipeline

_LOG = logging.getLogger('pgcheck.service')

OutcomeCallback = Callable[[CheckOutcome], None]


class CheckService:

    def __init__(
        self,
        pipeline: VersionCheckPipeline,
        provider: InstalledVersionProvider,
        notifier: Notifier,
    ):
        self.pipeline = pipeline
        self.provider = provider
        self.notifier = notifier
        self._lock = threading.Lock()
        self._last: Optional[CheckOutcome] = None
        self._subscribers: List[OutcomeCallback] = []

    @classmethod
    def from_config(cls, config: CheckerConfig) -> 'CheckService':
        return cls(
            VersionCheckPipeline.from_config(config),
            InstalledVersionProvider(config),
            build_notifier(config.webhook_url),
        )

    @property
    def last_outcome(self) -> Optional[CheckOutcome]:
        with self._lock:
            return self._last

    def subscribe(self, callback: OutcomeCallback):
        with self._lock:
            self._subscribers.append(callback)

    def _compute(self) -> CheckOutcome:
        installed = self.provider.get_installed_version()
        if not installed:
            return CheckOutcome.failure('Pokemon Go app not found', INSTALLED_NOT_FOUND)
        return self.pipeline.run(installed)

    def run_check(self) -> CheckOutcome:
        with metrics.CheckTimer() as timer:
            outcome = self._compute()
        metrics.record_check(
            'success' if outcome.ok else 'error',
            timer.duration,
            outcome.update_available if outcome.ok else None,
        )
        if outcome.ok and outcome.update_available:
            try:
                self.notifier.notify_update(outcome.installed_version, outcome.latest_version)
            except Exception:
                _LOG.exception('notifier failed for %s -> %s', outcome.installed_version, outcome.latest_version)
        self._publish(outcome)
        return outcome

    def _publish(self, outcome: CheckOutcome):
        with self._lock:
            self._last = outcome
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(outcome)
            except Exception:
                _LOG.exception('outcome subscriber %r failed', callback)
