"""Tests for pgcheck.service — notification decisions and outcome delivery."""
import os
import sys
from unittest.mock import MagicMock

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from conftest import FALLBACK, PRIMARY, make_service, ok, transport_error
from pgcheck.models import INSTALLED_NOT_FOUND, LATEST_VERSION_UNKNOWN


class TestNotification:

    def test_notifies_when_update_available(self):
        service = make_service()
        outcome = service.run_check()
        assert outcome.update_available
        service.notifier.notify_update.assert_called_once_with('0.385.2', '0.386.0')

    def test_no_notification_when_versions_match(self):
        service = make_service(installed='0.386.0')
        outcome = service.run_check()
        assert outcome.ok and not outcome.update_available
        service.notifier.notify_update.assert_not_called()

    def test_no_notification_when_both_sources_fail(self):
        service = make_service(primary=transport_error(PRIMARY), fallback=transport_error(FALLBACK))
        outcome = service.run_check()
        assert outcome.error_code == LATEST_VERSION_UNKNOWN
        service.notifier.notify_update.assert_not_called()

    def test_installed_version_missing(self):
        service = make_service(installed=None)
        outcome = service.run_check()
        assert not outcome.ok
        assert outcome.error == 'Pokemon Go app not found'
        assert outcome.error_code == INSTALLED_NOT_FOUND
        assert service.pipeline.fetcher.calls == []
        service.notifier.notify_update.assert_not_called()


class TestOutcomeDelivery:

    def test_last_outcome_tracks_latest_run(self):
        service = make_service(primary=transport_error(PRIMARY), fallback=ok(FALLBACK, '<p>(0.390.0)</p>'))
        assert service.last_outcome is None
        outcome = service.run_check()
        assert service.last_outcome is outcome

    def test_subscribers_receive_outcome(self):
        service = make_service()
        received = []
        service.subscribe(received.append)
        outcome = service.run_check()
        assert received == [outcome]

    def test_failing_subscriber_does_not_break_check(self):
        service = make_service()
        bad = MagicMock(side_effect=RuntimeError('boom'))
        received = []
        service.subscribe(bad)
        service.subscribe(received.append)
        outcome = service.run_check()
        assert outcome.ok
        assert received == [outcome]

    def test_failing_notifier_still_publishes_outcome(self):
        service = make_service()
        service.notifier.notify_update.side_effect = RuntimeError('smtp down')
        received = []
        service.subscribe(received.append)
        outcome = service.run_check()
        assert outcome.ok
        assert outcome.update_available is True
        assert service.last_outcome is outcome
        assert received == [outcome]
