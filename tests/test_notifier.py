"""Tests for pgcheck.notifier."""
import logging
import os
import sys
from unittest.mock import MagicMock

import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from pgcheck.notifier import LogNotifier, WebhookNotifier, build_notifier, update_message


def test_update_message_text():
    msg = update_message('0.385.2', '0.386.0')
    assert msg['title'] == 'Pokemon Go Version Mismatch'
    assert msg['text'] == 'PGSharp supports v0.386.0 (You have: 0.385.2)'
    assert 'Your Pokemon Go: 0.385.2' in msg['body']


def test_log_notifier_writes_warning(caplog):
    with caplog.at_level(logging.WARNING, logger='pgcheck.notify'):
        assert LogNotifier().notify_update('0.385.2', '0.386.0')
    assert 'PGSharp supports v0.386.0' in caplog.text


class TestWebhookNotifier:

    def test_posts_json(self):
        session = MagicMock()
        session.post.return_value.status_code = 204
        notifier = WebhookNotifier('https://hooks.test/x', session=session)
        assert notifier.notify_update('0.385.2', '0.386.0') is True
        args, kwargs = session.post.call_args
        assert args[0] == 'https://hooks.test/x'
        assert kwargs['json']['title'] == 'Pokemon Go Version Mismatch'
        assert kwargs['timeout'] == 10

    def test_failure_is_not_raised(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError('Connection refused')
        notifier = WebhookNotifier('https://hooks.test/x', session=session)
        assert notifier.notify_test() is False

    def test_http_error_is_not_raised(self):
        session = MagicMock()
        session.post.return_value.raise_for_status.side_effect = requests.HTTPError('500')
        notifier = WebhookNotifier('https://hooks.test/x', session=session)
        assert notifier.notify_update('0.385.2', '0.386.0') is False


def test_build_notifier():
    assert isinstance(build_notifier(None), LogNotifier)
    assert isinstance(build_notifier('https://hooks.test/x'), WebhookNotifier)
