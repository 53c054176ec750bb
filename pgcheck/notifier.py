"""Update notifications.

The check core only decides whether to notify; these classes decide how.
"""

import logging
from typing import Optional

import requests

_LOG = logging.getLogger('pgcheck.notify')

SITE_URL = 'https://www.pgsharp.com'
WEBHOOK_TIMEOUT_S = 10


def update_message(installed_version: str, latest_version: str) -> dict:
    return {
        'title': 'Pokemon Go Version Mismatch',
        'text': f'PGSharp supports v{latest_version} (You have: {installed_version})',
        'body': (
            'PGSharp supports a different Pokemon Go version!\n\n'
            f'Your Pokemon Go: {installed_version}\n'
            f'PGSharp supports: {latest_version}\n\n'
            'Visit pgsharp.com for details'
        ),
        'url': SITE_URL,
    }


def active_message() -> dict:
    return {
        'title': 'Version Checker Active',
        'text': 'Automatic version checking is working properly',
        'body': 'Automatic version checking is working properly',
        'url': SITE_URL,
    }


class Notifier:
    """Base notifier. Subclasses implement ``send``; failures are logged, not raised."""

    def send(self, message: dict) -> bool:
        raise NotImplementedError

    def notify_update(self, installed_version: str, latest_version: str) -> bool:
        return self.send(update_message(installed_version, latest_version))

    def notify_test(self) -> bool:
        return self.send(active_message())


class LogNotifier(Notifier):

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or _LOG

    def send(self, message: dict) -> bool:
        self.logger.warning('%s: %s', message['title'], message['text'])
        return True


class WebhookNotifier(Notifier):
    """POST the message as JSON to a webhook URL."""

    def __init__(self, url: str, session: Optional[requests.Session] = None):
        self.url = url
        self.session = session or requests.Session()

    def send(self, message: dict) -> bool:
        try:
            resp = self.session.post(self.url, json=message, timeout=WEBHOOK_TIMEOUT_S)
            resp.raise_for_status()
        except requests.RequestException as err:
            _LOG.error('webhook notification failed url=%s err=%s', self.url, err)
            return False
        _LOG.info('webhook notification sent url=%s status=%s', self.url, resp.status_code)
        return True


def build_notifier(webhook_url: Optional[str] = None) -> Notifier:
    if webhook_url:
        return WebhookNotifier(webhook_url)
    return LogNotifier()
