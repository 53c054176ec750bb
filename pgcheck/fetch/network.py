"""Fetch result types and failure classification.

A fetch either yields page content (FetchSuccess) or a classified failure
(FetchFailure). Kinds:
- http: the server answered with a 4xx/5xx status
- timeout, dns, ssl, conn: transport failures
- other: anything unclassified
"""

import socket
from dataclasses import dataclass
from typing import Optional, Union

import requests

HTTP = 'http'
TIMEOUT = 'timeout'
DNS = 'dns'
SSL = 'ssl'
CONN = 'conn'
OTHER = 'other'

TRANSPORT_KINDS = frozenset({TIMEOUT, DNS, SSL, CONN})


@dataclass(frozen=True)
class FetchSuccess:
    url: str
    html: str
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    url: str
    kind: str
    reason: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def is_transport(self) -> bool:
        return self.kind in TRANSPORT_KINDS


FetchResult = Union[FetchSuccess, FetchFailure]


def classify_error(err: Union[Exception, str]) -> str:
    """Classify a fetch error into a failure kind.

    requests exception types are checked first; message sniffing covers
    errors wrapped by urllib3 where only the text tells the cause.

    Returns:
        One of: http, timeout, dns, ssl, conn, other
    """
    if isinstance(err, requests.HTTPError):
        return HTTP
    if isinstance(err, requests.Timeout):
        return TIMEOUT
    if isinstance(err, requests.exceptions.SSLError):
        return SSL
    msg = str(err).lower()
    if 'timed out' in msg or 'timeout' in msg:
        return TIMEOUT
    if (isinstance(err, socket.gaierror) or 'nxdomain' in msg
            or 'name or service not known' in msg or 'nodename nor servname' in msg
            or 'failed to resolve' in msg or 'getaddrinfo failed' in msg):
        return DNS
    if 'ssl' in msg or 'certificate' in msg:
        return SSL
    if (isinstance(err, requests.ConnectionError) or 'connection refused' in msg
            or 'network is unreachable' in msg or 'connection reset' in msg):
        return CONN
    return OTHER


__all__ = [
    'FetchFailure',
    'FetchResult',
    'FetchSuccess',
    'TRANSPORT_KINDS',
    'classify_error',
]
