"""Page retrieval and plain-text conversion."""

import logging
import re
from html.parser import HTMLParser
from typing import List, Optional

import requests

from .. import metrics
from ..config import CheckerConfig
from ..logging_utils import log_suppressed, reset_suppressed
from .network import FetchFailure, FetchResult, FetchSuccess, HTTP, classify_error

_LOG = logging.getLogger('pgcheck.fetch')

_SKIP_TAGS = {'script', 'style', 'noscript', 'template'}
_BLOCK_TAGS = {
    'address', 'article', 'aside', 'blockquote', 'body', 'br', 'dd', 'div', 'dl', 'dt',
    'fieldset', 'figcaption', 'figure', 'footer', 'form', 'h1', 'h2', 'h3', 'h4', 'h5',
    'h6', 'head', 'header', 'hr', 'html', 'li', 'main', 'nav', 'ol', 'p', 'pre',
    'section', 'table', 'tbody', 'td', 'tfoot', 'th', 'thead', 'title', 'tr', 'ul',
}
_WS_RE = re.compile(r'\s+')


class _TextCollector(HTMLParser):
    """Collect visible text; content of non-rendered elements is dropped."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._parts: List[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in _SKIP_TAGS:
            self._skip_depth += 1
        elif tag in _BLOCK_TAGS:
            # block boundaries must not glue words together; inline tags join
            self._parts.append(' ')

    def handle_endtag(self, tag):
        if tag in _SKIP_TAGS:
            if self._skip_depth:
                self._skip_depth -= 1
        elif tag in _BLOCK_TAGS:
            self._parts.append(' ')

    def handle_data(self, data):
        if not self._skip_depth:
            self._parts.append(data)

    def text(self) -> str:
        return _WS_RE.sub(' ', ''.join(self._parts)).strip()


def page_text(html: str) -> str:
    """Visible text of an HTML document, whitespace collapsed.

    Markup, attributes and script/style bodies are removed so version-like
    tokens inside tags or inline code cannot match.
    """
    if not html:
        return ''
    parser = _TextCollector()
    parser.feed(html)
    parser.close()
    return parser.text()


class PageFetcher:
    """Fetch pages with a browser user agent, fixed timeout and redirects.

    No retries at this layer; the scheduler owns retry policy.
    """

    def __init__(self, config: Optional[CheckerConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or CheckerConfig()
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'text/html,application/xhtml+xml;q=0.9,*/*;q=0.8',
        })

    def fetch(self, url: str) -> FetchResult:
        context = f'fetch {url}'
        try:
            resp = self.session.get(url, timeout=self.config.timeout_s, allow_redirects=True)
            resp.raise_for_status()
        except requests.HTTPError as err:
            status = err.response.status_code if err.response is not None else None
            return self._failure(url, HTTP, f'HTTP {status}', context, status_code=status)
        except requests.RequestException as err:
            return self._failure(url, classify_error(err), str(err), context)
        reset_suppressed(context)
        _LOG.debug('fetched %s status=%s bytes=%d', resp.url, resp.status_code, len(resp.content))
        return FetchSuccess(url=url, html=resp.text, status_code=resp.status_code)

    def _failure(self, url: str, kind: str, reason: str, context: str,
                 status_code: Optional[int] = None) -> FetchFailure:
        metrics.record_fetch_error(kind)
        log_suppressed(_LOG, f'kind={kind} reason={reason}', context)
        return FetchFailure(url=url, kind=kind, reason=reason, status_code=status_code)

    def close(self):
        self.session.close()
