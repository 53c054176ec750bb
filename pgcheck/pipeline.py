"""Version check pipeline: fetch -> extract -> (fallback) -> compare.

The pipeline is a function of (installed version, network responses). It
keeps no state between runs, sends no notifications and persists nothing;
callers act on the returned CheckOutcome.
"""

import logging
from typing import Optional, Sequence, Tuple

from . import metrics
from .config import CheckerConfig
from .fetch import PageFetcher, page_text
from .models import CheckOutcome, LATEST_VERSION_UNKNOWN
from .versioning import (
    ExtractionMatch,
    ExtractionPattern,
    FALLBACK_PATTERNS,
    PRIMARY_PATTERNS,
    VersionExtractor,
    is_update_available,
)

_LOG = logging.getLogger('pgcheck.pipeline')

SAMPLE_CHARS = 500


class VersionCheckPipeline:

    def __init__(
        self,
        fetcher: PageFetcher,
        primary_url: str,
        fallback_url: str,
        primary_patterns: Sequence[ExtractionPattern] = PRIMARY_PATTERNS,
        fallback_patterns: Sequence[ExtractionPattern] = FALLBACK_PATTERNS,
    ):
        self.fetcher = fetcher
        self.primary_url = primary_url
        self.fallback_url = fallback_url
        self.primary_patterns = tuple(primary_patterns)
        self.fallback_patterns = tuple(fallback_patterns)
        self.extractor = VersionExtractor(self.primary_patterns)

    @classmethod
    def from_config(cls, config: CheckerConfig, fetcher: Optional[PageFetcher] = None) -> 'VersionCheckPipeline':
        return cls(fetcher or PageFetcher(config), config.primary_url, config.fallback_url)

    def _latest_from(self, url: str, patterns: Sequence[ExtractionPattern]) -> Optional[ExtractionMatch]:
        result = self.fetcher.fetch(url)
        if not result.ok:
            _LOG.warning('fetch failed url=%s kind=%s reason=%s', url, result.kind, result.reason)
            return None
        text = page_text(result.html)
        match = self.extractor.extract(text, patterns)
        if match is None:
            _LOG.warning('no version found url=%s text_len=%d sample=%r', url, len(text), text[:SAMPLE_CHARS])
            return None
        metrics.record_extraction(match.pattern)
        _LOG.info('found version %s url=%s pattern=%s', match.version, url, match.pattern)
        return match

    def find_latest(self) -> Tuple[Optional[ExtractionMatch], Optional[str]]:
        """Return (match, source_url); the fallback page is read only if the primary yields nothing."""
        match = self._latest_from(self.primary_url, self.primary_patterns)
        if match is not None:
            return match, self.primary_url
        _LOG.info('primary source gave no version, trying fallback %s', self.fallback_url)
        match = self._latest_from(self.fallback_url, self.fallback_patterns)
        if match is not None:
            return match, self.fallback_url
        return None, None

    def run(self, installed_version: str) -> CheckOutcome:
        match, source = self.find_latest()
        if match is None:
            _LOG.error('could not determine latest version from any source')
            return CheckOutcome.failure(
                'could not determine latest version',
                LATEST_VERSION_UNKNOWN,
                installed_version=installed_version,
            )
        update = is_update_available(installed_version, match.version)
        _LOG.info('installed=%s latest=%s update_available=%s', installed_version, match.version, update)
        return CheckOutcome.success(
            installed_version=installed_version,
            latest_version=match.version,
            update_available=update,
            source=source,
            pattern=match.pattern,
        )
