"""Ordered, first-accepted-match-wins version extractor."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from .patterns import ExtractionPattern, PRIMARY_PATTERNS

logger = logging.getLogger('pgcheck.versioning')

EVIDENCE_MAX = 120


@dataclass(frozen=True)
class ExtractionMatch:
    """Accepted version candidate and the rule that produced it."""
    version: str
    pattern: str
    evidence: str  # matched text

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': self.version,
            'pattern': self.pattern,
            'evidence': self.evidence,
        }


class VersionExtractor:
    """Apply extraction patterns to page text in priority order.

    Usage:
        extractor = VersionExtractor()
        match = extractor.extract(page_text)
        if match:
            print(match.version, match.pattern)
    """

    def __init__(self, patterns: Sequence[ExtractionPattern] = PRIMARY_PATTERNS):
        self.patterns = tuple(patterns)

    def extract(
        self,
        page_text: str,
        patterns: Optional[Sequence[ExtractionPattern]] = None,
    ) -> Optional[ExtractionMatch]:
        """Return the first accepted match, or None.

        Only the first match of each pattern is considered. A rejected match
        moves on to the next pattern; it does not search further in the text
        with the same pattern.

        Args:
            page_text: Plain text of the page (markup already stripped)
            patterns: Override for the instance's pattern list

        Returns:
            ExtractionMatch or None when nothing was accepted
        """
        if not page_text:
            return None
        for pattern in (patterns if patterns is not None else self.patterns):
            match = pattern.regex.search(page_text)
            if match is None:
                continue
            version = pattern.derive(match)
            if not pattern.accept(version):
                logger.debug('pattern %s rejected candidate %s', pattern.name, version)
                continue
            logger.debug('pattern %s accepted version %s', pattern.name, version)
            return ExtractionMatch(
                version=version,
                pattern=pattern.name,
                evidence=match.group(0)[:EVIDENCE_MAX],
            )
        return None


def extract_version(page_text: str, patterns: Sequence[ExtractionPattern] = PRIMARY_PATTERNS) -> Optional[str]:
    """Convenience wrapper returning just the version string."""
    match = VersionExtractor(patterns).extract(page_text)
    return match.version if match else None
