"""Version Detection Module.

Architecture:
- ordering.py: dotted-numeric comparison (lenient parsing)
- patterns.py: ordered extraction patterns and the acceptance rule
- extractor.py: first-accepted-match-wins extraction over page text
"""

from .extractor import ExtractionMatch, VersionExtractor, extract_version
from .ordering import Ordering, compare, is_update_available, parse_components
from .patterns import ExtractionPattern, FALLBACK_PATTERNS, PRIMARY_PATTERNS

__all__ = [
    'ExtractionMatch',
    'ExtractionPattern',
    'FALLBACK_PATTERNS',
    'Ordering',
    'PRIMARY_PATTERNS',
    'VersionExtractor',
    'compare',
    'extract_version',
    'is_update_available',
    'parse_components',
]
