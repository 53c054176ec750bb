"""Version extraction patterns.

Each pattern captures the version core in group 1. Lists are ordered by
priority; the extractor stops at the first accepted match.

Primary page priority:
1. paren  - "(0.385.2-G)" / "(0.385.2)", the form pgsharp.com uses next to
            its own release number
2. label  - "Pokemon Go: 0.385.2" / "PoGo 0.385.2"
3. bare   - any "0.x.y" token in the text (broadest, lowest priority)

The download page has no "Pokemon Go" label, so its list skips ``label``.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Pattern, Tuple

from .ordering import parse_components


def starts_with_zero(version: str) -> bool:
    """Acceptance rule shared by every pattern.

    Pokemon Go versions have a leading 0 component; PGSharp's own release
    numbers (and dates, phone numbers, ...) do not.
    """
    return version.startswith('0.') and parse_components(version)[0] == 0


@dataclass(frozen=True)
class ExtractionPattern:
    """Matcher + derivation + acceptance rule."""

    name: str
    regex: Pattern[str]
    prefix: str = ''
    accept: Callable[[str], bool] = field(default=starts_with_zero, compare=False)

    def derive(self, match: 're.Match[str]') -> str:
        return self.prefix + match.group(1)


PAREN_PATTERN = ExtractionPattern(
    name='paren',
    regex=re.compile(r'\((\d+\.\d+\.\d+)[-\w]*\)'),
)

LABEL_PATTERN = ExtractionPattern(
    name='label',
    regex=re.compile(r'(?:Pokemon\s*Go|PoGo)[\s:]+(\d+\.\d+\.\d+)', re.IGNORECASE),
)

BARE_PATTERN = ExtractionPattern(
    name='bare',
    regex=re.compile(r'(?<![\d.])0\.(\d+\.\d+)'),
    prefix='0.',
)

PRIMARY_PATTERNS: Tuple[ExtractionPattern, ...] = (PAREN_PATTERN, LABEL_PATTERN, BARE_PATTERN)
FALLBACK_PATTERNS: Tuple[ExtractionPattern, ...] = (PAREN_PATTERN, BARE_PATTERN)
