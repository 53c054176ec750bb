"""Check outcome model."""

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

LATEST_VERSION_UNKNOWN = 'LATEST_VERSION_UNKNOWN'
INSTALLED_NOT_FOUND = 'INSTALLED_NOT_FOUND'


@dataclass(frozen=True)
class CheckOutcome:
    """Result of one check cycle. Immutable, never persisted.

    ``checked_at`` is excluded from equality so identical inputs give equal
    outcomes.
    """

    ok: bool
    installed_version: Optional[str] = None
    latest_version: Optional[str] = None
    update_available: bool = False
    source: Optional[str] = None  # URL the latest version came from
    pattern: Optional[str] = None  # extraction pattern name
    error: Optional[str] = None
    error_code: Optional[str] = None
    checked_at: float = field(default_factory=time.time, compare=False)

    @classmethod
    def success(cls, installed_version: str, latest_version: str, update_available: bool,
                source: Optional[str] = None, pattern: Optional[str] = None) -> 'CheckOutcome':
        return cls(
            ok=True,
            installed_version=installed_version,
            latest_version=latest_version,
            update_available=update_available,
            source=source,
            pattern=pattern,
        )

    @classmethod
    def failure(cls, error: str, error_code: str, installed_version: Optional[str] = None) -> 'CheckOutcome':
        return cls(ok=False, installed_version=installed_version, error=error, error_code=error_code)

    @property
    def status(self) -> str:
        if not self.ok:
            return 'error'
        return 'update_available' if self.update_available else 'up_to_date'

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'status': self.status,
            'installed_version': self.installed_version,
            'checked_at': self.checked_at,
        }
        if self.ok:
            data.update({
                'latest_version': self.latest_version,
                'update_available': self.update_available,
                'source': self.source,
                'pattern': self.pattern,
            })
        else:
            data.update({'error': self.error, 'error_code': self.error_code})
        return data
