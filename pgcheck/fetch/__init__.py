"""Page fetching for version checks.

- network.py: FetchResult types and failure classification
- page.py: PageFetcher (requests) and HTML to plain-text conversion
"""

from .network import FetchFailure, FetchResult, FetchSuccess, classify_error
from .page import PageFetcher, page_text

__all__ = [
    'FetchFailure',
    'FetchResult',
    'FetchSuccess',
    'PageFetcher',
    'classify_error',
    'page_text',
]
