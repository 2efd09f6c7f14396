"""
Transport package: document fetching and deadline-bounded requests.
"""

from .fetcher import FetchOptions, DocumentFetcher, AiohttpDocumentFetcher
from .timed import FORM_CONTENT_TYPE, TimedFetcher

__all__ = [
    'FetchOptions',
    'DocumentFetcher',
    'AiohttpDocumentFetcher',
    'FORM_CONTENT_TYPE',
    'TimedFetcher',
]
