"""
Utility functions for the access adapter.
"""

from .url import DEFAULT_PROXY_ORIGINS, remove_fragment, is_proxy_origin
from .timer import timeout_race

__all__ = [
    'DEFAULT_PROXY_ORIGINS',
    'remove_fragment',
    'is_proxy_origin',
    'timeout_race',
]
