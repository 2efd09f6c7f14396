"""
URL helpers for the access adapter.
"""

from typing import Iterable
from urllib.parse import urlsplit


DEFAULT_PROXY_ORIGINS = ("cdn.ampproject.org",)


def remove_fragment(url: str) -> str:
    """Return the URL without its fragment component."""
    index = url.find('#')
    if index == -1:
        return url
    return url[:index]


def is_proxy_origin(url: str, proxy_origins: Iterable[str] = DEFAULT_PROXY_ORIGINS) -> bool:
    """
    Check whether the URL is served through one of the proxy origins.

    A host matches a proxy origin when it equals it or is a subdomain of it.
    """
    parts = urlsplit(url)
    if parts.scheme not in ('http', 'https'):
        return False

    host = (parts.hostname or '').lower()
    if not host:
        return False

    for origin in proxy_origins:
        origin = origin.lower().strip('.')
        if host == origin or host.endswith('.' + origin):
            return True
    return False

