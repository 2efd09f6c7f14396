"""
Client-side collaborators for the access adapter.
"""

from .adapter import AccessContext, StaticAccessContext, ClientAdapter

__all__ = [
    'AccessContext',
    'StaticAccessContext',
    'ClientAdapter',
]
