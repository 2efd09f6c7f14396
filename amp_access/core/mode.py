"""
Selection between server-assisted and client-side authorization.
"""

from typing import Optional

from .types import AuthorizationMode, OriginKind


def select_mode(origin: OriginKind, server_state: Optional[str]) -> AuthorizationMode:
    """Server-assisted authorization needs a proxied page with server state."""
    if origin is not OriginKind.PROXIED:
        return AuthorizationMode.CLIENT_FALLBACK
    if server_state is None:
        return AuthorizationMode.CLIENT_FALLBACK
    return AuthorizationMode.SERVER_ASSISTED
