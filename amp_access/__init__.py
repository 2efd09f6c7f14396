"""
amp-access-py Package

Server-assisted content authorization for access-controlled pages.
"""

__version__ = "0.1.0"

from .core.server import ServerAccessAdapter
from .core.config import AccessConfig
from .core.types import (
    OriginKind,
    AuthorizationMode,
    Page,
    AuthorizationRequest,
)
from .client.adapter import AccessContext, StaticAccessContext, ClientAdapter
from .errors import (
    AccessError,
    ConfigError,
    AccessTimeoutError,
    TransportError,
    ParseError,
)

__all__ = [
    "ServerAccessAdapter",
    "AccessConfig",
    "OriginKind",
    "AuthorizationMode",
    "Page",
    "AuthorizationRequest",
    "AccessContext",
    "StaticAccessContext",
    "ClientAdapter",
    "AccessError",
    "ConfigError",
    "AccessTimeoutError",
    "TransportError",
    "ParseError",
]
