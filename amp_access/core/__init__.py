"""
Core module initialization
"""

from .types import (
    AuthorizationResult,
    SectionId,
    OriginKind,
    AuthorizationMode,
    Page,
    AuthorizationRequest,
)
from .config import AccessConfig, resolve_config, read_server_state
from .mode import select_mode
from .request import RequestBuilder, normalize_vars
from .server import ServerAccessAdapter

__all__ = [
    "AuthorizationResult",
    "SectionId",
    "OriginKind",
    "AuthorizationMode",
    "Page",
    "AuthorizationRequest",
    "AccessConfig",
    "resolve_config",
    "read_server_state",
    "select_mode",
    "RequestBuilder",
    "normalize_vars",
    "ServerAccessAdapter",
]
