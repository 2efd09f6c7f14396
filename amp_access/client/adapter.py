"""
Collaborator interfaces consumed by the server-assisted adapter.

The client-side authorization protocol lives behind ``ClientAdapter``; URL
variable collection lives behind ``AccessContext``.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from ..core.config import AccessConfig
from ..core.types import AuthorizationResult


class AccessContext(ABC):
    """Abstract base class for URL variable collection."""

    @abstractmethod
    async def collect_url_vars(self, url: str, use_authorization_data: bool) -> Dict[str, Any]:
        """Resolve the variables referenced by a URL template."""
        pass


class StaticAccessContext(AccessContext):
    """Context that answers every collection with a fixed set of variables."""

    def __init__(self, variables: Optional[Mapping[str, Any]] = None):
        self.variables = dict(variables or {})

    async def collect_url_vars(self, url: str, use_authorization_data: bool) -> Dict[str, Any]:
        """Return the variables whose names appear as whole tokens in the URL template."""
        tokens = set(re.findall(r'\w+', url))
        return {name: value for name, value in self.variables.items() if name in tokens}


class ClientAdapter(ABC):
    """Abstract base class for client-side authorization adapters."""

    def __init__(self, config: AccessConfig, context: AccessContext):
        self.config = config
        self.context = context
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def authorize(self) -> AuthorizationResult:
        """Run client-side authorization and return its result."""
        pass

    @abstractmethod
    async def pingback(self) -> None:
        """Send the pingback for the current page view."""
        pass

    def get_authorization_url(self) -> str:
        return self.config.authorization_url

    def get_pingback_url(self) -> str:
        return self.config.pingback_url

    def get_authorization_timeout(self) -> int:
        """Authorization deadline in milliseconds."""
        return self.config.authorization_timeout_ms

    def is_authorization_enabled(self) -> bool:
        return True

    def is_pingback_enabled(self) -> bool:
        return True

    def get_config(self) -> Dict[str, Any]:
        """Diagnostic view of the adapter configuration."""
        return {
            'authorizationUrl': self.get_authorization_url(),
            'pingbackUrl': self.get_pingback_url(),
            'authorizationTimeout': self.get_authorization_timeout(),
        }
