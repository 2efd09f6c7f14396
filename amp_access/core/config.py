"""
Configuration module for the access adapter.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union
from dataclasses import dataclass, field
import json
import os

import yaml
from bs4 import BeautifulSoup

from .types import STATE_META_NAME
from ..errors import ConfigError
from ..util.url import DEFAULT_PROXY_ORIGINS


DEFAULT_AUTHORIZATION_TIMEOUT_MS = 3000


@dataclass
class AccessConfig:
    """Configuration for server-assisted access authorization"""
    authorization_url: str
    pingback_url: str
    authorization_timeout_ms: int = DEFAULT_AUTHORIZATION_TIMEOUT_MS
    service_url: Optional[str] = None  # Defaults to the page URL
    proxy_origins: List[str] = field(default_factory=lambda: list(DEFAULT_PROXY_ORIGINS))

    def validate(self) -> bool:
        """Validate the configuration"""
        if not self.authorization_url:
            raise ConfigError('"authorization" URL must be specified', field="authorization")
        if not self.pingback_url:
            raise ConfigError('"pingback" URL must be specified', field="pingback")
        if self.authorization_timeout_ms <= 0:
            raise ConfigError(
                '"authorization_timeout" must be positive',
                field="authorization_timeout",
                value=self.authorization_timeout_ms,
            )
        return True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AccessConfig":
        """
        Create configuration from a raw mapping.

        Recognized keys: ``authorization``, ``pingback``,
        ``authorization_timeout`` (ms), ``service_url``, ``proxy_origins``.
        """
        if not isinstance(data, Mapping):
            raise ConfigError("Access configuration must be a mapping", value=type(data).__name__)

        timeout = data.get('authorization_timeout', DEFAULT_AUTHORIZATION_TIMEOUT_MS)
        try:
            timeout = int(timeout)
        except (TypeError, ValueError):
            raise ConfigError(
                '"authorization_timeout" must be an integer',
                field="authorization_timeout",
                value=timeout,
            )

        proxy_origins = data.get('proxy_origins') or list(DEFAULT_PROXY_ORIGINS)
        if isinstance(proxy_origins, str):
            proxy_origins = [item.strip() for item in proxy_origins.split(',') if item.strip()]

        config = cls(
            authorization_url=data.get('authorization') or "",
            pingback_url=data.get('pingback') or "",
            authorization_timeout_ms=timeout,
            service_url=data.get('service_url') or None,
            proxy_origins=list(proxy_origins),
        )
        config.validate()
        return config

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "AccessConfig":
        """Load configuration from a JSON or YAML file."""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        file_ext = path.suffix.lower()
        with open(path, 'r', encoding='utf-8') as f:
            if file_ext == '.json':
                data = json.load(f)
            elif file_ext in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {file_ext}")

        return cls.from_dict(data or {})

    @classmethod
    def from_env(cls, prefix: str = "AMP_ACCESS_") -> "AccessConfig":
        """Create configuration from environment variables"""
        data: Dict[str, Any] = {
            'authorization': os.getenv(f"{prefix}AUTHORIZATION_URL", ""),
            'pingback': os.getenv(f"{prefix}PINGBACK_URL", ""),
            'authorization_timeout': os.getenv(
                f"{prefix}AUTHORIZATION_TIMEOUT", str(DEFAULT_AUTHORIZATION_TIMEOUT_MS)
            ),
            'service_url': os.getenv(f"{prefix}SERVICE_URL"),
            'proxy_origins': os.getenv(f"{prefix}PROXY_ORIGINS"),
        }
        return cls.from_dict(data)


def resolve_config(raw: Union[AccessConfig, Mapping[str, Any]]) -> AccessConfig:
    """Validate raw configuration input into an AccessConfig."""
    if isinstance(raw, AccessConfig):
        raw.validate()
        return raw
    return AccessConfig.from_dict(raw)


def read_server_state(document: BeautifulSoup) -> Optional[str]:
    """Read the server state token from the page's meta marker, if any."""
    meta = document.find('meta', attrs={'name': STATE_META_NAME})
    if meta is None:
        return None
    return meta.get('content')
