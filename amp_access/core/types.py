"""
Core types and data structures for server-assisted access authorization.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import quote
import json

from bs4 import BeautifulSoup


# Opaque JSON object returned by the authorization service
AuthorizationResult = Dict[str, Any]

# Value of the section id attribute, e.g. "1/2"
SectionId = str

STATE_META_NAME = "i-amp-access-state"
SECTION_ID_ATTR = "i-amp-access-id"
ACCESS_DATA_ID = "amp-access-data"


class OriginKind(Enum):
    """How the page was served"""
    PROXIED = "proxied"
    DIRECT = "direct"


class AuthorizationMode(Enum):
    """Outcome of mode selection"""
    SERVER_ASSISTED = "server_assisted"
    CLIENT_FALLBACK = "client_fallback"


@dataclass
class Page:
    """The live page being authorized"""
    url: str
    document: BeautifulSoup
    origin: Optional[OriginKind] = None  # Derived from url when not given

    @classmethod
    def from_html(cls, url: str, html: str, origin: Optional[OriginKind] = None) -> "Page":
        """Parse markup into a page."""
        return cls(
            url=url,
            document=BeautifulSoup(html, "html.parser"),
            origin=origin,
        )


@dataclass
class AuthorizationRequest:
    """Request sent to the authorization service"""
    url: str  # Page URL without fragment
    state: Optional[str]  # Server state token
    vars: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'url': self.url,
            'state': self.state,
            'vars': dict(self.vars),
        }

    def to_json(self) -> str:
        """Compact JSON, keys in url/state/vars order."""
        return json.dumps(self.to_dict(), separators=(',', ':'), ensure_ascii=False)

    def to_form_body(self) -> str:
        """Form-encoded body with the JSON request as its only field."""
        return 'request=' + quote(self.to_json(), safe="!*'()")
