"""
Document fetch transport.

``DocumentFetcher`` is the seam the adapter talks to; ``AiohttpDocumentFetcher``
implements it over an aiohttp ``ClientSession`` and parses responses with
BeautifulSoup.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional

import aiohttp
from bs4 import BeautifulSoup

from ..errors import TransportError


logger = logging.getLogger(__name__)


@dataclass
class FetchOptions:
    """Options for a document fetch."""
    method: str = "GET"
    body: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)


class DocumentFetcher(ABC):
    """Abstract base class for fetching HTML documents."""

    @abstractmethod
    async def fetch_document(self, url: str, options: FetchOptions) -> BeautifulSoup:
        """Fetch a URL and return the parsed document."""
        pass

    async def close(self) -> None:
        """Release any resources held by the fetcher."""
        pass


class AiohttpDocumentFetcher(DocumentFetcher):
    """Document fetcher backed by aiohttp."""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None,
                 parser: str = "html.parser"):
        """
        Initialize the fetcher.

        Args:
            session: Session to reuse; one is created lazily when omitted
            parser: BeautifulSoup parser name
        """
        self._session = session
        self._owns_session = session is None
        self.parser = parser

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def fetch_document(self, url: str, options: FetchOptions) -> BeautifulSoup:
        session = await self._get_session()
        data = options.body.encode('utf-8') if options.body is not None else None

        try:
            async with session.request(
                options.method, url, data=data, headers=options.headers
            ) as response:
                if response.status >= 400:
                    logger.error(f"Document fetch failed: {options.method} {url} -> {response.status}")
                    raise TransportError(
                        f"HTTP {response.status} from {url}", url=url, status=response.status
                    )
                # BeautifulSoup falls back to other encodings when the
                # declared charset does not decode the body
                content = await response.read()
                charset = response.charset
        except aiohttp.ClientError as e:
            logger.error(f"Document fetch failed: {options.method} {url}: {e}")
            raise TransportError(f"Failed to fetch {url}: {e}", url=url, cause=e) from e

        return BeautifulSoup(content, self.parser, from_encoding=charset)

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
