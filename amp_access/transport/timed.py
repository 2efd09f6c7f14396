"""
Deadline-bounded execution of authorization requests.
"""

import asyncio
import logging
from typing import Set

from bs4 import BeautifulSoup

from .fetcher import DocumentFetcher, FetchOptions
from ..core.types import AuthorizationRequest
from ..util.timer import timeout_race


logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class TimedFetcher:
    """Posts authorization requests and races them against a deadline."""

    def __init__(self, fetcher: DocumentFetcher):
        self.fetcher = fetcher
        # requests still running after losing the race to their deadline
        self._abandoned: Set[asyncio.Future] = set()

    @property
    def pending(self) -> int:
        """Number of requests still running past their deadline."""
        return len(self._abandoned)

    @staticmethod
    def build_options(request: AuthorizationRequest) -> FetchOptions:
        return FetchOptions(
            method="POST",
            body=request.to_form_body(),
            headers={'Content-Type': FORM_CONTENT_TYPE},
        )

    async def fetch(self, service_url: str, request: AuthorizationRequest,
                    timeout_ms: float) -> BeautifulSoup:
        """
        POST the request to the service and return the response document.

        Raises:
            AccessTimeoutError: If no response arrives within ``timeout_ms``
            Exception: Whatever the transport raised, unchanged
        """
        options = self.build_options(request)
        logger.debug(f"Authorization request: {service_url} {request.to_dict()}")
        return await timeout_race(
            self.fetcher.fetch_document(service_url, options),
            timeout_ms,
            description="Authorization request",
            abandoned=self._abandoned,
        )

    async def close(self) -> None:
        """Cancel requests still running past their deadline."""
        if self._abandoned:
            logger.debug(f"Cancelling {len(self._abandoned)} abandoned authorization requests")
        for operation in list(self._abandoned):
            operation.cancel()
        self._abandoned.clear()
