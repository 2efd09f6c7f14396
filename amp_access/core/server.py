"""
Server-assisted access adapter.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

On a proxied page that carries server state, authorization is resolved by
posting the state to the authorization service, which answers with the
authorization data and pre-rendered markup for every access-controlled
section. Everywhere else the client-side adapter handles authorization.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import logging

from .config import AccessConfig, resolve_config, read_server_state
from .mode import select_mode
from .request import RequestBuilder
from .types import AuthorizationMode, AuthorizationResult, OriginKind, Page, SectionId
from ..client.adapter import AccessContext, ClientAdapter
from ..sections.parser import extract_result
from ..sections.replacer import replace_sections
from ..transport.fetcher import AiohttpDocumentFetcher, DocumentFetcher
from ..transport.timed import TimedFetcher
from ..util.url import is_proxy_origin, remove_fragment


ClientFactory = Callable[[AccessConfig, AccessContext], ClientAdapter]


class ServerAccessAdapter:
    """
    Access adapter that prefers server-assisted authorization.

    Configuration and server state are resolved once at construction and
    never change afterwards. Each ``authorize()`` call is independent.
    """

    def __init__(
        self,
        page: Page,
        config: Union[AccessConfig, Mapping[str, Any]],
        context: AccessContext,
        client_factory: ClientFactory,
        fetcher: Optional[DocumentFetcher] = None,
    ):
        """
        Initialize the adapter.

        Args:
            page: The live page; its document is updated in place
            config: AccessConfig or raw configuration mapping
            context: URL variable collector
            client_factory: Builds the client-side adapter from the config
            fetcher: Document transport (defaults to aiohttp)

        Raises:
            ConfigError: If the configuration is missing a required URL
        """
        self.page = page
        self.config = resolve_config(config)
        self.context = context
        self.client_adapter = client_factory(self.config, context)
        self.fetcher = fetcher or AiohttpDocumentFetcher()
        self.timed_fetcher = TimedFetcher(self.fetcher)
        self.logger = logging.getLogger(__name__)

        self.server_state: Optional[str] = read_server_state(page.document)
        if page.origin is not None:
            self.origin = page.origin
        elif is_proxy_origin(page.url, self.config.proxy_origins):
            self.origin = OriginKind.PROXIED
        else:
            self.origin = OriginKind.DIRECT
        self.service_url = self.config.service_url or remove_fragment(page.url)

    def get_config(self) -> Dict[str, Any]:
        """Diagnostic view of the adapter state."""
        return {
            'client': self.client_adapter.get_config(),
            'proxy': self.origin is OriginKind.PROXIED,
            'server_state': self.server_state,
            'service_url': self.service_url,
        }

    def is_authorization_enabled(self) -> bool:
        return True

    def is_pingback_enabled(self) -> bool:
        return self.client_adapter.is_pingback_enabled()

    def select_mode(self) -> AuthorizationMode:
        return select_mode(self.origin, self.server_state)

    async def authorize(self) -> AuthorizationResult:
        """
        Resolve authorization for the page.

        Returns:
            The authorization data; in client fallback, whatever the client
            adapter returned

        Raises:
            AccessTimeoutError: If the service does not answer in time
            ParseError: If the response carries no valid authorization data
            Exception: Transport and variable collection errors, unchanged
        """
        mode = self.select_mode()
        self.logger.debug(
            f"Start authorization: origin={self.origin.value} "
            f"state={self.server_state!r} url={self.client_adapter.get_authorization_url()}"
        )

        if mode is AuthorizationMode.CLIENT_FALLBACK:
            self.logger.debug("Proceed via client protocol")
            return await self.client_adapter.authorize()

        self.logger.debug("Proceed via server protocol")
        builder = RequestBuilder(self.context, self.page.url, self.server_state)
        request = await builder.build(self.client_adapter.get_authorization_url())

        response_document = await self.timed_fetcher.fetch(
            self.service_url,
            request,
            self.client_adapter.get_authorization_timeout(),
        )

        result = extract_result(response_document)
        self.logger.debug(f"Access data: {result}")
        await self.replace_sections(response_document)
        return result

    async def replace_sections(self, response_document) -> List[SectionId]:
        """Splice the response's sections into the live page."""
        return await replace_sections(self.page.document, response_document)

    async def pingback(self) -> None:
        """Pingback is always sent by the client adapter."""
        await self.client_adapter.pingback()

    async def close(self) -> None:
        """Release the document transport and any request left past its deadline."""
        await self.timed_fetcher.close()
        await self.fetcher.close()
