"""
Construction of authorization requests.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from .types import AuthorizationRequest
from ..util.url import remove_fragment


logger = logging.getLogger(__name__)


def normalize_vars(variables: Mapping[str, Any]) -> Dict[str, str]:
    """Stringify collected variables, dropping the ones without a value."""
    return {name: str(value) for name, value in variables.items() if value is not None}


class RequestBuilder:
    """Builds the request for the authorization service."""

    def __init__(self, context, page_url: str, server_state: Optional[str]):
        """
        Args:
            context: AccessContext used to collect URL variables
            page_url: URL of the live page
            server_state: State token read from the page
        """
        self.context = context
        self.page_url = page_url
        self.server_state = server_state

    async def build(self, authorization_url: str) -> AuthorizationRequest:
        # Authorization data is not available yet on the first authorize call.
        variables = await self.context.collect_url_vars(authorization_url, False)
        request = AuthorizationRequest(
            url=remove_fragment(self.page_url),
            state=self.server_state,
            vars=normalize_vars(variables or {}),
        )
        logger.debug(f"Built authorization request for {request.url} with {len(request.vars)} vars")
        return request
