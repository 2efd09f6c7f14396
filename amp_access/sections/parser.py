"""
Extraction of authorization data from a service response document.
"""

import json

from bs4 import BeautifulSoup

from ..core.types import ACCESS_DATA_ID, AuthorizationResult
from ..errors import ParseError


def extract_result(document: BeautifulSoup) -> AuthorizationResult:
    """
    Read the JSON authorization data embedded in the response.

    The data lives in ``<script id="amp-access-data">``. A missing element,
    malformed JSON or a non-object value raises ``ParseError``.
    """
    element = document.find('script', attrs={'id': ACCESS_DATA_ID})
    if element is None:
        raise ParseError("No authorization data available")

    try:
        data = json.loads(element.string or "")
    except ValueError as e:
        raise ParseError(f"Malformed authorization data: {e}", cause=e) from e

    if not isinstance(data, dict):
        raise ParseError(f"Authorization data must be a JSON object, got {type(data).__name__}")
    return data
