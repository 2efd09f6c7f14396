"""
Access Adapter Demo Application

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

This demo runs one server-assisted authorization against a live service:
- Configuration loading (JSON or YAML)
- Mode selection for the given page
- Authorization request with deadline
- Section replacement in the page
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from amp_access.client.adapter import ClientAdapter, StaticAccessContext
from amp_access.core.config import AccessConfig
from amp_access.core.server import ServerAccessAdapter
from amp_access.core.types import SECTION_ID_ATTR, AuthorizationMode, OriginKind, Page
from amp_access.errors import AccessError
from amp_access.sections.replacer import find_sections


class DemoClientAdapter(ClientAdapter):
    """Client adapter for the demo; the client protocol is not available here."""

    async def authorize(self):
        raise AccessError("Client-side authorization is not available in the demo")

    async def pingback(self) -> None:
        self.logger.info(f"Pingback skipped: {self.get_pingback_url()}")


def parse_vars(pairs: List[str]) -> Dict[str, str]:
    """Parse NAME=VALUE pairs."""
    variables = {}
    for pair in pairs:
        name, sep, value = pair.partition('=')
        if not sep or not name:
            raise ValueError(f"Invalid variable, expected NAME=VALUE: {pair}")
        variables[name] = value
    return variables


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amp-access-demo",
        description="Run server-assisted authorization for a page",
    )
    parser.add_argument("--config", required=True, help="Access configuration file (JSON or YAML)")
    parser.add_argument("--page", required=True, help="HTML file of the live page")
    parser.add_argument("--url", required=True, help="URL the page is served from")
    parser.add_argument("--service-url", help="Authorization service URL override")
    parser.add_argument("--proxied", action="store_true",
                        help="Treat the page as served through a proxy origin")
    parser.add_argument("--var", action="append", default=[], metavar="NAME=VALUE",
                        help="URL variable value (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


async def run(argv: Optional[List[str]] = None) -> int:
    """Demo entry point; returns the process exit code"""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = AccessConfig.from_file(args.config)
        variables = parse_vars(args.var)
        html = Path(args.page).read_text(encoding="utf-8")
    except (AccessError, OSError, ValueError) as e:
        print(f"✗ Invalid input: {e}")
        return 1

    if args.service_url:
        config.service_url = args.service_url

    page = Page.from_html(args.url, html, OriginKind.PROXIED if args.proxied else None)
    adapter = ServerAccessAdapter(page, config, StaticAccessContext(variables), DemoClientAdapter)

    print(f"✓ Loaded config, authorization URL: {config.authorization_url}")
    print(f"  - Service URL: {adapter.service_url}")
    print(f"  - Server state: {adapter.server_state}")

    try:
        if adapter.select_mode() is AuthorizationMode.CLIENT_FALLBACK:
            print("✗ Page requires client-side authorization, which the demo does not provide")
            return 2

        result = await adapter.authorize()
        print("✓ Authorization succeeded")
        print(json.dumps(result, indent=2))
        for element in find_sections(page.document):
            print(f"  - [{element[SECTION_ID_ATTR]}] {element.get_text(strip=True)}")
        return 0
    except AccessError as e:
        print(f"✗ Authorization failed: {e}")
        return 1
    finally:
        await adapter.close()


def main() -> None:
    try:
        sys.exit(asyncio.run(run()))
    except KeyboardInterrupt:
        print("\nDemo interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
