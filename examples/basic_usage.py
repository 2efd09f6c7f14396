"""
Basic access adapter usage example.

This example demonstrates the fundamental operations:
- Creating a ServerAccessAdapter for a proxied page
- Server-assisted authorization against a local service
- Section replacement in the live page
- Pingback through the client adapter
"""

import asyncio

from aiohttp import web

from amp_access import ClientAdapter, OriginKind, Page, ServerAccessAdapter, StaticAccessContext


PAGE_HTML = """
<html>
<head><meta name="i-amp-access-state" content="STATE1"></head>
<body>
  <article i-amp-access-id="0/1">Subscribe to read the rest.</article>
</body>
</html>
"""


async def authorize_and_fill(request: web.Request) -> web.Response:
    """Toy authorization service: every reader gets full access."""
    form = await request.post()
    print(f"  service received: {form['request']}")
    return web.Response(
        text=(
            '<script type="application/json" id="amp-access-data">{"access": true}</script>'
            '<article i-amp-access-id="0/1">The full article text.</article>'
        ),
        content_type="text/html",
    )


class PrintingClientAdapter(ClientAdapter):
    """Client adapter that only reports what it would do."""

    async def authorize(self):
        print("  client authorize")
        return {"access": False}

    async def pingback(self) -> None:
        print(f"  client pingback to {self.get_pingback_url()}")


async def basic_example():
    """Demonstrate basic adapter usage"""
    print("Basic Access Adapter Example")
    print("=" * 30)

    # 1. Start a local authorization service
    app = web.Application()
    app.router.add_post("/af", authorize_and_fill)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 8765)
    await site.start()
    print("✓ Started authorization service")

    # 2. Create the adapter for a proxied page
    page = Page.from_html("https://example.com/article#top", PAGE_HTML, OriginKind.PROXIED)
    adapter = ServerAccessAdapter(
        page,
        {
            "authorization": "https://example.com/a?rid=READER_ID",
            "pingback": "https://example.com/p?rid=READER_ID",
            "service_url": "http://127.0.0.1:8765/af",
        },
        StaticAccessContext({"READER_ID": "reader1"}),
        PrintingClientAdapter,
    )
    print(f"✓ Created adapter, mode: {adapter.select_mode().value}")

    try:
        # 3. Authorize
        result = await adapter.authorize()
        print(f"✓ Authorization result: {result}")

        # 4. Inspect the updated page
        article = page.document.find("article")
        print(f"✓ Article now reads: {article.get_text(strip=True)}")

        # 5. Pingback
        await adapter.pingback()
        print("✓ Pingback sent")

    finally:
        # 6. Cleanup
        await adapter.close()
        await runner.cleanup()
        print("✓ Adapter closed")


if __name__ == "__main__":
    asyncio.run(basic_example())
