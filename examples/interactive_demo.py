"""
Sprig Interactive Demo Server

A single-file demo that runs everything on one port using aiohttp. Each
update renders the app into a fresh document during idle slots of the
server's own event loop, then ships the committed HTML to every browser.

Run:
    pip install -e ".[demo]"
    python examples/interactive_demo.py

Then open http://localhost:8000 in your browser.
"""

import asyncio
import json
import logging
import os
import sys

# Add sprig to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'sprig-core', 'python'))

from aiohttp import web

from sprig import AsyncioIdleScheduler, Document, RenderConfig, RenderSession, configure_logging
from sprig.element import button, create_element, div, h1, h2, p

# Application state, rebuilt into a new element tree on every render
state = {"count": 0}


def increment():
    state["count"] += 1


def decrement():
    state["count"] -= 1


def reset():
    state["count"] = 0


def Stats(props):
    count = props["count"]
    return div(
        p(f"Doubled: {count * 2}"),
        p(f"Squared: {count ** 2}"),
        style={"marginTop": "20px", "color": "#666"},
    )


def App(props):
    count = state["count"]
    return div(
        h1("Sprig Interactive Counter"),
        p("Every click re-renders the whole tree during idle time."),
        div(
            h2(f"Count: {count}"),
            div(
                button("-", id="btn-dec", onClick=decrement),
                button("Reset", id="btn-reset", onClick=reset),
                button("+", id="btn-inc", onClick=increment),
                style={"display": "flex", "gap": "10px", "justifyContent": "center"},
            ),
            create_element(Stats, {"count": count}),
            style={"textAlign": "center", "padding": "30px"},
        ),
        class_="container",
    )


HTML_PAGE = '''<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Sprig Interactive Demo</title>
    <style>
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
               max-width: 600px; margin: 40px auto; padding: 20px; }
        button { padding: 15px 30px; font-size: 20px; cursor: pointer; }
    </style>
</head>
<body>
    <div id="app">Loading...</div>
    <script>
        const app = document.getElementById('app');
        let ws;

        function connect() {
            ws = new WebSocket('ws://' + location.host + '/ws');
            ws.onclose = () => setTimeout(connect, 1000);
            ws.onmessage = (e) => {
                const msg = JSON.parse(e.data);
                if (msg.type === 'html') {
                    app.innerHTML = msg.data;
                    document.querySelectorAll('[data-node]').forEach(el => {
                        el.onclick = () => ws.send(JSON.stringify({
                            type: 'event', node: Number(el.dataset.node), event: 'click'
                        }));
                    });
                } else if (msg.type === 'error') {
                    app.textContent = msg.data;
                }
            };
        }
        connect();
    </script>
</body>
</html>'''


class LiveView:
    """Latest committed document plus the session that produced it."""

    def __init__(self, config: RenderConfig):
        self.config = config
        self.document = None

    async def render(self) -> str:
        document = Document()
        container = document.create_container()
        session = RenderSession(document, AsyncioIdleScheduler(config=self.config), self.config)
        session.start()
        session.render(create_element(App, None), container)
        try:
            await session.settle(timeout=5)
        finally:
            session.close()

        # Tag every node with listeners so the browser can route clicks back
        for index, node in enumerate(document.created):
            if node.listeners:
                node.set_attribute("data-node", index)
        self.document = document
        return container.to_html()

    async def message(self) -> dict:
        """Render and wrap the result for the browser, reporting failures."""
        try:
            return {"type": "html", "data": await self.render()}
        except Exception as exc:
            logging.getLogger("sprig.demo").error("render failed", exc_info=True)
            return {"type": "error", "data": f"Render failed: {exc!r}"}

    def dispatch(self, index: int, event: str) -> bool:
        if self.document is None or not 0 <= index < len(self.document.created):
            return False
        return self.document.created[index].dispatch_event(event) > 0


async def main():
    configure_logging()
    view = LiveView(RenderConfig.from_env())
    clients = set()

    async def handle_index(request):
        return web.Response(text=HTML_PAGE, content_type='text/html')

    async def handle_websocket(request):
        ws = web.WebSocketResponse()
        await ws.prepare(request)
        clients.add(ws)

        await ws.send_json(await view.message())

        try:
            async for msg in ws:
                if msg.type == web.WSMsgType.TEXT:
                    data = json.loads(msg.data)
                    if data.get("type") == "event" and view.dispatch(int(data.get("node", -1)), data.get("event", "")):
                        message = await view.message()
                        for client in clients:
                            await client.send_json(message)
        finally:
            clients.discard(ws)

        return ws

    app = web.Application()
    app.router.add_get('/', handle_index)
    app.router.add_get('/ws', handle_websocket)

    print("=" * 60)
    print("  SPRIG INTERACTIVE DEMO")
    print("=" * 60)
    print()
    print("  Open in browser: http://localhost:8000")
    print("  Press Ctrl+C to stop.")
    print()

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, 'localhost', 8000)
    await site.start()

    await asyncio.Future()  # Run forever


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nServer stopped")
