"""
Sprig Server

Simple HTTP server that serves a Sprig application as static HTML.
Every request renders the app into a fresh document, so no output from an
earlier request leaks into the next one.
"""

import http.server
import logging
import socketserver
from typing import Callable

from .element import Element
from .host import Document
from .scheduler import RenderSession

logger = logging.getLogger("sprig.server")

AppFactory = Callable[[], Element]

_PAGE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; padding: 20px; }}
        .container {{ max-width: 800px; margin: 0 auto; }}
    </style>
</head>
<body>
{body}
</body>
</html>"""


class SprigApp:
    """
    A Sprig application that can be run as a server.

    Example:
        from sprig.server import SprigApp
        from sprig.element import div, h1, p

        def home():
            return div(h1("Hello"), p("Rendered by Sprig"))

        app = SprigApp(home)
        app.run()
    """

    def __init__(self, app_factory: AppFactory, title: str = "Sprig App"):
        self.app_factory = app_factory
        self.title = title

    def render_html(self) -> str:
        """Render the app into a fresh container and return its HTML."""
        document = Document()
        container = document.create_container()
        container.set_attribute("id", "app")
        container.set_attribute("class", "container")

        session = RenderSession(document)
        session.render(self.app_factory(), container)
        committed = session.flush()
        logger.debug("rendered page with %d nodes", committed)
        return container.to_html()

    def render_page(self) -> str:
        return _PAGE.format(title=self.title, body=self.render_html())

    def run(self, host: str = "localhost", port: int = 8000):
        """Run the application server."""
        print(f"Starting Sprig server at http://{host}:{port}")
        print("Press Ctrl+C to stop")

        class Handler(http.server.SimpleHTTPRequestHandler):
            app_instance = self

            def do_GET(self):
                if self.path == "/" or self.path == "/index.html":
                    body = self.app_instance.render_page().encode()
                    self.send_response(200)
                    self.send_header("Content-type", "text/html; charset=utf-8")
                    self.send_header("Content-Length", str(len(body)))
                    self.end_headers()
                    self.wfile.write(body)
                else:
                    self.send_response(404)
                    self.end_headers()

            def log_message(self, format, *args):
                logger.info("%s - %s", self.address_string(), format % args)

        with socketserver.TCPServer((host, port), Handler) as httpd:
            try:
                httpd.serve_forever()
            except KeyboardInterrupt:
                print("\nServer stopped")


def run_app(app_factory: AppFactory, host: str = "localhost", port: int = 8000):
    """Run a Sprig app factory as a web application."""
    app = SprigApp(app_factory)
    app.run(host, port)
