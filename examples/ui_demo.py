"""
Sprig UI Demo: Static Page

This demo renders a small component tree and serves it over HTTP.
It demonstrates:
- Function components
- Inline styles and attributes
- Idle-time rendering driven by hand

Run this demo:
    python examples/ui_demo.py          # print the HTML
    python examples/ui_demo.py serve    # serve on http://localhost:8000
"""

import sys
import os

# Add the sprig package to path for development
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'sprig-core', 'python'))

from sprig import Document, ManualIdleScheduler, RenderSession
from sprig.element import component, create_element, div, h1, li, p, ul
from sprig.server import run_app


@component
def Feature(props):
    return li(props["text"], style={"color": props.get("color", "#333")})


@component
def Page(props):
    return div(
        h1("Sprig"),
        p("An incremental tree-rendering engine."),
        ul([
            create_element(Feature, {"text": "Work units processed in idle slots"}),
            create_element(Feature, {"text": "Function components expand lazily"}),
            create_element(Feature, {"text": "One commit per render", "color": "#4CAF50"}),
        ]),
        id="page",
    )


def app():
    return create_element(Page, None)


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "serve":
        run_app(app)
        sys.exit(0)

    document = Document()
    root = document.create_container()
    scheduler = ManualIdleScheduler()
    session = RenderSession(document, scheduler)
    session.start()
    session.render(app(), root)

    slots = 0
    while session.pending:
        scheduler.run_idle(budget=0)  # one work unit per slot
        slots += 1

    print(f"Rendered in {slots} idle slots:")
    print(root.to_html())
