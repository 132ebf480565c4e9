"""
Tests for the HTML app server.
"""


class TestSprigApp:
    """Tests for SprigApp rendering."""

    def test_render_html(self):
        from sprig.element import create_element, div, h1
        from sprig.server import SprigApp

        def Title(props):
            return h1(props["text"])

        app = SprigApp(lambda: div(create_element(Title, {"text": "Hi"})))

        assert app.render_html() == (
            '<div id="app" class="container"><div><h1>Hi</h1></div></div>'
        )

    def test_each_request_renders_fresh(self):
        """Rendering twice should not duplicate nodes."""
        from sprig.element import p
        from sprig.server import SprigApp

        calls = []

        def factory():
            calls.append(1)
            return p(f"render {len(calls)}")

        app = SprigApp(factory)
        app.render_html()
        html = app.render_html()

        assert html == '<div id="app" class="container"><p>render 2</p></div>'

    def test_render_page_wraps_body(self):
        from sprig.element import p
        from sprig.server import SprigApp

        page = SprigApp(lambda: p("x"), title="Demo").render_page()

        assert page.startswith("<!DOCTYPE html>")
        assert "<title>Demo</title>" in page
        assert "<p>x</p>" in page
