"""
Tests for the Sprig element model.

These tests verify create_element's children normalization, the tag
builders and the component marker.
"""

import pytest


class TestCreateElement:
    """Tests for create_element."""

    def test_no_children_leaves_key_out(self):
        """Zero children should not add a children key."""
        from sprig.element import create_element

        el = create_element("div", {"id": "a"})

        assert el.type == "div"
        assert el.props == {"id": "a"}
        assert "children" not in el.props

    def test_single_child_collapses(self):
        """A single child should be stored as-is, not in a list."""
        from sprig.element import create_element

        child = create_element("span", None)
        el = create_element("div", None, child)

        assert el.props["children"] is child

    def test_single_scalar_child(self):
        """A single text child should stay a plain string."""
        from sprig.element import create_element

        el = create_element("span", None, "hi")
        assert el.props["children"] == "hi"

    def test_many_children_stay_ordered(self):
        """Several children should be stored as an ordered list."""
        from sprig.element import create_element

        a = create_element("li", None, "a")
        b = create_element("li", None, "b")
        el = create_element("ul", None, a, "text", b)

        assert el.props["children"] == [a, "text", b]

    def test_none_props_is_empty(self):
        """None props should behave like an empty mapping."""
        from sprig.element import create_element

        el = create_element("br", None)
        assert el.props == {}

    def test_props_are_copied(self):
        """The caller's props mapping should not be mutated."""
        from sprig.element import create_element

        props = {"class": "x"}
        el = create_element("div", props, "child")

        assert props == {"class": "x"}
        assert el.props == {"class": "x", "children": "child"}

    def test_type_is_not_validated(self):
        """Any type should be accepted at construction time."""
        from sprig.element import create_element

        el = create_element(42, None)
        assert el.type == 42

    def test_elements_are_immutable(self):
        """Element fields should not be reassignable."""
        import dataclasses
        from sprig.element import create_element

        el = create_element("div", None)
        with pytest.raises(dataclasses.FrozenInstanceError):
            el.type = "span"


class TestElementBuilders:
    """Tests for tag builder shortcuts."""

    def test_div_builder(self):
        """div() should match create_element('div', ...)."""
        from sprig.element import create_element, div

        assert div("Hello", id="test") == create_element("div", {"id": "test"}, "Hello")

    def test_trailing_underscore_is_stripped(self):
        """class_ should become class."""
        from sprig.element import div

        node = div(class_="container")
        assert node.props == {"class": "container"}

    def test_nested_lists_are_flattened(self):
        """A list of children should be spread into positional children."""
        from sprig.element import ul, li

        node = ul([li("one"), li("two")], li("three"))

        assert len(node.props["children"]) == 3
        assert [c.props["children"] for c in node.props["children"]] == ["one", "two", "three"]

    def test_to_dict(self):
        """to_dict should describe nested elements and function types."""
        from sprig.element import component, create_element, div, p

        @component
        def Greeting(props):
            return p("hi")

        d = div(create_element(Greeting, {"name": "x"}), id="root").to_dict()

        assert d["type"] == "div"
        assert d["props"] == {"id": "root"}
        assert d["children"] == {"type": "Greeting", "component": True, "props": {"name": "x"}}


class TestComponentDecorator:
    """Tests for @component."""

    def test_component_returns_same_function(self):
        """The decorator should mark and return the function itself."""
        from sprig.element import component

        def Badge(props):
            return None

        assert component(Badge) is Badge
        assert Badge.__sprig_component__ is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

    def test_marker_shows_in_to_dict(self):
        """Only decorated functions should be flagged as components in to_dict."""
        from sprig.element import component, create_element

        def Plain(props):
            return None

        Marked = component(lambda props: None)

        assert "component" not in create_element(Plain, None).to_dict()
        assert create_element(Marked, None).to_dict()["component"] is True
