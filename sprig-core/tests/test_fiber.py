"""
Tests for the work-unit tree and child reconciliation.
"""

import pytest


def _root_with(children):
    from sprig.fiber import UnitKind, WorkUnit

    return WorkUnit(UnitKind.HOST_ROOT, None, {"children": children}, visual_node=object())


class TestReconcileChildren:
    """Tests for reconcile_children."""

    def test_sequence_links_in_order(self):
        """Children should be chained through first_child and next_sibling."""
        from sprig.element import create_element
        from sprig.fiber import reconcile_children

        a, b, c = (create_element(t, None) for t in ("a", "b", "c"))
        unit = _root_with(None)
        reconcile_children(unit, [a, b, c])

        kids = list(unit.children())
        assert [k.type for k in kids] == ["a", "b", "c"]
        assert unit.first_child is kids[0]
        assert kids[0].next_sibling is kids[1]
        assert kids[2].next_sibling is None
        assert all(k.parent is unit for k in kids)

    def test_bare_element_is_wrapped(self):
        """A single Element should become a single child unit."""
        from sprig.element import create_element
        from sprig.fiber import reconcile_children

        unit = _root_with(None)
        reconcile_children(unit, create_element("span", None))

        assert unit.first_child.type == "span"
        assert unit.first_child.next_sibling is None

    @pytest.mark.parametrize("children", ["text", 7, 1.5, None, True])
    def test_scalars_produce_no_children(self, children):
        """Scalars and None should leave the unit without children."""
        from sprig.fiber import reconcile_children

        unit = _root_with(None)
        reconcile_children(unit, children)
        assert unit.first_child is None

    def test_empty_sequence_produces_no_children(self):
        from sprig.fiber import reconcile_children

        unit = _root_with(None)
        reconcile_children(unit, [])
        assert unit.first_child is None

    def test_kind_follows_type(self):
        """Callable types become function components, others host components."""
        from sprig.element import create_element
        from sprig.fiber import UnitKind, reconcile_children

        def App(props):
            return None

        unit = _root_with(None)
        reconcile_children(unit, [create_element(App, None), create_element("div", None)])

        first = unit.first_child
        assert first.kind is UnitKind.FUNCTION_COMPONENT
        assert first.next_sibling.kind is UnitKind.HOST_COMPONENT

    def test_units_copy_type_and_props(self):
        from sprig.element import create_element
        from sprig.fiber import reconcile_children

        el = create_element("p", {"id": "x"}, "hi")
        unit = _root_with(None)
        reconcile_children(unit, el)

        assert unit.first_child.type == "p"
        assert unit.first_child.props == {"id": "x", "children": "hi"}
        assert unit.first_child.visual_node is None

    def test_non_element_entries_are_skipped(self):
        """Stray scalars in a child list should not become units."""
        from sprig.element import create_element
        from sprig.fiber import reconcile_children

        unit = _root_with(None)
        reconcile_children(unit, ["text", create_element("b", None), 3, create_element("i", None)])

        assert [k.type for k in unit.children()] == ["b", "i"]


class TestWorkUnit:
    """Tests for WorkUnit invariants."""

    def test_visual_node_set_once(self):
        """A second visual node assignment should raise."""
        from sprig.errors import VisualNodeAlreadySetError
        from sprig.fiber import UnitKind, WorkUnit

        unit = WorkUnit(UnitKind.HOST_COMPONENT, "div", {})
        unit.visual_node = "first"

        with pytest.raises(VisualNodeAlreadySetError):
            unit.visual_node = "second"
        assert unit.visual_node == "first"

    def test_iter_units_depth_first(self):
        """iter_units should visit children before following siblings."""
        from sprig.element import div, p, span
        from sprig.fiber import iter_units, reconcile_children

        unit = _root_with(None)
        reconcile_children(unit, [div(p("x"), p("y")), span("z")])
        for child in list(unit.children()):
            reconcile_children(child, child.props.get("children"))

        order = [u.type for u in iter_units(unit)]
        assert order == [None, "div", "p", "p", "span"]
