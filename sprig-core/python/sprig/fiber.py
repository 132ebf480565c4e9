"""
Work-unit tree.

Every render pass mirrors the element tree into a tree of WorkUnits linked
through ``parent``, ``first_child`` and ``next_sibling``. Units are built from
scratch on each pass; nothing here looks at the units of an earlier render.
"""

import logging
from enum import Enum
from typing import Any, Dict, Iterator, Optional

from .element import Element, ElementType
from .errors import VisualNodeAlreadySetError

logger = logging.getLogger("sprig.fiber")


class UnitKind(Enum):
    """What a work unit stands for; decides how the begin phase treats it."""
    FUNCTION_COMPONENT = 0
    HOST_ROOT = 3
    HOST_COMPONENT = 5


class WorkUnit:
    """
    Mutable record tracking one element instance during a render pass.

    Attributes:
        kind: The UnitKind of this unit.
        type: Element type copied from the originating element.
        props: Props copied from the originating element.
        parent: Owning unit, None only for the host root.
        first_child: First reconciled child, if any.
        next_sibling: Next unit in the parent's child list, if any.
    """

    __slots__ = ("kind", "type", "props", "parent", "first_child", "next_sibling", "_visual_node")

    def __init__(
        self,
        kind: UnitKind,
        type: Optional[ElementType],
        props: Dict[str, Any],
        parent: Optional["WorkUnit"] = None,
        visual_node: Any = None,
    ) -> None:
        self.kind = kind
        self.type = type
        self.props = props
        self.parent = parent
        self.first_child: Optional[WorkUnit] = None
        self.next_sibling: Optional[WorkUnit] = None
        self._visual_node = visual_node

    @property
    def visual_node(self) -> Any:
        """Handle to the render-target node, None until completed."""
        return self._visual_node

    @visual_node.setter
    def visual_node(self, node: Any) -> None:
        if self._visual_node is not None:
            raise VisualNodeAlreadySetError(
                f"visual node of {self!r} is already set"
            )
        self._visual_node = node

    def children(self) -> Iterator["WorkUnit"]:
        """Iterate over direct children in sibling order."""
        child = self.first_child
        while child is not None:
            yield child
            child = child.next_sibling

    def __repr__(self) -> str:
        type_name = getattr(self.type, "__name__", self.type)
        return f"WorkUnit({self.kind.name}, {type_name!r})"


def create_unit(
    element: Element,
    kind: UnitKind,
    parent: Optional[WorkUnit] = None,
    visual_node: Any = None,
) -> WorkUnit:
    """Create a new unit copying ``type`` and ``props`` from ``element``."""
    logger.debug("create_unit kind=%s type=%r", kind.name, element.type)
    return WorkUnit(
        kind=kind,
        type=element.type,
        props=element.props,
        parent=parent,
        visual_node=visual_node,
    )


def reconcile_children(unit: WorkUnit, children: Any) -> None:
    """
    Build work units for ``children`` and link them under ``unit``.

    A list or tuple is taken as the ordered child sequence and a bare Element
    is wrapped into a one-item sequence. Anything else (strings, numbers,
    None) leaves the unit without children; scalar children are rendered as
    text by the commit phase instead.
    """
    logger.debug("reconcile_children unit=%r", unit)

    if isinstance(children, (list, tuple)):
        elements = children
    elif isinstance(children, Element):
        elements = [children]
    else:
        unit.first_child = None
        return

    unit.first_child = None
    previous: Optional[WorkUnit] = None
    for element in elements:
        if not isinstance(element, Element):
            logger.debug("skipping non-element child %r of %r", element, unit)
            continue

        kind = UnitKind.FUNCTION_COMPONENT if callable(element.type) else UnitKind.HOST_COMPONENT
        new_unit = create_unit(element, kind, parent=unit)

        if previous is None:
            unit.first_child = new_unit
        else:
            previous.next_sibling = new_unit
        previous = new_unit


def iter_units(root: Optional[WorkUnit]) -> Iterator[WorkUnit]:
    """Depth-first, sibling-order walk over a work tree starting at ``root``."""
    stack = [root] if root is not None else []
    while stack:
        unit = stack.pop()
        yield unit
        stack.extend(reversed(list(unit.children())))
