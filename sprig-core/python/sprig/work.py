"""
Begin and complete phases.

The work loop processes one unit at a time. ``begin_work`` expands a unit
into its children; when a unit has none, ``complete_unit_of_work`` creates
its visual node and walks sideways and upward to find the next unit to
begin. The parent links act as the traversal stack, so the walk can stop
after any unit and pick up again later.
"""

import logging
from typing import Optional

from .fiber import UnitKind, WorkUnit, reconcile_children
from .host import RenderTarget

logger = logging.getLogger("sprig.work")


def begin_work(unit: WorkUnit, children_prop: str = "children") -> Optional[WorkUnit]:
    """
    Expand ``unit`` into child work units.

    Function components are called with their props and the result is
    reconciled; host units reconcile their declared children. Units whose
    type does not fit their kind produce no children.

    Returns:
        The unit's first child, or None if it has none.
    """
    logger.debug("begin_work %r", unit)

    if unit.kind is UnitKind.FUNCTION_COMPONENT:
        if callable(unit.type):
            reconcile_children(unit, unit.type(unit.props))
    elif unit.kind is UnitKind.HOST_ROOT:
        reconcile_children(unit, unit.props.get(children_prop))
    elif unit.kind is UnitKind.HOST_COMPONENT:
        if isinstance(unit.type, str):
            reconcile_children(unit, unit.props.get(children_prop))

    return unit.first_child


def complete_unit_of_work(unit: WorkUnit, target: RenderTarget) -> Optional[WorkUnit]:
    """
    Finish ``unit`` and its ancestors until a sibling is found.

    Host components get their visual node here; attributes and listeners are
    left to the commit phase.

    Returns:
        The next unit to begin, or None once the walk reaches the root.
    """
    logger.debug("complete_unit_of_work %r", unit)

    current: Optional[WorkUnit] = unit
    while current is not None:
        if current.kind is UnitKind.HOST_COMPONENT:
            current.visual_node = target.create_node(current.type)

        if current.next_sibling is not None:
            return current.next_sibling

        current = current.parent

    return None


def perform_unit_of_work(
    unit: WorkUnit,
    target: RenderTarget,
    children_prop: str = "children",
) -> Optional[WorkUnit]:
    """Begin ``unit``; fall back to completing it when it has no children."""
    next_unit = begin_work(unit, children_prop)
    if next_unit is None:
        next_unit = complete_unit_of_work(unit, target)
    return next_unit
