"""
Commit phase.

Runs once per render, after every unit has been begun and completed. Each
visual node is appended to the nearest ancestor that owns one (function
components have none and are skipped) and its properties are applied.
"""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from .config import DEFAULT_CONFIG, RenderConfig
from .errors import DetachedUnitError
from .fiber import WorkUnit

logger = logging.getLogger("sprig.commit")

_SCALAR_TYPES = (str, int, float, bool)


def is_scalar(value: Any) -> bool:
    """True for values rendered directly as text or attribute values."""
    return isinstance(value, _SCALAR_TYPES)


def event_name(prop_name: str, prefix: str = "on") -> str:
    """
    Derive the listener event name from an event property name.

    The prefix and any separating underscores are dropped and the rest is
    lowercased, so ``onClick`` and ``on_click`` both give ``click`` and
    ``on_mouse_over`` gives ``mouse_over``.

    Args:
        prop_name: Property name carrying the handler.
        prefix: Event prefix configured for the session.

    Returns:
        The event name to register the handler under.
    """
    return prop_name[len(prefix):].lstrip("_").lower()


def is_event(prop_name: str, value: Any, prefix: str = "on") -> bool:
    """
    Tell whether a property binds an event handler.

    The name must start with ``prefix`` and be longer than it, and the
    value must be callable. A scalar under an ``on*`` name is an attribute.

    Args:
        prop_name: Property name to check.
        value: The property's value.
        prefix: Event prefix configured for the session.

    Returns:
        True if the property should be registered as a listener.
    """
    return (
        prop_name.startswith(prefix)
        and len(prop_name) > len(prefix)
        and callable(value)
    )


def update_properties(unit: WorkUnit, config: RenderConfig = DEFAULT_CONFIG) -> None:
    """
    Apply a unit's props to its visual node.

    Rules, per property:
        - scalar ``children``: becomes the node's text content
        - ``on*`` with a callable value: registered as an event listener
        - ``style`` mapping: each entry assigned to ``node.style``
        - any other scalar: set as an attribute
        - anything else (including non-scalar children) is ignored
    """
    logger.debug("update_properties %r", unit)
    node = unit.visual_node

    for name, value in unit.props.items():
        if name == config.children_prop:
            if is_scalar(value):
                node.text_content = value
        elif is_event(name, value, config.event_prefix):
            node.add_event_listener(event_name(name, config.event_prefix), value)
        elif name == config.style_prop and isinstance(value, Mapping):
            for css_property, css_value in value.items():
                node.style[css_property] = css_value
        elif is_scalar(value):
            node.set_attribute(name, value)


def _closest_parent_node(unit: WorkUnit) -> Any:
    parent: Optional[WorkUnit] = unit.parent
    while parent is not None and parent.visual_node is None:
        parent = parent.parent
    if parent is None:
        raise DetachedUnitError(f"{unit!r} has no ancestor with a visual node")
    return parent.visual_node


def commit_work(unit: Optional[WorkUnit], config: RenderConfig = DEFAULT_CONFIG) -> int:
    """
    Attach the completed subtree starting at ``unit`` to the render target.

    Visits each unit, then its children, then its following siblings.

    Returns:
        The number of visual nodes attached.
    """
    committed = 0
    while unit is not None:
        logger.debug("commit_work %r", unit)

        if unit.visual_node is not None:
            _closest_parent_node(unit).append_child(unit.visual_node)
            update_properties(unit, config)
            committed += 1

        committed += commit_work(unit.first_child, config)
        unit = unit.next_sibling

    return committed
