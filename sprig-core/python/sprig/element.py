"""
Sprig Element Model

This module provides the immutable element description consumed by the
render engine, plus tag builders for writing element trees by hand.

Example:
    @component
    def greeting(props):
        return p("Hello " + props["name"])

    tree = div(
        h1("Welcome", class_="title"),
        create_element(greeting, {"name": "Ada"}),
        id="app",
    )
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

logger = logging.getLogger("sprig.element")

ElementType = Union[str, Callable[..., Any]]


@dataclass(frozen=True)
class Element:
    """
    Description of one node to render.

    ``type`` is a native tag name such as ``"div"`` or a function taking the
    props mapping and returning an element (or a list of them). Elements are
    created fresh for every render and never mutated.
    """
    type: ElementType
    props: Dict[str, Any] = field(default_factory=dict)

    @property
    def children(self) -> Any:
        """The raw ``children`` property, or None when absent."""
        return self.props.get("children")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary, mostly for debugging output."""
        if callable(self.type):
            type_name = getattr(self.type, "__name__", repr(self.type))
        else:
            type_name = self.type
        result: Dict[str, Any] = {"type": type_name}
        if getattr(self.type, "__sprig_component__", False):
            result["component"] = True

        props = {}
        for key, value in self.props.items():
            if key == "children":
                continue
            props[key] = f"<handler {id(value)}>" if callable(value) else value
        if props:
            result["props"] = props

        children = self.props.get("children")
        if isinstance(children, (list, tuple)):
            result["children"] = [
                c.to_dict() if isinstance(c, Element) else c
                for c in children
            ]
        elif isinstance(children, Element):
            result["children"] = children.to_dict()
        elif "children" in self.props:
            result["children"] = children

        return result


def create_element(
    type_: ElementType,
    props: Optional[Mapping[str, Any]] = None,
    *children: Any,
) -> Element:
    """
    Create an element from a type, a props mapping and positional children.

    Args:
        type_: A tag name or a function component.
        props: Property bag; None is treated as empty.
        *children: Child elements or scalars.

    Returns:
        A new Element. With no children the ``children`` key is left out
        (unless ``props`` already carries one), a single child is stored
        as-is, and several children are stored as a list.
    """
    logger.debug("create_element type=%r children=%d", type_, len(children))

    merged: Dict[str, Any] = dict(props or {})
    if len(children) == 1:
        merged["children"] = children[0]
    elif len(children) > 1:
        merged["children"] = list(children)

    return Element(type=type_, props=merged)


def component(fn: Callable[..., Any]) -> Callable[..., Any]:
    """
    Mark a function as a function component.

    Any callable already works as an element type; the marker only makes the
    intent explicit and shows up in debugging output.

    Example:
        @component
        def badge(props):
            return span(props["label"], class_="badge")
    """
    fn.__sprig_component__ = True
    return fn


def _create_builder(tag: str) -> Callable[..., Element]:
    """
    Factory function to create element builders.

    Returns a function that creates Elements for the given tag.
    """
    def builder(*children: Any, **props: Any) -> Element:
        # Flatten any nested lists in children
        flat_children: List[Any] = []
        for child in children:
            if isinstance(child, (list, tuple)):
                flat_children.extend(child)
            else:
                flat_children.append(child)

        # class_ -> class, for_ -> for
        clean_props = {k[:-1] if k.endswith("_") else k: v for k, v in props.items()}
        return create_element(tag, clean_props, *flat_children)

    builder.__name__ = tag
    return builder


# HTML element builders
div = _create_builder("div")
span = _create_builder("span")
p = _create_builder("p")
h1 = _create_builder("h1")
h2 = _create_builder("h2")
h3 = _create_builder("h3")
h4 = _create_builder("h4")
button = _create_builder("button")
input_ = _create_builder("input")  # Underscore to avoid conflict with builtin
label = _create_builder("label")
form = _create_builder("form")
ul = _create_builder("ul")
ol = _create_builder("ol")
li = _create_builder("li")
a = _create_builder("a")
img = _create_builder("img")
section = _create_builder("section")
