"""
In-memory render target.

The engine only needs a handful of primitives from whatever it renders into:
node creation, child insertion, text content, attributes, inline style and
event listeners. ``Document`` and ``HostNode`` provide them as a plain Python
tree that can be inspected in tests or serialized to HTML.

Example:
    doc = Document()
    root = doc.create_container()
    node = doc.create_node("p")
    root.append_child(node)
    node.text_content = "Hello"
    print(root.to_html())  # <div><p>Hello</p></div>
"""

import html
import re
from typing import Any, Callable, Dict, List, Optional, Protocol

from .errors import InvalidTagError

EventHandler = Callable[..., Any]

_TAG_RE = re.compile(r"^[A-Za-z][A-Za-z0-9\-]*$")
_VOID_TAGS = {"br", "hr", "img", "input", "meta", "link"}


class RenderTarget(Protocol):
    """Anything able to create visual nodes for the complete phase."""

    def create_node(self, tag: str) -> Any:
        ...


class HostNode:
    """
    A node in the in-memory render tree.

    Attributes:
        tag: Element tag name.
        document: The Document that created this node.
        parent: Node this one is attached to, if any.
        children: Attached child nodes in order.
        attributes: Plain attributes set via set_attribute.
        style: Inline style properties.
        listeners: Event name to registered handlers.
    """

    def __init__(self, tag: str, document: "Document") -> None:
        self.tag = tag
        self.document = document
        self.parent: Optional[HostNode] = None
        self.children: List[HostNode] = []
        self.attributes: Dict[str, Any] = {}
        self.style: Dict[str, Any] = {}
        self.listeners: Dict[str, List[EventHandler]] = {}
        self._text: Optional[str] = None

    def append_child(self, child: "HostNode") -> "HostNode":
        """Attach ``child`` as the last child, detaching it from any old parent."""
        if child is self:
            raise ValueError("cannot append a node to itself")
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    @property
    def text_content(self) -> str:
        """Text of this node and all descendants, concatenated."""
        if self._text is not None:
            return self._text
        return "".join(c.text_content for c in self.children)

    @text_content.setter
    def text_content(self, value: Any) -> None:
        for child in self.children:
            child.parent = None
        self.children = []
        self._text = str(value)

    def set_attribute(self, name: str, value: Any) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def add_event_listener(self, event: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``event``."""
        self.listeners.setdefault(event, []).append(handler)

    def dispatch_event(self, event: str, payload: Any = None) -> int:
        """
        Call every handler registered for ``event`` on this node.

        Handlers are called with no arguments when ``payload`` is None,
        otherwise with ``payload``. Returns the number of handlers called.
        """
        handlers = list(self.listeners.get(event, []))
        for handler in handlers:
            if payload is None:
                handler()
            else:
                handler(payload)
        return len(handlers)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {"tag": self.tag}
        if self.attributes:
            result["attrs"] = dict(self.attributes)
        if self.style:
            result["style"] = dict(self.style)
        if self.listeners:
            result["events"] = {name: len(h) for name, h in self.listeners.items()}
        if self._text is not None:
            result["text"] = self._text
        elif self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result

    def to_html(self) -> str:
        """Serialize this node and its subtree to an HTML string."""
        attrs = []
        for key, value in self.attributes.items():
            if value is True:
                attrs.append(key)
            elif value is False or value is None:
                continue
            else:
                attrs.append(f'{key}="{html.escape(str(value), quote=True)}"')
        if self.style:
            css = "; ".join(f"{_css_name(k)}: {v}" for k, v in self.style.items())
            attrs.append(f'style="{html.escape(css, quote=True)}"')

        open_tag = self.tag if not attrs else f"{self.tag} {' '.join(attrs)}"
        if self.tag in _VOID_TAGS and not self.children and self._text is None:
            return f"<{open_tag}>"

        if self._text is not None:
            inner = html.escape(self._text, quote=False)
        else:
            inner = "".join(c.to_html() for c in self.children)
        return f"<{open_tag}>{inner}</{self.tag}>"

    def __repr__(self) -> str:
        return f"HostNode({self.tag!r}, children={len(self.children)})"


def _css_name(name: str) -> str:
    """fontSize -> font-size"""
    return re.sub(r"(?<!^)([A-Z])", r"-\1", name).lower()


class Document:
    """
    Factory and owner of HostNodes; the default render target.

    Attributes:
        created: Every node created so far, in creation order.
    """

    def __init__(self) -> None:
        self.created: List[HostNode] = []

    def create_node(self, tag: str) -> HostNode:
        """Create a detached node, raising InvalidTagError for bad names."""
        if not isinstance(tag, str) or not _TAG_RE.match(tag):
            raise InvalidTagError(tag)
        node = HostNode(tag.lower(), self)
        self.created.append(node)
        return node

    def create_container(self, tag: str = "div") -> HostNode:
        """Create a root node to render into."""
        return self.create_node(tag)
