"""
Sprig - an incremental tree-rendering engine for Python.

Sprig walks a tree of declarative elements one work unit at a time during
idle slots, expands function components into their output, and commits the
finished tree onto a render target in a single pass.

Example usage:

    import asyncio
    from sprig import Document, create_element, render, default_session

    def greeting(props):
        return create_element("p", None, "Hello " + props["name"])

    async def main():
        doc = Document()
        root = doc.create_container()
        render(create_element(greeting, {"name": "Ada"}), root)
        await default_session().settle()
        print(root.to_html())  # <div><p>Hello Ada</p></div>

    asyncio.run(main())
"""

import asyncio
import logging
from typing import Any, Optional

from .config import RenderConfig
from .element import Element, component, create_element
from .errors import InvalidTagError, SessionClosedError, SprigError, VisualNodeAlreadySetError
from .fiber import UnitKind, WorkUnit
from .host import Document, HostNode
from .log import configure_logging
from .scheduler import (
    AsyncioIdleScheduler,
    IdleDeadline,
    ManualIdleScheduler,
    RenderSession,
)

__version__ = "0.1.0"
__all__ = [
    "create_element", "render", "component", "Element",
    "RenderSession", "AsyncioIdleScheduler", "ManualIdleScheduler", "IdleDeadline",
    "Document", "HostNode", "WorkUnit", "UnitKind", "RenderConfig",
    "default_session", "configure_logging",
    "SprigError", "InvalidTagError", "VisualNodeAlreadySetError", "SessionClosedError",
]

logger = logging.getLogger("sprig")

_default_session: Optional[RenderSession] = None


def default_session() -> Optional[RenderSession]:
    """The session used by the module-level ``render``, if one exists."""
    return _default_session


def render(element: Element, container: Any) -> RenderSession:
    """
    Schedule ``element`` to be rendered into ``container``.

    Must be called while an asyncio loop is running. Uses a shared
    session armed on that loop, created on first use and replaced when
    the container belongs to a different render target or loop. The
    container is mutated on a later idle slot, not during this call.

    Args:
        element: Root element to render.
        container: Render-target node to attach the output to. Its
            ``document`` attribute is used as the render target.

    Returns:
        The session now holding the render.
    """
    global _default_session

    target = getattr(container, "document", None)
    if target is None:
        raise TypeError(f"container {container!r} has no owning document")
    loop = asyncio.get_running_loop()

    session = _default_session
    stale = (
        session is None
        or session.closed
        or session.target is not target
        or getattr(session.scheduler, "loop", None) is not loop
    )
    if stale:
        if _default_session is not None and not _default_session.closed:
            _default_session.close()
        config = RenderConfig.from_env()
        session = RenderSession(target, AsyncioIdleScheduler(loop, config), config)
        session.start()
        _default_session = session
        logger.debug("created default session for %r", target)

    _default_session.render(element, container)
    return _default_session
