"""
Sprig error types.

Most malformed input is tolerated silently: an element whose type is neither
a tag nor a callable produces no children, and property values the commit
phase does not understand are skipped. The exceptions below cover the cases
that do abort a render pass.
"""


class SprigError(Exception):
    """Base class for all Sprig errors."""


class InvalidTagError(SprigError, ValueError):
    """Raised by a render target asked to create a node with a bad tag name."""

    def __init__(self, tag: object) -> None:
        super().__init__(f"Invalid tag name: {tag!r}")
        self.tag = tag


class VisualNodeAlreadySetError(SprigError, RuntimeError):
    """Raised when a work unit's visual node is assigned a second time."""


class SessionClosedError(SprigError, RuntimeError):
    """Raised when rendering into a session that has been closed."""


class DetachedUnitError(SprigError, RuntimeError):
    """Raised when a committed unit has no ancestor owning a visual node."""
