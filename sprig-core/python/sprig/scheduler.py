"""
Sprig Work-Loop Scheduler

A RenderSession owns one render at a time: the host root unit, the unit to
process next, and the render target nodes are created on. Each idle slot the
session performs as many units as the slot's deadline allows, resuming
exactly where the previous slot stopped. Once the whole work tree has been
walked the result is committed in one go and the session goes quiet until
the next ``render`` call.

Example:
    doc = Document()
    root = doc.create_container()

    async def main():
        session = RenderSession(doc, AsyncioIdleScheduler())
        session.start()
        session.render(div(p("Hello")), root)
        await session.settle()
        print(root.to_html())
        session.close()

    asyncio.run(main())
"""

import asyncio
import logging
import time
from typing import Any, Callable, List, Optional, Protocol

from .commit import commit_work
from .config import DEFAULT_CONFIG, RenderConfig
from .element import Element
from .errors import SessionClosedError
from .fiber import UnitKind, WorkUnit
from .host import RenderTarget
from .work import perform_unit_of_work

logger = logging.getLogger("sprig.scheduler")

Clock = Callable[[], float]


class IdleDeadline:
    """
    Time budget for one idle slot.

    A budget of None means the slot never runs out.
    """

    def __init__(self, budget: Optional[float] = None, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._end = None if budget is None else clock() + budget

    def time_remaining(self) -> float:
        """Seconds left in this slot (infinite for an unbounded slot)."""
        if self._end is None:
            return float("inf")
        return max(0.0, self._end - self._clock())

    @property
    def did_timeout(self) -> bool:
        return self.time_remaining() <= 0.0


IdleCallback = Callable[[IdleDeadline], None]


class IdleScheduler(Protocol):
    """Decides when a slice of render work may run."""

    def schedule_on_idle(self, callback: IdleCallback) -> None:
        ...


class AsyncioIdleScheduler:
    """
    Idle scheduler backed by an asyncio event loop.

    Callbacks run ``idle_interval`` seconds after being scheduled and get a
    deadline of ``time_slice`` seconds.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        config: Optional[RenderConfig] = None,
    ) -> None:
        self.loop = loop
        self.config = config or DEFAULT_CONFIG
        self._handles: List[asyncio.TimerHandle] = []

    def schedule_on_idle(self, callback: IdleCallback) -> None:
        """Schedule ``callback``; binds to the running loop unless one was given."""
        if self.loop is None:
            self.loop = asyncio.get_running_loop()
        # Filled once the handle exists so _run can drop it from _handles
        own: List[asyncio.TimerHandle] = []
        handle = self.loop.call_later(self.config.idle_interval, self._run, callback, own)
        own.append(handle)
        self._handles.append(handle)

    def _run(self, callback: IdleCallback, own: List[asyncio.TimerHandle]) -> None:
        for handle in own:
            if handle in self._handles:
                self._handles.remove(handle)
        callback(IdleDeadline(self.config.time_slice))

    @property
    def outstanding(self) -> int:
        """Number of scheduled callbacks that have not run yet."""
        return len(self._handles)

    def cancel(self) -> None:
        """Cancel every callback not yet run."""
        for handle in self._handles:
            handle.cancel()
        self._handles.clear()


class ManualIdleScheduler:
    """
    Idle scheduler driven by hand.

    Callbacks queue up until ``run_idle`` is called, which makes it handy for
    tests and for embedding the engine in a host with its own main loop.
    """

    def __init__(self, clock: Clock = time.monotonic) -> None:
        self.clock = clock
        self.pending: List[IdleCallback] = []

    def schedule_on_idle(self, callback: IdleCallback) -> None:
        self.pending.append(callback)

    def run_idle(self, budget: Optional[float] = None) -> int:
        """
        Run the callbacks queued so far, each with its own deadline.

        Callbacks scheduled while running wait for the next call.

        Returns:
            The number of callbacks run.
        """
        ready, self.pending = self.pending, []
        for callback in ready:
            callback(IdleDeadline(budget, self.clock))
        return len(ready)


class RenderSession:
    """
    State of one render target's render-to-commit cycle.

    Attributes:
        target: Render target used to create visual nodes.
        scheduler: Idle scheduler the session re-arms itself on, if any.
        config: Property conventions and time budgets.
        root_unit: Host root of the latest render, None before the first.
        current_unit: Next unit to process, None when nothing is in flight.
        passes: Number of idle passes run.
        commits: Number of completed commits.
        last_error: Exception that aborted the latest render, if any.
    """

    def __init__(
        self,
        target: RenderTarget,
        scheduler: Optional[IdleScheduler] = None,
        config: Optional[RenderConfig] = None,
    ) -> None:
        self.target = target
        self.scheduler = scheduler
        self.config = config or DEFAULT_CONFIG
        self.root_unit: Optional[WorkUnit] = None
        self.current_unit: Optional[WorkUnit] = None
        self.passes = 0
        self.commits = 0
        self._pending = False
        self._armed = False
        self._closed = False
        self.last_error: Optional[BaseException] = None

    @property
    def pending(self) -> bool:
        """True while a render has been seeded but not yet committed."""
        return self._pending

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Register the first idle callback."""
        if self._closed:
            raise SessionClosedError("cannot start a closed session")
        self._arm()

    def close(self) -> None:
        """Stop re-arming; pending work is dropped."""
        self._closed = True
        self._pending = False
        self.current_unit = None
        cancel = getattr(self.scheduler, "cancel", None)
        if cancel is not None:
            cancel()
        logger.debug("session closed")

    def render(self, element: Element, container: Any) -> WorkUnit:
        """
        Seed a new render of ``element`` into ``container``.

        Nothing touches the container until an idle pass finishes the work
        tree and commits it. Any earlier unfinished render is discarded.

        Returns:
            The new host root unit.
        """
        if self._closed:
            raise SessionClosedError("cannot render into a closed session")
        if self._pending:
            logger.info("discarding unfinished render in favour of a new one")

        root = WorkUnit(
            kind=UnitKind.HOST_ROOT,
            type=None,
            props={self.config.children_prop: [element]},
            visual_node=container,
        )
        self.root_unit = root
        self.current_unit = root
        self.last_error = None
        self._pending = True
        logger.debug("render seeded root=%r container=%r", root, container)
        return root

    def perform_work(self, deadline: Optional[IdleDeadline] = None) -> None:
        """
        Idle callback: advance the pending render, commit it when done.

        At least one unit is processed per call so a tight deadline cannot
        stall progress. The session re-arms itself even if the pass fails.
        """
        self._armed = False
        self.passes += 1
        try:
            self._work_loop(deadline)
        finally:
            if not self._closed and self.scheduler is not None:
                self._arm()

    def flush(self) -> int:
        """
        Finish the pending render synchronously and commit it.

        Returns:
            The number of visual nodes attached, 0 if nothing was pending.
        """
        return self._work_loop(None)

    async def settle(self, timeout: Optional[float] = None) -> None:
        """
        Wait until the pending render has been committed.

        Raises:
            Exception: Whatever aborted the render's pass, if one failed.
            asyncio.TimeoutError: If ``timeout`` elapses first.
        """
        async def _wait() -> None:
            while self._pending:
                await asyncio.sleep(self.config.idle_interval / 2)

        await asyncio.wait_for(_wait(), timeout)
        if self.last_error is not None:
            raise self.last_error

    def _arm(self) -> None:
        if self._armed or self.scheduler is None:
            return
        self.scheduler.schedule_on_idle(self.perform_work)
        self._armed = True

    def _work_loop(self, deadline: Optional[IdleDeadline]) -> int:
        if not self._pending:
            return 0

        logger.debug("work loop starting at %r", self.current_unit)
        try:
            while self.current_unit is not None:
                self.current_unit = perform_unit_of_work(
                    self.current_unit, self.target, self.config.children_prop
                )
                if self.current_unit is not None and deadline is not None and deadline.did_timeout:
                    logger.debug("deadline reached, yielding before %r", self.current_unit)
                    return 0

            assert self.root_unit is not None
            committed = commit_work(self.root_unit.first_child, self.config)
        except Exception as exc:
            logger.error("render pass failed; discarding work tree", exc_info=True)
            self.last_error = exc
            self.current_unit = None
            self._pending = False
            raise

        self._pending = False
        self.commits += 1
        logger.debug("committed %d visual nodes", committed)
        return committed
