"""Single-flight scheduler for compilation passes."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

from ..errors import PageBuilderError

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT")
ResultT = TypeVar("ResultT")

_NOTHING = object()


class CompilationScheduler(Generic[RequestT, ResultT]):
    """Serializes compilation passes with most-recent-wins coalescing.

    At most one pass runs at a time. A trigger while a pass is in flight
    overwrites the single pending slot, so only the newest request runs
    next; the final published result always reflects the latest trigger.
    Passes are never cancelled. Consecutive triggers with an unchanged
    request are ignored.

    Must be triggered from within a running event loop.

    Example:
        scheduler = CompilationScheduler(
            lambda req: compiler.compile(req[0], "edit", req[1]),
            publish=view.show,
        )
        scheduler.trigger((tree, selection))
    """

    def __init__(
        self,
        compile_pass: Callable[[RequestT], Awaitable[ResultT]],
        publish: Callable[[ResultT], None],
    ) -> None:
        """Initialize the scheduler.

        Args:
            compile_pass: Coroutine function running one pass for a request
            publish: Called with each successful pass result
        """
        self._compile_pass = compile_pass
        self._publish = publish

        self._busy = False
        self._pending: RequestT | object = _NOTHING
        self._last_request: RequestT | object = _NOTHING
        self._task: asyncio.Task[None] | None = None
        self._idle = asyncio.Event()
        self._idle.set()

        self.passes = 0
        self.last_error: Exception | None = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def has_pending(self) -> bool:
        return self._pending is not _NOTHING

    def trigger(self, request: RequestT, force: bool = False) -> bool:
        """Request a compilation pass.

        Args:
            request: The input to compile, typically a (tree, selection) pair
            force: Run even if the request equals the previous one

        Returns:
            False if the request equals the previous one and was suppressed
        """
        if not force and self._last_request is not _NOTHING and request == self._last_request:
            return False
        self._last_request = request

        if self._busy:
            if self._pending is not _NOTHING:
                logger.debug("Superseding pending compilation request")
            self._pending = request
            return True

        # Busy is set before the pass task exists, so no later trigger can start a second pass
        self._busy = True
        self._idle.clear()
        self._task = asyncio.get_running_loop().create_task(self._drain(request))
        return True

    async def _drain(self, request: RequestT) -> None:
        """Run passes until the pending slot is empty."""
        try:
            while True:
                await self._run_pass(request)
                if self._pending is _NOTHING:
                    break
                request, self._pending = self._pending, _NOTHING
        finally:
            if self._pending is not _NOTHING:
                # Drain was interrupted; a stale request must never run after a newer one
                self._pending = _NOTHING
                self._last_request = _NOTHING
            self._busy = False
            self._idle.set()

    async def _run_pass(self, request: RequestT) -> None:
        """Run one pass; a failure keeps the last published result."""
        self.passes += 1
        try:
            result = await self._compile_pass(request)
        except Exception as exc:
            self.last_error = exc
            logger.warning("Compilation pass %d failed, keeping last result: %s", self.passes, exc,
                           exc_info=not isinstance(exc, PageBuilderError))
            return

        self.last_error = None
        self._publish(result)

    async def wait_idle(self) -> None:
        """Wait until no pass is running and nothing is pending."""
        await self._idle.wait()
