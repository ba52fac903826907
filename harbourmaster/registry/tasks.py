"""Ownership of scheduled continuations.

The event loop only keeps weak references to tasks, so every continuation
the coordinator schedules is held here until it finishes. Tasks handed back
to a caller report failures through ``await``; detached tasks have no such
caller, so their failures are logged when they complete.
"""

from __future__ import annotations

import asyncio
import typing as typ

from harbourmaster.logging import get_logger, log_debug, log_exception

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = get_logger(__name__)


class InFlightTasks:
    """Set of running tasks; detached ones get unhandled-failure logging."""

    def __init__(self) -> None:
        """Start with no tasks in flight."""
        self._tasks: set[asyncio.Task[typ.Any]] = set()

    def __len__(self) -> int:
        """Return the number of unfinished tasks."""
        return len(self._tasks)

    def spawn[T](
        self,
        coro: cabc.Coroutine[typ.Any, typ.Any, T],
        *,
        name: str,
        detached: bool = False,
    ) -> asyncio.Task[T]:
        """Schedule ``coro`` on the running loop and return immediately.

        Parameters
        ----------
        coro
            Coroutine to run. It is closed unstarted if no loop is running.
        name
            Task name used in logs.
        detached
            ``True`` when nobody will await the task; its failure is then
            logged instead of being left to the awaiting caller.

        Raises
        ------
        RuntimeError
            If called outside a running event loop.

        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro, name=name)
        self._tasks.add(task)
        if detached:
            task.add_done_callback(self._report)
        else:
            task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> None:
        """Wait until every task, including ones spawned meanwhile, finishes."""
        while self._tasks:
            await asyncio.gather(*tuple(self._tasks), return_exceptions=True)

    def _report(self, task: asyncio.Task[typ.Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            log_debug(logger, "Task %s was cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            log_exception(logger, f"Unhandled failure in {task.get_name()}", exc)
