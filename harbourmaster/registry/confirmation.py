"""Confirmation gate for destructive actions."""

from __future__ import annotations

import inspect
import typing as typ

from harbourmaster.logging import get_logger, log_info
from harbourmaster.registry.outcome import Declined
from harbourmaster.registry.tasks import InFlightTasks

if typ.TYPE_CHECKING:
    import asyncio
    import collections.abc as cabc

    from harbourmaster.registry.protocol import ConfirmationPrompt

logger = get_logger(__name__)


class ConfirmationGate:
    """Run a continuation only after the user accepts a prompt.

    Declining is a normal outcome: the continuation never runs, nothing is
    raised and the returned task resolves to :class:`Declined`. Each call
    opens its own prompt, so concurrent confirmations do not interact.
    """

    def __init__(
        self,
        prompt: ConfirmationPrompt,
        tasks: InFlightTasks | None = None,
    ) -> None:
        """Bind the prompt capability and the task set continuations join."""
        self._prompt = prompt
        self._tasks = tasks if tasks is not None else InFlightTasks()

    def confirm_and_run[T](
        self,
        action_label: str,
        origin_event: object | None,
        on_confirmed: cabc.Callable[[], T | cabc.Awaitable[T]],
    ) -> asyncio.Task[T | Declined]:
        """Open the prompt for ``action_label`` and return without waiting.

        Parameters
        ----------
        action_label
            Text identifying the action in the prompt.
        origin_event
            UI event the prompt is anchored to; passed through unchanged.
        on_confirmed
            Called once after acceptance. May be a plain or an async callable.

        Returns
        -------
        asyncio.Task
            Resolves to the continuation's result, or :class:`Declined`.

        """
        return self._tasks.spawn(
            self._await_confirmation(action_label, origin_event, on_confirmed),
            name=f"confirm:{action_label}",
        )

    async def _await_confirmation[T](
        self,
        action_label: str,
        origin_event: object | None,
        on_confirmed: cabc.Callable[[], T | cabc.Awaitable[T]],
    ) -> T | Declined:
        accepted = await self._prompt.open(action_label, origin_event)
        if not accepted:
            log_info(logger, "%s declined", action_label)
            return Declined(action_label)

        result = on_confirmed()
        if inspect.isawaitable(result):
            return await result
        return result
