"""Terminal implementations of the prompt, router and notifier capabilities."""

from __future__ import annotations

import asyncio
import sys
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_ACCEPT_ANSWERS = frozenset({"y", "yes"})


class ConsolePrompt:
    """Ask for confirmation on standard input.

    An empty answer, anything other than ``y``/``yes``, or end of input all
    count as a decline. ``assume_yes`` skips the question entirely.
    """

    def __init__(
        self,
        *,
        assume_yes: bool = False,
        reader: cabc.Callable[[str], str] = input,
    ) -> None:
        """Configure auto-acceptance and the line reader."""
        self._assume_yes = assume_yes
        self._reader = reader

    async def open(self, label: str, origin_event: object | None) -> bool:
        """Return whether the user accepted ``label``."""
        del origin_event
        if self._assume_yes:
            return True
        try:
            answer = await asyncio.to_thread(self._reader, f"{label}? [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in _ACCEPT_ANSWERS


class ConsoleRouter:
    """Print navigation requests instead of switching views."""

    def __init__(self, stream: typ.TextIO | None = None) -> None:
        """Write to ``stream`` (standard output by default)."""
        self._stream = stream

    def go_to(
        self,
        view_id: str,
        params: cabc.Mapping[str, object] | None,
        *,
        reload: bool,
    ) -> None:
        """Print the requested transition."""
        parts = [f"-> {view_id}"]
        if params:
            rendered = ", ".join(f"{key}={value}" for key, value in params.items())
            parts.append(f"({rendered})")
        if reload:
            parts.append("[reload]")
        print(" ".join(parts), file=self._stream or sys.stdout)


class ConsoleNotifier:
    """Print success notifications."""

    def __init__(self, stream: typ.TextIO | None = None) -> None:
        """Write to ``stream`` (standard output by default)."""
        self._stream = stream

    def success(self, message: str) -> None:
        """Print ``message`` as a success line."""
        print(f"OK {message}", file=self._stream or sys.stdout)
