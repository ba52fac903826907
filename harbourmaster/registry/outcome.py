"""Explicit outcomes for coordinator operations.

Backend failures are values rather than exceptions once they cross into the
invoker, so each action's reaction to failure (including "none") is visible
at the call site.
"""

from __future__ import annotations

import dataclasses
import typing as typ

from harbourmaster.registry.errors import RegistryBackendError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbourmaster.registry.actions import Action


@dataclasses.dataclass(frozen=True, slots=True)
class Succeeded:
    """The action completed; ``value`` is the backend result or directive."""

    value: object = None


@dataclasses.dataclass(frozen=True, slots=True)
class Failed:
    """The backend call failed with ``error``."""

    error: RegistryBackendError


@dataclasses.dataclass(frozen=True, slots=True)
class Declined:
    """The user declined or dismissed the confirmation for ``label``."""

    label: str


@dataclasses.dataclass(frozen=True, slots=True)
class Dispatched:
    """A fire-and-forget call was issued; its resolution is not observed."""

    action: Action


ActionOutcome = Succeeded | Failed | Declined | Dispatched


async def capture(call: cabc.Awaitable[object]) -> Succeeded | Failed:
    """Await a backend call once and wrap its result.

    Only :class:`RegistryBackendError` is converted to :class:`Failed`; other
    exceptions are programming errors and propagate.
    """
    try:
        value = await call
    except RegistryBackendError as exc:
        return Failed(exc)
    return Succeeded(value)
