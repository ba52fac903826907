"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from harbourmaster.backend.memory import InMemoryRegistryBackend
from harbourmaster.registry import AccountContext, RegistryActionCoordinator
from tests.helpers.registry_doubles import ScriptedPrompt, UiRecorder

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbourmaster.registry.protocol import ConfirmationPrompt

ACCOUNT_ID = "acct1"


@pytest.fixture
def account() -> AccountContext:
    """Return an account context signed in as ``acct1``."""
    return AccountContext(account_id=ACCOUNT_ID)


@pytest.fixture
def backend() -> InMemoryRegistryBackend:
    """Return an empty in-memory backend owned by ``acct1``."""
    return InMemoryRegistryBackend(owner=ACCOUNT_ID)


@pytest.fixture
def ui() -> UiRecorder:
    """Return a recorder standing in for the router and the notifier."""
    return UiRecorder()


@pytest.fixture
def make_coordinator(
    backend: InMemoryRegistryBackend,
    ui: UiRecorder,
    account: AccountContext,
) -> cabc.Callable[..., RegistryActionCoordinator]:
    """Return a factory building coordinators around the shared doubles."""

    def _make(
        prompt: ConfirmationPrompt | None = None,
        **overrides: typ.Any,  # noqa: ANN401
    ) -> RegistryActionCoordinator:
        kwargs: dict[str, typ.Any] = {
            "backend": backend,
            "prompt": prompt if prompt is not None else ScriptedPrompt(answers=True),
            "router": ui,
            "notifier": ui,
            "account": account,
        }
        kwargs.update(overrides)
        return RegistryActionCoordinator(**kwargs)

    return _make
