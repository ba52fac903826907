"""Step definitions for registry action BDD scenarios."""

from __future__ import annotations

import asyncio
import typing as typ

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from harbourmaster.backend.memory import BackendCall, InMemoryRegistryBackend
from harbourmaster.common.names import parse_repository_name
from harbourmaster.registry import (
    AccountContext,
    RegistryActionCoordinator,
    RegistryBackendError,
)
from tests.helpers.registry_doubles import (
    Navigation,
    Notification,
    ScriptedPrompt,
    UiRecorder,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbourmaster.registry import ActionOutcome

scenarios("../registry_actions.feature")


class RegistryActionsContext(typ.TypedDict, total=False):
    """Shared context for registry action scenarios."""

    account: AccountContext
    backend: InMemoryRegistryBackend
    prompt: ScriptedPrompt
    ui: UiRecorder
    outcome: ActionOutcome


@pytest.fixture
def registry_context() -> RegistryActionsContext:
    """Provide fresh context for each scenario."""
    return {}


def _run(
    context: RegistryActionsContext,
    act: cabc.Callable[[RegistryActionCoordinator], asyncio.Task[ActionOutcome]],
) -> None:
    """Dispatch an action on a fresh coordinator and wait for everything."""

    async def _dispatch() -> ActionOutcome:
        coordinator = RegistryActionCoordinator(
            backend=context["backend"],
            prompt=context.get("prompt", ScriptedPrompt(answers=True)),
            router=context["ui"],
            notifier=context["ui"],
            account=context["account"],
        )
        outcome = await act(coordinator)
        await coordinator.drain()
        return outcome

    context["outcome"] = asyncio.run(_dispatch())


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------


@given(parsers.parse('a registry session signed in as "{account_id}"'))
def given_session(registry_context: RegistryActionsContext, account_id: str) -> None:
    """Create the account, backend and UI recorder."""
    registry_context["account"] = AccountContext(account_id=account_id)
    registry_context["backend"] = InMemoryRegistryBackend(owner=account_id)
    registry_context["ui"] = UiRecorder()


@given("the user will accept the confirmation")
def given_accepts(registry_context: RegistryActionsContext) -> None:
    """Answer yes to every prompt."""
    registry_context["prompt"] = ScriptedPrompt(answers=True)


@given("the user will decline the confirmation")
def given_declines(registry_context: RegistryActionsContext) -> None:
    """Answer no to every prompt."""
    registry_context["prompt"] = ScriptedPrompt(answers=False)


@given(parsers.parse('a catalog named "{name}" exists'))
def given_catalog(registry_context: RegistryActionsContext, name: str) -> None:
    """Seed the backend with one catalog."""
    asyncio.run(registry_context["backend"].create_catalog({"name": name}))


@given("the backend is unavailable")
def given_backend_unavailable(registry_context: RegistryActionsContext) -> None:
    """Make every backend call fail."""
    registry_context["backend"].failure = RegistryBackendError.http_error(503)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------


@when(parsers.parse('the user deletes the image "{repository}"'))
def when_delete_image(
    registry_context: RegistryActionsContext, repository: str
) -> None:
    """Delete an image from its list row."""
    _run(registry_context, lambda c: c.delete_image(repository, None, "row-click"))


@when(parsers.parse("the user deletes catalog {catalog_id:d}"))
def when_delete_catalog(
    registry_context: RegistryActionsContext, catalog_id: int
) -> None:
    """Delete a catalog from the catalogs list."""
    _run(registry_context, lambda c: c.delete_catalog(catalog_id, "row-click"))


@when(parsers.parse('the user renames catalog {catalog_id:d} to "{name}"'))
def when_update_catalog(
    registry_context: RegistryActionsContext, catalog_id: int, name: str
) -> None:
    """Submit the catalog edit form."""
    _run(registry_context, lambda c: c.update_catalog(catalog_id, {"name": name}))


@when(parsers.parse('the user creates a catalog named "{name}"'))
def when_create_catalog(registry_context: RegistryActionsContext, name: str) -> None:
    """Submit the catalog creation form."""
    _run(registry_context, lambda c: c.create_catalog({"name": name}, form={}))


@when(parsers.parse('the user publishes "{repository}"'))
def when_publish(registry_context: RegistryActionsContext, repository: str) -> None:
    """Toggle an image to public."""
    namespace, image = parse_repository_name(repository)
    _run(registry_context, lambda c: c.public_image(namespace, image))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------


@then(parsers.parse('the prompt "{label}" was shown'))
def then_prompt_shown(registry_context: RegistryActionsContext, label: str) -> None:
    """Assert the confirmation prompt carried the label and origin event."""
    assert registry_context["prompt"].opened == [(label, "row-click")]


@then(parsers.parse('the router opened "{view_id}" for "{repository}"'))
def then_router_opened(
    registry_context: RegistryActionsContext, view_id: str, repository: str
) -> None:
    """Assert the only UI event is a reloading navigation to the view."""
    assert registry_context["ui"].events == [
        Navigation(view_id, {"open": repository}, reload=True)
    ]


@then("no backend call was made")
def then_no_backend_call(registry_context: RegistryActionsContext) -> None:
    """Assert the backend saw no calls."""
    assert registry_context["backend"].calls == []


@then("nothing was shown to the user")
def then_nothing_shown(registry_context: RegistryActionsContext) -> None:
    """Assert no navigation or notification happened."""
    assert registry_context["ui"].events == []


@then(parsers.parse('the user saw "{message}" before the catalogs list reloaded'))
def then_notified_then_reloaded(
    registry_context: RegistryActionsContext, message: str
) -> None:
    """Assert the notification precedes the catalogs navigation."""
    assert registry_context["ui"].events == [
        Notification(message),
        Navigation("registry.list.catalogs", None, reload=True),
    ]


@then("the catalogs list reloaded without a notification")
def then_reloaded_silently(registry_context: RegistryActionsContext) -> None:
    """Assert only the catalogs navigation happened."""
    assert registry_context["ui"].events == [
        Navigation("registry.list.catalogs", None, reload=True)
    ]


@then("no catalogs remain")
def then_no_catalogs(registry_context: RegistryActionsContext) -> None:
    """Assert the backend holds no catalogs."""
    assert registry_context["backend"].catalogs == {}


@then(parsers.parse('the backend recorded "{operation}" for "{repository}"'))
def then_backend_recorded(
    registry_context: RegistryActionsContext, operation: str, repository: str
) -> None:
    """Assert exactly one backend call for the repository."""
    namespace, image = parse_repository_name(repository)
    assert registry_context["backend"].calls == [
        BackendCall(operation, (namespace, image))
    ]
