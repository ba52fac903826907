"""Coordinator between UI events and the registry backend.

The coordinator composes the four responsibilities of the registry actions
layer: ownership classification, confirmation, invocation and
navigation/notification. Every operation schedules its work on the running
event loop and returns the task immediately, so UI handlers never block on a
prompt or a backend call.

Usage
-----
::

    coordinator = RegistryActionCoordinator(
        backend=backend,
        prompt=prompt,
        router=router,
        notifier=notifier,
        account=AccountContext(account_id="acct1"),
    )
    coordinator.delete_catalog(42, origin_event=click_event)

"""

from __future__ import annotations

import functools
import typing as typ

from harbourmaster.logging import get_logger, log_info
from harbourmaster.registry.actions import (
    CreateCatalog,
    DeleteCatalog,
    DeleteImage,
    HideImage,
    PublishImage,
    UpdateCatalog,
)
from harbourmaster.registry.confirmation import ConfirmationGate
from harbourmaster.registry.invoker import ActionInvoker
from harbourmaster.registry.models import AccountContext
from harbourmaster.registry.navigation import NavigationNotifier
from harbourmaster.registry.ownership import OwnershipClassifier
from harbourmaster.registry.tasks import InFlightTasks

if typ.TYPE_CHECKING:
    import asyncio
    import collections.abc as cabc

    from harbourmaster.registry.actions import Action
    from harbourmaster.registry.outcome import ActionOutcome
    from harbourmaster.registry.protocol import (
        ConfirmationPrompt,
        Notifier,
        RegistryBackend,
        Router,
    )

logger = get_logger(__name__)


class RegistryActionCoordinator:
    """Confirm, invoke, then navigate and notify for registry actions."""

    def __init__(  # noqa: PLR0913 - one argument per injected capability
        self,
        *,
        backend: RegistryBackend,
        prompt: ConfirmationPrompt,
        router: Router,
        notifier: Notifier,
        account: AccountContext | None = None,
    ) -> None:
        """Wire the collaborators into the coordinator's components."""
        self._account = account if account is not None else AccountContext()
        self._tasks = InFlightTasks()
        self._classifier = OwnershipClassifier(self._account)
        self._gate = ConfirmationGate(prompt, self._tasks)
        self._navigation = NavigationNotifier(router, notifier)
        self._invoker = ActionInvoker(
            backend, self._classifier, self._navigation, self._tasks
        )

    @property
    def account(self) -> AccountContext:
        """Return the session's account context."""
        return self._account

    @property
    def classifier(self) -> OwnershipClassifier:
        """Return the ownership classifier bound to the session."""
        return self._classifier

    @property
    def in_flight(self) -> int:
        """Return the number of unfinished prompts and calls."""
        return len(self._tasks)

    def is_public_repository(self, repository: str) -> bool:
        """Return whether ``repository`` lives in the public namespace."""
        return self._classifier.is_public(repository)

    def is_my_repository(self, repository: str) -> bool:
        """Return whether ``repository`` belongs to the current account."""
        return self._classifier.is_mine(repository)

    def dispatch(
        self,
        action: Action,
        origin_event: object | None = None,
    ) -> asyncio.Task[ActionOutcome]:
        """Schedule ``action``, behind a confirmation when it requires one.

        Parameters
        ----------
        action
            Action to perform.
        origin_event
            UI event that anchors the confirmation prompt, if any.

        Returns
        -------
        asyncio.Task[ActionOutcome]
            Task resolving to the action's terminal outcome.

        """
        log_info(logger, "Dispatching %s", action.name)
        if action.confirmation_label is not None:
            return self._gate.confirm_and_run(
                action.confirmation_label,
                origin_event,
                functools.partial(self._invoker.invoke, action),
            )
        return self._tasks.spawn(self._invoker.invoke(action), name=action.name)

    def delete_image(
        self,
        repository: str,
        tag: str | None = None,
        origin_event: object | None = None,
    ) -> asyncio.Task[ActionOutcome]:
        """Confirm, then open the repository's list view for deletion."""
        return self.dispatch(DeleteImage(repository=repository, tag=tag), origin_event)

    def public_image(self, namespace: str, image: str) -> asyncio.Task[ActionOutcome]:
        """Publish ``namespace/image`` without observing the result."""
        return self.dispatch(PublishImage(namespace=namespace, image=image))

    def hide_image(self, namespace: str, image: str) -> asyncio.Task[ActionOutcome]:
        """Hide ``namespace/image`` without observing the result."""
        return self.dispatch(HideImage(namespace=namespace, image=image))

    def create_catalog(
        self,
        data: cabc.Mapping[str, typ.Any],
        form: cabc.MutableMapping[str, typ.Any] | None = None,
    ) -> asyncio.Task[ActionOutcome]:
        """Create a catalog, then reload the catalogs list."""
        return self.dispatch(CreateCatalog(data=data, form=form))

    def update_catalog(
        self,
        catalog_id: object,
        data: cabc.Mapping[str, typ.Any],
    ) -> asyncio.Task[ActionOutcome]:
        """Update a catalog, notify, then reload the catalogs list."""
        return self.dispatch(UpdateCatalog(catalog_id=catalog_id, data=data))

    def delete_catalog(
        self,
        catalog_id: object,
        origin_event: object | None = None,
    ) -> asyncio.Task[ActionOutcome]:
        """Confirm, delete a catalog, notify, then reload the catalogs list."""
        return self.dispatch(DeleteCatalog(catalog_id=catalog_id), origin_event)

    async def drain(self) -> None:
        """Wait for every prompt and call in flight, including fire-and-forget."""
        await self._tasks.drain()
