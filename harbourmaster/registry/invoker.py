"""Backend invocation for each action variant."""

from __future__ import annotations

import typing as typ

from harbourmaster.logging import get_logger, log_info, log_warning
from harbourmaster.registry.actions import (
    DELETE_CATALOG_SUCCESS,
    UPDATE_CATALOG_SUCCESS,
    CreateCatalog,
    DeleteCatalog,
    DeleteImage,
    HideImage,
    PublishImage,
    UpdateCatalog,
)
from harbourmaster.registry.navigation import NavigationDirective
from harbourmaster.registry.outcome import Dispatched, Failed, Succeeded, capture

if typ.TYPE_CHECKING:
    from harbourmaster.registry.actions import Action
    from harbourmaster.registry.navigation import NavigationNotifier
    from harbourmaster.registry.outcome import ActionOutcome
    from harbourmaster.registry.ownership import OwnershipClassifier
    from harbourmaster.registry.protocol import RegistryBackend
    from harbourmaster.registry.tasks import InFlightTasks

logger = get_logger(__name__)


class ActionInvoker:
    """Perform one action and hand successful results to navigation.

    Each invocation issues at most one backend call. Nothing is retried.
    """

    def __init__(
        self,
        backend: RegistryBackend,
        classifier: OwnershipClassifier,
        navigation: NavigationNotifier,
        tasks: InFlightTasks,
    ) -> None:
        """Bind the collaborators used while invoking actions."""
        self._backend = backend
        self._classifier = classifier
        self._navigation = navigation
        self._tasks = tasks

    async def invoke(self, action: Action) -> ActionOutcome:
        """Run ``action`` and return its outcome.

        Parameters
        ----------
        action
            The action to perform. Confirmation, when required, has already
            been obtained by the caller.

        Returns
        -------
        ActionOutcome
            ``Succeeded`` or ``Failed`` for observed calls, ``Dispatched`` for
            fire-and-forget visibility changes.

        """
        match action:
            case DeleteImage(repository=repository):
                return self._open_repository_list(repository)
            case PublishImage(namespace=namespace, image=image):
                self._tasks.spawn(
                    self._backend.public_image(namespace, image),
                    name=f"{action.name}:{namespace}/{image}",
                    detached=True,
                )
                return Dispatched(action)
            case HideImage(namespace=namespace, image=image):
                self._tasks.spawn(
                    self._backend.hide_image(namespace, image),
                    name=f"{action.name}:{namespace}/{image}",
                    detached=True,
                )
                return Dispatched(action)
            case CreateCatalog(data=data, form=form):
                outcome = await capture(self._backend.create_catalog(data, form))
                return self._settle(action, outcome)
            case UpdateCatalog(catalog_id=catalog_id, data=data):
                outcome = await capture(self._backend.update_catalog(catalog_id, data))
                return self._settle(
                    action, outcome, success_message=UPDATE_CATALOG_SUCCESS
                )
            case DeleteCatalog(catalog_id=catalog_id):
                outcome = await capture(self._backend.delete_catalog(catalog_id))
                return self._settle(
                    action, outcome, success_message=DELETE_CATALOG_SUCCESS
                )
        typ.assert_never(action)

    def _open_repository_list(self, repository: str) -> Succeeded:
        # The destination view performs the deletion while loading; no
        # backend call is issued from here.
        view = self._classifier.repository_list_view(repository)
        directive = NavigationDirective.open_repository(view, repository)
        self._navigation.navigate(directive)
        return Succeeded(directive)

    def _settle(
        self,
        action: Action,
        outcome: Succeeded | Failed,
        *,
        success_message: str | None = None,
    ) -> Succeeded | Failed:
        match outcome:
            case Succeeded():
                log_info(logger, "%s succeeded", action.name)
                self._navigation.complete(
                    NavigationDirective.catalogs(),
                    success_message=success_message,
                )
            case Failed(error=error):
                # No failure continuation: the backend's own error surface
                # is the only feedback the user gets.
                log_warning(logger, "%s failed: %s", action.name, error)
        return outcome
