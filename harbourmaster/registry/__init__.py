"""Registry action coordination.

This package mediates between a user interface and a remote registry backend
that manages image repositories and catalogs (projects). It:

- classifies repositories as public (``library/``) or owned by the current
  account,
- gates destructive actions behind an asynchronous confirmation,
- invokes the backend call for each action,
- navigates (always reloading) and notifies on success.

Usage
-----
Wire the coordinator with the UI's capabilities::

    from harbourmaster.registry import AccountContext, RegistryActionCoordinator

    coordinator = RegistryActionCoordinator(
        backend=backend,
        prompt=prompt,
        router=router,
        notifier=notifier,
        account=AccountContext(account_id="acct1"),
    )

Delete a catalog after confirmation::

    outcome = await coordinator.delete_catalog(42, origin_event=event)

"""

from harbourmaster.registry.actions import (
    Action,
    CreateCatalog,
    DeleteCatalog,
    DeleteImage,
    HideImage,
    PublishImage,
    UpdateCatalog,
)
from harbourmaster.registry.confirmation import ConfirmationGate
from harbourmaster.registry.coordinator import RegistryActionCoordinator
from harbourmaster.registry.errors import (
    InvalidRepositoryNameError,
    RegistryBackendError,
    RegistryConfigError,
    RegistryError,
    RegistryResponseShapeError,
)
from harbourmaster.registry.invoker import ActionInvoker
from harbourmaster.registry.models import AccountContext, Catalog, Repository
from harbourmaster.registry.navigation import (
    NavigationDirective,
    NavigationNotifier,
    NotificationKind,
    ViewId,
)
from harbourmaster.registry.outcome import (
    ActionOutcome,
    Declined,
    Dispatched,
    Failed,
    Succeeded,
)
from harbourmaster.registry.ownership import (
    OwnershipClassifier,
    Visibility,
    is_my_repository,
    is_public_repository,
)
from harbourmaster.registry.protocol import (
    ConfirmationPrompt,
    Notifier,
    RegistryBackend,
    RegistryInventory,
    Router,
)

__all__ = [
    "AccountContext",
    "Action",
    "ActionInvoker",
    "ActionOutcome",
    "Catalog",
    "ConfirmationGate",
    "ConfirmationPrompt",
    "CreateCatalog",
    "Declined",
    "DeleteCatalog",
    "DeleteImage",
    "Dispatched",
    "Failed",
    "HideImage",
    "InvalidRepositoryNameError",
    "NavigationDirective",
    "NavigationNotifier",
    "NotificationKind",
    "Notifier",
    "OwnershipClassifier",
    "PublishImage",
    "RegistryActionCoordinator",
    "RegistryBackend",
    "RegistryInventory",
    "RegistryBackendError",
    "RegistryConfigError",
    "RegistryError",
    "RegistryResponseShapeError",
    "Repository",
    "Router",
    "Succeeded",
    "UpdateCatalog",
    "ViewId",
    "Visibility",
    "is_my_repository",
    "is_public_repository",
]
