"""Navigation directives and the router/notifier adapter."""

from __future__ import annotations

import dataclasses
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbourmaster.registry.protocol import Notifier, Router


class ViewId(enum.StrEnum):
    """Views the coordinator navigates to after a mutation."""

    PUBLIC_REPOSITORIES = "registry.list.public"
    MY_REPOSITORIES = "registry.list.mine"
    CATALOGS = "registry.list.catalogs"


class NotificationKind(enum.StrEnum):
    """Kinds of user notification the coordinator emits."""

    SUCCESS = "success"


@dataclasses.dataclass(frozen=True, slots=True)
class NavigationDirective:
    """Where to go after a successful action.

    Attributes
    ----------
    target_view
        View identifier understood by the router.
    params
        View parameters, or ``None`` when the view takes none.
    force_reload
        Whether the destination must reload its data from the backend.

    """

    target_view: ViewId
    params: cabc.Mapping[str, object] | None = None
    force_reload: bool = True

    @classmethod
    def open_repository(cls, view: ViewId, repository: str) -> NavigationDirective:
        """Return a reloading directive that opens ``repository`` in ``view``."""
        return cls(target_view=view, params={"open": repository}, force_reload=True)

    @classmethod
    def catalogs(cls) -> NavigationDirective:
        """Return a reloading directive to the catalogs list."""
        return cls(target_view=ViewId.CATALOGS, params=None, force_reload=True)


class NavigationNotifier:
    """Forward directives to the router and messages to the notifier.

    Nothing is deduplicated or batched: one call here is one call on the
    collaborator.
    """

    def __init__(self, router: Router, notifier: Notifier) -> None:
        """Bind the routing and notification capabilities."""
        self._router = router
        self._notifier = notifier

    def navigate(self, directive: NavigationDirective) -> None:
        """Ask the router to transition according to ``directive``."""
        params = dict(directive.params) if directive.params is not None else None
        self._router.go_to(
            directive.target_view.value,
            params,
            reload=directive.force_reload,
        )

    def notify(self, kind: NotificationKind, message: str) -> None:
        """Ask the notifier to display ``message``."""
        if kind is NotificationKind.SUCCESS:
            self._notifier.success(message)
            return
        msg = f"Unsupported notification kind: {kind!r}"
        raise ValueError(msg)

    def complete(
        self,
        directive: NavigationDirective,
        *,
        success_message: str | None = None,
    ) -> None:
        """Notify (when a message is given), then navigate."""
        if success_message is not None:
            self.notify(NotificationKind.SUCCESS, success_message)
        self.navigate(directive)
