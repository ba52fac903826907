"""Capabilities the registry coordinator consumes.

Each collaborator is a narrow protocol so the UI, the HTTP transport and the
test suite can each provide their own implementation. All protocols are
runtime checkable to support ``isinstance`` checks at injection time.
"""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbourmaster.backend.wire import ImageSummary, TagSummary


@typ.runtime_checkable
class RegistryBackend(typ.Protocol):
    """Remote registry operations used by the action invoker.

    Every method is awaited at most once per user action and raises
    :class:`~harbourmaster.registry.errors.RegistryBackendError` on failure.
    Timeouts are the implementation's concern.
    """

    async def public_image(self, namespace: str, image: str) -> object:
        """Make ``namespace/image`` visible to every account."""
        ...

    async def hide_image(self, namespace: str, image: str) -> object:
        """Restrict ``namespace/image`` to its owning account."""
        ...

    async def create_catalog(
        self,
        data: cabc.Mapping[str, typ.Any],
        form: cabc.MutableMapping[str, typ.Any] | None = None,
    ) -> object:
        """Create a catalog; ``form`` is validation state owned by the caller."""
        ...

    async def delete_catalog(self, catalog_id: object) -> object:
        """Delete the catalog identified by ``catalog_id``."""
        ...

    async def update_catalog(
        self, catalog_id: object, data: cabc.Mapping[str, typ.Any]
    ) -> object:
        """Replace the fields of a catalog with ``data``."""
        ...


@typ.runtime_checkable
class ConfirmationPrompt(typ.Protocol):
    """Asynchronous yes/no prompt shown before destructive actions."""

    async def open(self, label: str, origin_event: object | None) -> bool:
        """Show the prompt for ``label`` near ``origin_event``.

        Returns ``True`` only on explicit acceptance. Declining and dismissing
        both return ``False``.
        """
        ...


@typ.runtime_checkable
class Router(typ.Protocol):
    """UI routing capability."""

    def go_to(
        self,
        view_id: str,
        params: cabc.Mapping[str, object] | None,
        *,
        reload: bool,
    ) -> None:
        """Transition to ``view_id``; ``reload`` forces a full data reload."""
        ...


@typ.runtime_checkable
class Notifier(typ.Protocol):
    """Transient user notification capability."""

    def success(self, message: str) -> None:
        """Display a success indicator carrying ``message``."""
        ...


@typ.runtime_checkable
class RegistryInventory(typ.Protocol):
    """Listing and manifest operations used by the destination views.

    The coordinator never calls these: the repository list view performs the
    actual manifest deletion after ``delete_image`` opens it.
    """

    async def list_repositories(
        self, scope: str, *, keywords: str | None = None
    ) -> list[ImageSummary]:
        """List the ``mine`` or ``public`` repositories."""
        ...

    async def list_tags(self, namespace: str, image: str) -> list[TagSummary]:
        """List the tags of ``namespace/image``."""
        ...

    async def delete_manifest(
        self, namespace: str, image: str, reference: str
    ) -> object:
        """Delete the manifest a tag or digest ``reference`` resolves to."""
        ...

    async def list_catalogs(self) -> list[dict[str, typ.Any]]:
        """List every visible catalog."""
        ...

    async def get_catalog(self, catalog_id: object) -> dict[str, typ.Any]:
        """Return one catalog."""
        ...
