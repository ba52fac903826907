"""Actions the coordinator can perform.

Each action is an immutable value carrying the parameters of its backend call.
Destructive actions declare a ``confirmation_label``; the coordinator routes
those through the confirmation gate before invoking them.
"""

from __future__ import annotations

import dataclasses
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DELETE_IMAGE_CONFIRM = "Registry Delete Confirm"
DELETE_CATALOG_CONFIRM = "Project Delete Confirm"
DELETE_CATALOG_SUCCESS = "Project Delete Success"
UPDATE_CATALOG_SUCCESS = "Project Update Success"


class _ActionBase:
    """Behaviour shared by every action variant."""

    __slots__ = ()

    confirmation_label: typ.ClassVar[str | None] = None

    @property
    def name(self) -> str:
        """Return a stable action name for logs."""
        return type(self).__name__

    @property
    def requires_confirmation(self) -> bool:
        """Return whether the user must accept a prompt first."""
        return self.confirmation_label is not None


@dataclasses.dataclass(frozen=True, slots=True)
class DeleteImage(_ActionBase):
    """Open the repository list so its view can delete ``repository``.

    ``tag`` is carried for the caller's benefit only.
    """

    repository: str
    tag: str | None = None

    confirmation_label: typ.ClassVar[str | None] = DELETE_IMAGE_CONFIRM


@dataclasses.dataclass(frozen=True, slots=True)
class PublishImage(_ActionBase):
    """Make ``namespace/image`` public."""

    namespace: str
    image: str


@dataclasses.dataclass(frozen=True, slots=True)
class HideImage(_ActionBase):
    """Make ``namespace/image`` private."""

    namespace: str
    image: str


@dataclasses.dataclass(frozen=True, slots=True)
class CreateCatalog(_ActionBase):
    """Create a catalog from ``data``; ``form`` is passed through untouched."""

    data: cabc.Mapping[str, typ.Any]
    form: cabc.MutableMapping[str, typ.Any] | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class UpdateCatalog(_ActionBase):
    """Replace the fields of catalog ``catalog_id`` with ``data``."""

    catalog_id: object
    data: cabc.Mapping[str, typ.Any]


@dataclasses.dataclass(frozen=True, slots=True)
class DeleteCatalog(_ActionBase):
    """Delete catalog ``catalog_id``."""

    catalog_id: object

    confirmation_label: typ.ClassVar[str | None] = DELETE_CATALOG_CONFIRM


Action = (
    DeleteImage
    | PublishImage
    | HideImage
    | CreateCatalog
    | UpdateCatalog
    | DeleteCatalog
)
