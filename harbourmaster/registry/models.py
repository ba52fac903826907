"""Value objects passed through the registry coordinator."""

from __future__ import annotations

import dataclasses
import os
import typing as typ

from harbourmaster.common.names import parse_repository_name, repository_name
from harbourmaster.registry.ownership import Visibility, is_public_repository

ACCOUNT_ENV_VAR = "HARBOURMASTER_ACCOUNT_ID"


@dataclasses.dataclass(slots=True)
class AccountContext:
    """Current authenticated account for a UI session.

    The auth layer owns the lifecycle: it sets ``account_id`` when a session
    starts and clears it when the session ends. The coordinator only reads it,
    and reads it on every classification, so a sign-in that happens after the
    coordinator was built is still honoured.
    """

    account_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Return whether a non-empty account identifier is present."""
        return bool(self.account_id)

    @classmethod
    def from_env(cls) -> AccountContext:
        """Build a context from ``HARBOURMASTER_ACCOUNT_ID``."""
        raw = os.environ.get(ACCOUNT_ENV_VAR, "").strip()
        return cls(account_id=raw or None)


@dataclasses.dataclass(slots=True, frozen=True)
class Repository:
    """A ``namespace/image`` repository reference.

    Visibility is not stored: it is derived from the name on every access.
    """

    namespace: str
    image_name: str

    @property
    def name(self) -> str:
        """Return the ``namespace/image`` form."""
        return repository_name(self.namespace, self.image_name)

    @property
    def visibility(self) -> Visibility:
        """Return PUBLIC for the shared library namespace, else PRIVATE."""
        if is_public_repository(self.name):
            return Visibility.PUBLIC
        return Visibility.PRIVATE

    @classmethod
    def parse(cls, name: str) -> Repository:
        """Build a repository from its ``namespace/image`` name."""
        namespace, image_name = parse_repository_name(name)
        return cls(namespace=namespace, image_name=image_name)


@dataclasses.dataclass(slots=True, frozen=True)
class Catalog:
    """A catalog (project) as returned by the backend.

    ``data`` is opaque here; the backend validates it.
    """

    catalog_id: object
    data: typ.Mapping[str, typ.Any] = dataclasses.field(default_factory=dict)
