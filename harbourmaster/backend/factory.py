"""Factory for registry backends selected by environment configuration."""

from __future__ import annotations

import os
import typing as typ

from harbourmaster.backend.memory import InMemoryRegistryBackend
from harbourmaster.registry.errors import RegistryConfigError

if typ.TYPE_CHECKING:
    from harbourmaster.backend.client import HttpRegistryBackend
    from harbourmaster.registry.models import AccountContext

BACKEND_ENV_VAR = "HARBOURMASTER_BACKEND"
_VALID_BACKENDS = frozenset({"http", "memory"})


def create_registry_backend(
    account: AccountContext | None = None,
) -> InMemoryRegistryBackend | HttpRegistryBackend:
    """Create a registry backend from ``HARBOURMASTER_BACKEND``.

    ``memory`` returns an :class:`InMemoryRegistryBackend` owned by
    ``account``. ``http`` returns an :class:`HttpRegistryBackend` configured
    through :meth:`RegistryBackendConfig.from_env`; the server derives the
    account from the token, so ``account`` is not used.

    Raises
    ------
    RegistryConfigError
        If the variable is missing or names an unknown backend, or if the
        HTTP configuration is invalid.

    Examples
    --------
    >>> import os
    >>> os.environ["HARBOURMASTER_BACKEND"] = "memory"
    >>> create_registry_backend()  # doctest: +ELLIPSIS
    <harbourmaster.backend.memory.InMemoryRegistryBackend object at ...>

    """
    raw_backend = os.environ.get(BACKEND_ENV_VAR)
    if raw_backend is None:
        raise RegistryConfigError.missing_backend()

    backend = raw_backend.strip().lower()
    if backend not in _VALID_BACKENDS:
        raise RegistryConfigError.invalid_backend(raw_backend, _VALID_BACKENDS)

    if backend == "memory":
        owner = account.account_id if account is not None else None
        return InMemoryRegistryBackend(owner=owner)

    from harbourmaster.backend.client import HttpRegistryBackend
    from harbourmaster.backend.config import RegistryBackendConfig

    return HttpRegistryBackend(RegistryBackendConfig.from_env())
