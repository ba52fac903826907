"""Ownership classification for repository names.

A repository is *public* when it lives in the shared ``library`` namespace and
*mine* when its namespace equals the current account identifier. Both checks
are plain prefix tests over arbitrary strings: malformed names, empty names
and names without a separator simply classify as ``False``.
"""

from __future__ import annotations

import enum
import typing as typ

from harbourmaster.common.names import namespace_prefix
from harbourmaster.registry.navigation import ViewId

if typ.TYPE_CHECKING:
    from harbourmaster.registry.models import AccountContext

PUBLIC_NAMESPACE = "library"
PUBLIC_PREFIX = namespace_prefix(PUBLIC_NAMESPACE)


class Visibility(enum.StrEnum):
    """Derived visibility of a repository."""

    PUBLIC = "public"
    PRIVATE = "private"


def is_public_repository(repository: str) -> bool:
    """Return whether ``repository`` belongs to the public namespace.

    Examples
    --------
    >>> is_public_repository("library/nginx")
    True
    >>> is_public_repository("library")
    False

    """
    return repository.startswith(PUBLIC_PREFIX)


def is_my_repository(repository: str, account: AccountContext | None) -> bool:
    """Return whether ``repository`` belongs to the account in ``account``.

    A missing context or an empty account identifier never owns anything;
    without the guard an empty id would turn the prefix into ``"/"``.

    Examples
    --------
    >>> from harbourmaster.registry.models import AccountContext
    >>> is_my_repository("acct1/app", AccountContext("acct1"))
    True
    >>> is_my_repository("acct1/app", AccountContext(None))
    False

    """
    if account is None or not account.is_authenticated:
        return False
    return repository.startswith(namespace_prefix(account.account_id))


class OwnershipClassifier:
    """Classify repositories against a live :class:`AccountContext`.

    The account identifier is read on every call rather than captured at
    construction.
    """

    def __init__(self, account: AccountContext) -> None:
        """Bind the classifier to the session's account context."""
        self._account = account

    @property
    def account(self) -> AccountContext:
        """Return the bound account context."""
        return self._account

    def is_public(self, repository: str) -> bool:
        """Return whether ``repository`` is in the public namespace."""
        return is_public_repository(repository)

    def is_mine(self, repository: str) -> bool:
        """Return whether ``repository`` belongs to the current account."""
        return is_my_repository(repository, self._account)

    def visibility(self, repository: str) -> Visibility:
        """Return the derived visibility of ``repository``."""
        if is_public_repository(repository):
            return Visibility.PUBLIC
        return Visibility.PRIVATE

    def repository_list_view(self, repository: str) -> ViewId:
        """Return the list view that shows ``repository``."""
        if is_public_repository(repository):
            return ViewId.PUBLIC_REPOSITORIES
        return ViewId.MY_REPOSITORIES
