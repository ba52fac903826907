"""Repository name utilities.

Registry repositories are addressed as ``namespace/image``. The namespace is
either an account identifier or the shared ``library`` namespace. Names are
not filesystem paths even though they use ``/`` as a separator, so they
should be handled with these helpers rather than ``pathlib``.
"""

from __future__ import annotations

NAME_SEPARATOR = "/"


class InvalidRepositoryNameError(ValueError):
    """Raised when a repository name is not in ``namespace/image`` format."""

    def __init__(self, name: str) -> None:
        """Initialise with the rejected repository name."""
        self.name = name
        super().__init__(
            f"Invalid repository name: expected 'namespace/image', got {name!r}"
        )


def repository_name(namespace: str, image: str) -> str:
    """Build a repository name from namespace and image.

    Parameters
    ----------
    namespace:
        Owning namespace (account identifier or ``library``).
    image:
        Image name within the namespace.

    Returns
    -------
    str
        Name in ``namespace/image`` format.

    Examples
    --------
    >>> repository_name("library", "nginx")
    'library/nginx'

    """
    return f"{namespace}{NAME_SEPARATOR}{image}"


def namespace_prefix(namespace: str) -> str:
    """Return the prefix shared by every repository in ``namespace``.

    >>> namespace_prefix("acct1")
    'acct1/'

    """
    return f"{namespace}{NAME_SEPARATOR}"


def parse_repository_name(name: str) -> tuple[str, str]:
    """Split a repository name into namespace and image.

    Parameters
    ----------
    name:
        Repository name in ``namespace/image`` format.

    Returns
    -------
    tuple[str, str]
        ``(namespace, image)``.

    Raises
    ------
    InvalidRepositoryNameError
        If the name does not contain exactly one separator with non-empty
        parts on both sides.

    Examples
    --------
    >>> parse_repository_name("library/nginx")
    ('library', 'nginx')

    """
    if name.count(NAME_SEPARATOR) != 1:
        raise InvalidRepositoryNameError(name)

    namespace, image = name.split(NAME_SEPARATOR)
    if not namespace.strip() or not image.strip():
        raise InvalidRepositoryNameError(name)

    return namespace, image
