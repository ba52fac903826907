"""msgspec structures for the registry and catalog REST APIs."""

from __future__ import annotations

import typing as typ

import msgspec

from harbourmaster.common.names import repository_name

REPOSITORY_SCOPES = frozenset({"mine", "public"})


class ResponseEnvelope(msgspec.Struct, kw_only=True):
    """Envelope every registry and catalog endpoint responds with."""

    code: int = 0
    data: typ.Any = None


class PublicityRequest(msgspec.Struct):
    """Body of the repository publicity update."""

    Publicity: int  # noqa: N815 - wire field name


class ImageSummary(msgspec.Struct, kw_only=True, rename="pascal"):
    """Repository row returned by the repository listings."""

    namespace: str
    image: str
    publicity: int = 0
    latest_tag: str = ""
    pull_count: int = 0
    push_count: int = 0

    @property
    def name(self) -> str:
        """Return the ``namespace/image`` form."""
        return repository_name(self.namespace, self.image)


class TagSummary(msgspec.Struct, kw_only=True, rename="pascal"):
    """Tag row returned by a repository's tag listing.

    ``digest`` is the manifest reference the tag points at; deleting the
    manifest removes every tag sharing it.
    """

    namespace: str
    image: str
    tag: str
    digest: str = ""
    size: int = 0
    pull_count: int = 0
    push_count: int = 0

    @property
    def name(self) -> str:
        """Return the ``namespace/image:tag`` reference."""
        return f"{repository_name(self.namespace, self.image)}:{self.tag}"
