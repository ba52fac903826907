"""In-memory registry backend for development and tests."""

from __future__ import annotations

import dataclasses
import itertools
import typing as typ

from harbourmaster.backend.wire import REPOSITORY_SCOPES, ImageSummary, TagSummary
from harbourmaster.common.names import repository_name
from harbourmaster.registry.errors import RegistryBackendError
from harbourmaster.registry.models import Catalog, Repository
from harbourmaster.registry.ownership import Visibility

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@dataclasses.dataclass(frozen=True, slots=True)
class BackendCall:
    """One recorded backend invocation."""

    operation: str
    args: tuple[object, ...]


class InMemoryRegistryBackend:
    """Deterministic backend that keeps catalogs, publicity and tags in dicts.

    Every call is recorded in :attr:`calls`. Setting :attr:`failure` makes
    subsequent calls raise it, which lets callers exercise failure paths
    without a server. ``owner`` plays the part of the authenticated account
    when listing the ``mine`` scope.

    Examples
    --------
    >>> import asyncio
    >>> backend = InMemoryRegistryBackend()
    >>> catalog = asyncio.run(backend.create_catalog({"name": "web"}))
    >>> catalog.catalog_id
    1

    """

    def __init__(
        self,
        *,
        owner: str | None = None,
        failure: RegistryBackendError | None = None,
    ) -> None:
        """Start empty, optionally failing every call with ``failure``."""
        self.owner = owner
        self.failure = failure
        self.calls: list[BackendCall] = []
        self.publicity: dict[str, bool] = {}
        self.tags: dict[str, dict[str, TagSummary]] = {}
        self.catalogs: dict[object, Catalog] = {}
        self._ids = itertools.count(1)

    def add_repository(self, name: str, *, public: bool | None = None) -> None:
        """Seed a repository; ``library`` repositories default to public."""
        repository = Repository.parse(name)
        if public is None:
            public = repository.visibility is Visibility.PUBLIC
        self.publicity[repository.name] = public

    def add_tag(self, name: str, tag: str, *, digest: str = "", size: int = 0) -> None:
        """Seed ``tag`` on repository ``name``, creating the repository if needed."""
        repository = Repository.parse(name)
        if repository.name not in self.publicity:
            self.add_repository(repository.name)
        self.tags.setdefault(repository.name, {})[tag] = TagSummary(
            namespace=repository.namespace,
            image=repository.image_name,
            tag=tag,
            digest=digest,
            size=size,
        )

    async def public_image(self, namespace: str, image: str) -> object:
        """Mark ``namespace/image`` public."""
        self._record("public_image", namespace, image)
        self.publicity[repository_name(namespace, image)] = True
        return "success"

    async def hide_image(self, namespace: str, image: str) -> object:
        """Mark ``namespace/image`` private."""
        self._record("hide_image", namespace, image)
        self.publicity[repository_name(namespace, image)] = False
        return "success"

    async def create_catalog(
        self,
        data: cabc.Mapping[str, typ.Any],
        form: cabc.MutableMapping[str, typ.Any] | None = None,
    ) -> Catalog:
        """Store a new catalog under the next integer id."""
        try:
            self._record("create_catalog", dict(data), form)
        except RegistryBackendError as exc:
            if form is not None:
                form["error"] = str(exc)
            raise
        catalog = Catalog(catalog_id=next(self._ids), data=dict(data))
        self.catalogs[catalog.catalog_id] = catalog
        return catalog

    async def update_catalog(
        self, catalog_id: object, data: cabc.Mapping[str, typ.Any]
    ) -> Catalog:
        """Merge ``data`` into an existing catalog."""
        self._record("update_catalog", catalog_id, dict(data))
        existing = self._get(catalog_id)
        updated = Catalog(catalog_id=catalog_id, data={**existing.data, **data})
        self.catalogs[catalog_id] = updated
        return updated

    async def delete_catalog(self, catalog_id: object) -> object:
        """Remove a catalog."""
        self._record("delete_catalog", catalog_id)
        self._get(catalog_id)
        del self.catalogs[catalog_id]
        return "success"

    async def get_catalog(self, catalog_id: object) -> dict[str, typ.Any]:
        """Return one catalog in the same shape as :meth:`list_catalogs` rows."""
        self._record("get_catalog", catalog_id)
        return _catalog_row(self._get(catalog_id))

    async def list_catalogs(self) -> list[dict[str, typ.Any]]:
        """Return stored catalogs as plain dicts."""
        self._record("list_catalogs")
        return [_catalog_row(catalog) for catalog in self.catalogs.values()]

    async def list_repositories(
        self, scope: str, *, keywords: str | None = None
    ) -> list[ImageSummary]:
        """Return seeded repositories in ``scope``, optionally filtered."""
        if scope not in REPOSITORY_SCOPES:
            msg = f"Unknown repository scope {scope!r}; expected 'mine' or 'public'"
            raise ValueError(msg)
        self._record("list_repositories", scope, keywords)

        summaries: list[ImageSummary] = []
        for name, public in sorted(self.publicity.items()):
            repository = Repository.parse(name)
            if scope == "public":
                in_scope = public
            else:
                in_scope = repository.namespace == self.owner
            if not in_scope or (keywords and keywords not in name):
                continue
            summaries.append(
                ImageSummary(
                    namespace=repository.namespace,
                    image=repository.image_name,
                    publicity=int(public),
                )
            )
        return summaries

    async def list_tags(self, namespace: str, image: str) -> list[TagSummary]:
        """Return the tags of ``namespace/image`` ordered by tag name."""
        self._record("list_tags", namespace, image)
        tags = self.tags.get(repository_name(namespace, image), {})
        return [tags[tag] for tag in sorted(tags)]

    async def delete_manifest(
        self, namespace: str, image: str, reference: str
    ) -> object:
        """Remove every tag whose name or digest equals ``reference``."""
        self._record("delete_manifest", namespace, image, reference)
        name = repository_name(namespace, image)
        tags = self.tags.get(name, {})
        doomed = [
            tag
            for tag, summary in tags.items()
            if reference in {tag, summary.digest}
        ]
        if not doomed:
            raise RegistryBackendError.not_found("Manifest", f"{name}:{reference}")
        for tag in doomed:
            del tags[tag]
        return "success"

    def _get(self, catalog_id: object) -> Catalog:
        try:
            return self.catalogs[catalog_id]
        except KeyError:
            raise RegistryBackendError.not_found("Catalog", catalog_id) from None

    def _record(self, operation: str, *args: object) -> None:
        self.calls.append(BackendCall(operation=operation, args=args))
        if self.failure is not None:
            raise self.failure


def _catalog_row(catalog: Catalog) -> dict[str, typ.Any]:
    return {"ID": catalog.catalog_id, **catalog.data}
