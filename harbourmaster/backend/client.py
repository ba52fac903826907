"""HTTP implementation of the registry backend protocol.

The server wraps every response in an envelope::

    {"code": 0, "data": ...}

A zero ``code`` is success; anything else is an application-level rejection
even when the HTTP status is 2xx.
"""

from __future__ import annotations

import typing as typ
from urllib.parse import quote

import httpx
import msgspec

from harbourmaster.backend.wire import (
    REPOSITORY_SCOPES,
    ImageSummary,
    PublicityRequest,
    ResponseEnvelope,
    TagSummary,
)
from harbourmaster.logging import get_logger, log_warning
from harbourmaster.registry.errors import (
    RegistryBackendError,
    RegistryResponseShapeError,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from harbourmaster.backend.config import RegistryBackendConfig

logger = get_logger(__name__)

_HTTP_ERROR_STATUS_THRESHOLD = 400
_PUBLIC = 1
_PRIVATE = 0


def _segment(value: object) -> str:
    return quote(str(value), safe="")


def _repository_path(namespace: str, image: str) -> str:
    return f"/registry/v1/repositories/{_segment(namespace)}/{_segment(image)}"


def _convert[T](data: object, target: type[T]) -> T:
    try:
        return msgspec.convert(data, type=target)
    except msgspec.ValidationError as exc:
        raise RegistryResponseShapeError.undecodable(str(exc)) from exc


class HttpRegistryBackend:
    """Registry backend speaking the registry and catalog REST APIs.

    Parameters
    ----------
    config
        Server location and client settings.
    http_client
        Optional ``httpx.AsyncClient`` for testing. If not provided, the
        instance creates and owns its own client.

    Examples
    --------
    >>> import asyncio
    >>> backend = HttpRegistryBackend(RegistryBackendConfig("https://registry.test"))
    >>> asyncio.run(backend.aclose())

    """

    def __init__(
        self,
        config: RegistryBackendConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the backend with configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._headers = {"User-Agent": config.user_agent, "Accept": "application/json"}
        if config.token:
            self._headers["Authorization"] = f"Bearer {config.token}"
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    @property
    def config(self) -> RegistryBackendConfig:
        """Read-only access to the backend configuration."""
        return self._config

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def public_image(self, namespace: str, image: str) -> object:
        """Mark ``namespace/image`` public."""
        return await self._set_publicity(namespace, image, _PUBLIC)

    async def hide_image(self, namespace: str, image: str) -> object:
        """Mark ``namespace/image`` private."""
        return await self._set_publicity(namespace, image, _PRIVATE)

    async def create_catalog(
        self,
        data: cabc.Mapping[str, typ.Any],
        form: cabc.MutableMapping[str, typ.Any] | None = None,
    ) -> object:
        """Create a catalog.

        When the server rejects the request and ``form`` is given, the error
        message is stored under ``form["error"]`` before the error is raised,
        so the submitting form can display it.
        """
        try:
            return await self._request("POST", "/catalog/v1/catalogs", json=dict(data))
        except RegistryBackendError as exc:
            if form is not None:
                form["error"] = str(exc)
            raise

    async def update_catalog(
        self, catalog_id: object, data: cabc.Mapping[str, typ.Any]
    ) -> object:
        """Update catalog ``catalog_id`` with ``data``."""
        return await self._request(
            "PATCH", f"/catalog/v1/catalogs/{_segment(catalog_id)}", json=dict(data)
        )

    async def delete_catalog(self, catalog_id: object) -> object:
        """Delete catalog ``catalog_id``."""
        return await self._request(
            "DELETE", f"/catalog/v1/catalogs/{_segment(catalog_id)}"
        )

    async def get_catalog(self, catalog_id: object) -> dict[str, typ.Any]:
        """Return catalog ``catalog_id``."""
        data = await self._request(
            "GET", f"/catalog/v1/catalogs/{_segment(catalog_id)}"
        )
        return _convert(data or {}, dict[str, typ.Any])

    async def list_catalogs(self) -> list[dict[str, typ.Any]]:
        """Return every catalog visible to the caller."""
        data = await self._request("GET", "/catalog/v1/catalogs")
        return _convert(data or [], list[dict[str, typ.Any]])

    async def list_repositories(
        self, scope: str, *, keywords: str | None = None
    ) -> list[ImageSummary]:
        """Return repositories in ``scope`` (``mine`` or ``public``).

        Parameters
        ----------
        scope
            ``mine`` lists the caller's namespace, ``public`` every published
            repository.
        keywords
            Optional substring filter on namespace and image.

        """
        if scope not in REPOSITORY_SCOPES:
            msg = f"Unknown repository scope {scope!r}; expected 'mine' or 'public'"
            raise ValueError(msg)
        params = {"keywords": keywords} if keywords else None
        data = await self._request(
            "GET", f"/registry/v1/repositories/{scope}", params=params
        )
        return _convert(data or [], list[ImageSummary])

    async def list_tags(self, namespace: str, image: str) -> list[TagSummary]:
        """Return the tags of ``namespace/image`` with their digests."""
        data = await self._request("GET", f"{_repository_path(namespace, image)}/tags")
        return _convert(data or [], list[TagSummary])

    async def delete_manifest(
        self, namespace: str, image: str, reference: str
    ) -> object:
        """Delete the manifest ``reference`` (a tag or a digest) of an image.

        Every tag pointing at the same manifest disappears with it.
        """
        path = (
            f"{_repository_path(namespace, image)}/manifests/{_segment(reference)}"
        )
        return await self._request("DELETE", path)

    async def _set_publicity(
        self, namespace: str, image: str, publicity: int
    ) -> object:
        path = f"{_repository_path(namespace, image)}/publicity"
        body = msgspec.to_builtins(PublicityRequest(Publicity=publicity))
        return await self._request("PATCH", path, json=body)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: object | None = None,
        params: dict[str, str] | None = None,
    ) -> typ.Any:  # noqa: ANN401 - envelope data is schemaless
        url = f"{self._config.base_url}{path}"
        try:
            response = await self._client.request(
                method, url, json=json, params=params, headers=self._headers
            )
        except httpx.TimeoutException as exc:
            log_warning(logger, "%s %s timed out", method, path)
            raise RegistryBackendError.timeout() from exc
        except httpx.RequestError as exc:
            log_warning(logger, "%s %s failed: %s", method, path, exc)
            raise RegistryBackendError.network_error(str(exc)) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            log_warning(
                logger, "%s %s returned HTTP %d", method, path, response.status_code
            )
            raise RegistryBackendError.http_error(response.status_code, response.text)

        return self._unwrap(response)

    @staticmethod
    def _unwrap(response: httpx.Response) -> typ.Any:  # noqa: ANN401
        if not response.content:
            return None
        try:
            envelope = msgspec.json.decode(response.content, type=ResponseEnvelope)
        except msgspec.DecodeError as exc:
            raise RegistryResponseShapeError.undecodable(str(exc)) from exc
        if envelope.code != 0:
            raise RegistryBackendError.rejected(envelope.code, envelope.data)
        return envelope.data
