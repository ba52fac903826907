"""Errors raised by the registry coordinator and its backends."""

from __future__ import annotations

from harbourmaster.common.names import InvalidRepositoryNameError

_BODY_PREVIEW_LIMIT = 200


class RegistryError(Exception):
    """Base class for registry errors."""


class RegistryBackendError(RegistryError):
    """Raised when a backend call fails.

    Attributes
    ----------
    status_code
        HTTP status code of the failed response, if any.
    code
        Application error code from the response envelope, if any.

    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: int | None = None,
    ) -> None:
        """Initialise with a message and optional status and envelope codes."""
        self.status_code = status_code
        self.code = code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, body: str = "") -> RegistryBackendError:
        """Return an error for non-2xx HTTP responses."""
        msg = f"Registry backend HTTP {status_code}"
        if body:
            preview = body[:_BODY_PREVIEW_LIMIT]
            msg = f"{msg}: {preview}"
        return cls(msg, status_code=status_code)

    @classmethod
    def rejected(cls, code: int, detail: object) -> RegistryBackendError:
        """Return an error for envelopes carrying a non-zero application code."""
        msg = f"Registry backend rejected request (code {code}): {detail}"
        return cls(msg, code=code)

    @classmethod
    def timeout(cls) -> RegistryBackendError:
        """Return an error for requests that exceeded the client timeout."""
        return cls("Registry backend request timed out")

    @classmethod
    def network_error(cls, detail: str) -> RegistryBackendError:
        """Return an error for transport failures (DNS, connection, TLS)."""
        return cls(f"Registry backend network error: {detail}")

    @classmethod
    def not_found(cls, kind: str, identifier: object) -> RegistryBackendError:
        """Return an error for an unknown catalog, repository or manifest."""
        return cls(f"{kind} not found: {identifier}", status_code=404)


class RegistryResponseShapeError(RegistryBackendError):
    """Raised when a backend response cannot be decoded."""

    @classmethod
    def undecodable(cls, detail: str) -> RegistryResponseShapeError:
        """Return an error for bodies that are not a valid response envelope."""
        return cls(f"Registry backend returned an invalid envelope: {detail}")


class RegistryConfigError(RegistryError):
    """Raised when backend or session configuration is invalid."""

    @classmethod
    def missing_backend(cls) -> RegistryConfigError:
        """Return an error when HARBOURMASTER_BACKEND is not set."""
        return cls("HARBOURMASTER_BACKEND environment variable is required")

    @classmethod
    def invalid_backend(cls, name: str, valid: frozenset[str]) -> RegistryConfigError:
        """Return an error listing the supported backends."""
        options = ", ".join(f"'{backend}'" for backend in sorted(valid))
        return cls(f"Invalid registry backend '{name}'. Valid options are: {options}")

    @classmethod
    def missing_url(cls) -> RegistryConfigError:
        """Return an error when HARBOURMASTER_REGISTRY_URL is not set."""
        return cls("HARBOURMASTER_REGISTRY_URL is required for the http backend")

    @classmethod
    def invalid_timeout(cls, value: str) -> RegistryConfigError:
        """Return an error for a non-positive or non-numeric timeout."""
        return cls(f"Invalid timeout '{value}'. Must be a positive number of seconds")


__all__ = [
    "InvalidRepositoryNameError",
    "RegistryBackendError",
    "RegistryConfigError",
    "RegistryError",
    "RegistryResponseShapeError",
]
