"""Configuration for the HTTP registry backend."""

from __future__ import annotations

import dataclasses
import os

from harbourmaster.registry.errors import RegistryConfigError

_DEFAULT_TIMEOUT_S = 20.0
_DEFAULT_USER_AGENT = "harbourmaster/0.1"


@dataclasses.dataclass(frozen=True, slots=True)
class RegistryBackendConfig:
    """Settings for :class:`~harbourmaster.backend.client.HttpRegistryBackend`.

    Attributes
    ----------
    base_url
        Root URL of the registry server, without the ``/registry/v1`` or
        ``/catalog/v1`` prefixes.
    token
        Optional bearer token sent with every request.
    timeout_s
        Per-request timeout in seconds.
    user_agent
        ``User-Agent`` header value.

    """

    base_url: str
    token: str | None = None
    timeout_s: float = _DEFAULT_TIMEOUT_S
    user_agent: str = _DEFAULT_USER_AGENT

    @staticmethod
    def _parse_timeout_from_env() -> float:
        raw_timeout = os.environ.get("HARBOURMASTER_REGISTRY_TIMEOUT_S")
        if raw_timeout is None or not raw_timeout.strip():
            return _DEFAULT_TIMEOUT_S

        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise RegistryConfigError.invalid_timeout(raw_timeout) from exc

        if timeout <= 0:
            raise RegistryConfigError.invalid_timeout(raw_timeout)
        return timeout

    @classmethod
    def from_env(cls) -> RegistryBackendConfig:
        """Build configuration from ``HARBOURMASTER_REGISTRY_*`` variables.

        Reads ``HARBOURMASTER_REGISTRY_URL`` (required),
        ``HARBOURMASTER_REGISTRY_TOKEN`` and
        ``HARBOURMASTER_REGISTRY_TIMEOUT_S``.

        Raises
        ------
        RegistryConfigError
            If the URL is missing or the timeout is not a positive number.

        """
        base_url = os.environ.get("HARBOURMASTER_REGISTRY_URL", "").strip()
        if not base_url:
            raise RegistryConfigError.missing_url()

        token = os.environ.get("HARBOURMASTER_REGISTRY_TOKEN", "").strip() or None
        return cls(
            base_url=base_url.rstrip("/"),
            token=token,
            timeout_s=cls._parse_timeout_from_env(),
        )
