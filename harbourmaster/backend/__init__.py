"""Registry backend implementations.

Public API
----------
HttpRegistryBackend
    httpx client for the registry and catalog REST APIs.
RegistryBackendConfig
    Configuration dataclass for the HTTP backend.
InMemoryRegistryBackend
    Dict-backed backend for development and tests.
create_registry_backend
    Factory selecting a backend from ``HARBOURMASTER_BACKEND``.

"""

from __future__ import annotations

from harbourmaster.backend.client import HttpRegistryBackend
from harbourmaster.backend.config import RegistryBackendConfig
from harbourmaster.backend.factory import create_registry_backend
from harbourmaster.backend.memory import BackendCall, InMemoryRegistryBackend
from harbourmaster.backend.wire import ImageSummary, TagSummary

__all__ = [
    "BackendCall",
    "HttpRegistryBackend",
    "ImageSummary",
    "InMemoryRegistryBackend",
    "RegistryBackendConfig",
    "TagSummary",
    "create_registry_backend",
]
