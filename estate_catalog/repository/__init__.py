"""Pluggable persistence back-ends for the catalog."""

from estate_catalog.repository.base import (
    InMemoryRepository,
    PropertyRepository,
    ProviderRepository,
    UserRepository,
)
from estate_catalog.repository.json_file import (
    JsonFileProviderRepository,
    JsonFileRepository,
    JsonFileUserRepository,
)
from estate_catalog.repository.postgres import (
    PostgresProviderRepository,
    PostgresRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryRepository",
    "JsonFileProviderRepository",
    "JsonFileRepository",
    "JsonFileUserRepository",
    "PostgresProviderRepository",
    "PostgresRepository",
    "PostgresUserRepository",
    "PropertyRepository",
    "ProviderRepository",
    "UserRepository",
]
