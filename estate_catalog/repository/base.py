"""Repository interfaces and the in-memory implementation."""

from typing import Generic, Iterable, Protocol, TypeVar, runtime_checkable

from estate_catalog.models.property import Property
from estate_catalog.models.provider import Provider
from estate_catalog.models.user import User

T = TypeVar("T")


@runtime_checkable
class PropertyRepository(Protocol):
    """Durable home of the catalog.

    ``save`` replaces the stored catalog with ``records``; there is no
    partial update and no version check (last write wins).
    """

    def load(self) -> list[Property]:
        ...

    def save(self, records: Iterable[Property]) -> None:
        ...


@runtime_checkable
class ProviderRepository(Protocol):
    """Durable home of provider accounts. Same whole-collection contract."""

    def load(self) -> list[Provider]:
        ...

    def save(self, records: Iterable[Provider]) -> None:
        ...


@runtime_checkable
class UserRepository(Protocol):
    def load(self) -> list[User]:
        ...

    def save(self, records: Iterable[User]) -> None:
        ...


class InMemoryRepository(Generic[T]):
    """Process-local repository, used by tests and demos."""

    def __init__(self, records: Iterable[T] = ()) -> None:
        self._records: list[T] = list(records)
        self.save_count = 0

    def load(self) -> list[T]:
        return list(self._records)

    def save(self, records: Iterable[T]) -> None:
        self._records = list(records)
        self.save_count += 1
