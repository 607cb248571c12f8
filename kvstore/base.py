"""Store base class (abstract).

Callers should depend on this type, so an alternative store (in-memory, db,
etc.) can be injected without changing caller logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterator, Optional, TypeVar

V = TypeVar("V")

StoreData = dict[str, V]


class StoreBase(ABC, Generic[V]):
    @abstractmethod
    def get_path(self) -> str:
        """Get the path/identifier of the store (if applicable)."""
        ...

    @abstractmethod
    def get(self, key: str, default: Optional[V] = None) -> Optional[V]:
        """Get a value by key."""
        ...

    @abstractmethod
    def insert(self, key: str, value: V) -> Optional[V]:
        """Set a value by key (does not persist until sync())."""
        ...

    @abstractmethod
    def remove(self, key: str) -> Optional[V]:
        """Remove a key (does not persist until sync())."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        """List keys."""
        ...

    @abstractmethod
    def items(self) -> Iterator[tuple[str, V]]:
        """Iterate over (key, value) pairs."""
        ...

    @abstractmethod
    def get_all(self) -> StoreData:
        """Get full data snapshot."""
        ...

    @abstractmethod
    def sync(self) -> None:
        """Persist current data to the underlying store."""
        ...

    def set(self, key: str, value: V) -> Optional[V]:
        """Set a value by key and persist."""
        previous = self.insert(key, value)
        self.sync()
        return previous

    def delete(self, key: str) -> Optional[V]:
        """Remove a key and persist."""
        previous = self.remove(key)
        self.sync()
        return previous

    def save(self) -> None:
        self.sync()

    def __iter__(self) -> Iterator[tuple[str, V]]:
        return self.items()
