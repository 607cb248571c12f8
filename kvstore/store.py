"""Store: a dict bound to one snapshot file, rewritten in full on every sync."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Any, Iterator, Optional, Type, Union

from common.logger import get_logger
from kvstore.base import StoreBase, StoreData, V
from kvstore.errors import StoreDecodeError
from kvstore.serializer import JsonSerializer, Serializer

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_STORE_FILENAME = "store.kv"


class Store(StoreBase[V]):
    """File-backed key-value store.

    Mutations made with `insert()` and `remove()` stay in memory until
    `sync()`; `set()` and `delete()` mutate and sync in one call. Values are
    checked against `value_type` (``str`` by default, ``None`` to accept any
    value the serializer can encode).
    """

    def __init__(
        self,
        path: PathLike,
        value_type: Optional[Type[Any]] = str,
        serializer: Optional[Serializer] = None,
    ):
        self._path = Path(path)
        self.value_type = value_type
        self.serializer: Serializer = serializer or JsonSerializer()
        self._data: StoreData = {}
        self._dirty = False

    @classmethod
    def open_or_create(
        cls,
        path: PathLike,
        value_type: Optional[Type[Any]] = str,
        serializer: Optional[Serializer] = None,
    ) -> "Store[V]":
        """Load the store at `path`, or start empty if the file does not exist.

        The file is not created until the first sync. Any other error opening
        the file propagates, as does `StoreDecodeError` for corrupt contents.
        """
        store = cls(path, value_type=value_type, serializer=serializer)
        store.reload()
        return store

    open = open_or_create

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        """True when memory holds changes that have not been synced."""
        return self._dirty

    def get_path(self) -> str:
        return str(self._path)

    def reload(self) -> StoreData:
        """Replace in-memory data with the file contents (empty if absent)."""
        log = get_logger(__name__)
        try:
            with open(self._path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            log.debug("store: file missing, starting empty path=%s", self._path)
            data: StoreData = {}
        else:
            data = self.serializer.decode(raw)
            for key, value in data.items():
                if not self._accepts(value):
                    raise StoreDecodeError(
                        f"Value for key {key!r} is {type(value).__name__}, "
                        f"expected {self.value_type.__name__}"
                    )
            log.debug("store: loaded path=%s keys=%d", self._path, len(data))

        self._data = data
        self._dirty = False
        return dict(self._data)

    def _accepts(self, value: Any) -> bool:
        return self.value_type is None or isinstance(value, self.value_type)

    def _put(self, key: str, value: V) -> Optional[V]:
        if not isinstance(key, str):
            raise TypeError(f"Key must be a string, got {type(key).__name__}")
        if not self._accepts(value):
            raise TypeError(
                f"Value must be {self.value_type.__name__}, got {type(value).__name__}"
            )
        previous = self._data.get(key)
        self._data[key] = value
        self._dirty = True
        return previous

    def _pop(self, key: str) -> Optional[V]:
        if key not in self._data:
            return None
        self._dirty = True
        return self._data.pop(key)

    def get(self, key: str, default: Optional[V] = None) -> Optional[V]:
        return self._data.get(key, default)

    def insert(self, key: str, value: V) -> Optional[V]:
        """Insert or overwrite `key` in memory. Returns the previous value, if any."""
        return self._put(key, value)

    def remove(self, key: str) -> Optional[V]:
        """Remove `key` from memory. Returns the removed value, if any."""
        return self._pop(key)

    def set(self, key: str, value: V) -> Optional[V]:
        """Insert `key` and sync.

        The in-memory change is kept even if the sync fails; the error
        propagates and the store stays dirty.
        """
        previous = self._put(key, value)
        self.sync()
        return previous

    def delete(self, key: str) -> Optional[V]:
        """Remove `key` and sync. Nothing is written if the key was absent and
        the store has no other unsynced changes.
        """
        existed = key in self._data
        previous = self._pop(key)
        if existed or self._dirty:
            self.sync()
        return previous

    def keys(self) -> list[str]:
        return list(self._data.keys())

    def items(self) -> Iterator[tuple[str, V]]:
        # Snapshot so the pass covers exactly the entries present at start.
        return iter(list(self._data.items()))

    def get_all(self) -> StoreData:
        return dict(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.get_path()!r}, keys={len(self._data)})"

    def sync(self) -> None:
        """Write the full mapping to the file. Atomic via tmp+rename.

        A symlinked path is written through to its target, and an existing
        file keeps its permission bits.

        Raises `StoreEncodeError` before touching the disk if the data cannot
        be encoded, or `OSError` if the file cannot be written.
        """
        log = get_logger(__name__)
        payload = self.serializer.encode(self._data)
        target = Path(os.path.realpath(self._path))
        tmp_path = target.with_name(target.name + ".tmp")
        try:
            with open(tmp_path, "wb") as f:
                f.write(payload)
            if target.exists():
                shutil.copymode(target, tmp_path)
            os.replace(tmp_path, target)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise
        self._dirty = False
        log.debug("store: sync ok path=%s keys=%d", self._path, len(self._data))

    @staticmethod
    def from_file(
        path: PathLike,
        value_type: Optional[Type[Any]] = str,
        serializer: Optional[Serializer] = None,
    ) -> StoreData:
        store: Store[Any] = Store.open_or_create(
            path, value_type=value_type, serializer=serializer
        )
        return store.get_all()

    @staticmethod
    def to_file(
        path: PathLike,
        data: StoreData,
        value_type: Optional[Type[Any]] = str,
        serializer: Optional[Serializer] = None,
    ) -> None:
        store: Store[Any] = Store(path, value_type=value_type, serializer=serializer)
        for key, value in data.items():
            store.insert(key, value)
        store.sync()


class AutoSaveStore(Store[V]):
    """Store that syncs after every mutation."""

    def insert(self, key: str, value: V) -> Optional[V]:
        return self.set(key, value)

    def remove(self, key: str) -> Optional[V]:
        return self.delete(key)
