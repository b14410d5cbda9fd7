"""Store — a hierarchical key-value container with per-key permissions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, Union

from scoped_store.ability import Ability, Permission
from scoped_store.exceptions import AccessDeniedError, PathConflictError

logger = logging.getLogger(__name__)

PATH_SEPARATOR = ":"

JSONPrimitive = Union[str, int, float, bool, None]
JSONValue = Union[JSONPrimitive, list["JSONValue"], dict[str, "JSONValue"]]
StoreResult = Union["Store", JSONPrimitive, list[JSONValue]]
StoreValue = Union[StoreResult, dict[str, JSONValue], Callable[[], StoreResult]]


class _EmptyMapping:
    """Leaf standing for an empty nested mapping in a flattened write."""


_EMPTY_MAPPING = _EmptyMapping()


def _is_structured(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_producer(value: Any) -> bool:
    return callable(value) and not isinstance(value, Store)


class Store:
    """A tree of named entries where every key is gated by an :class:`Ability`.

    Entries hold primitives, lists, nested stores, or zero-argument
    *producers* that are invoked lazily by :meth:`read`.  Paths are
    colon-delimited (``"user:profile:name"``); each segment is checked
    against the permission of the store that owns it.

    Permissions are declared per store *type* in the ``permissions`` class
    variable and are merged down the class hierarchy.  Keys without a
    declaration fall back to the instance's ``default_policy``::

        class ProfileStore(Store):
            permissions = {"email": "r", "password": "w"}

    A subclass's ``permissions`` holds only its own declarations; the table
    actually enforced is the merged one returned by :meth:`permission_table`.

    Parameters:
        default_policy: Permission applied to keys without an explicit
                        declaration.  Defaults to ``"rw"``.
    """

    permissions: ClassVar[dict[str, Permission]] = {}
    _abilities: ClassVar[dict[str, Ability]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        abilities = dict(cls._abilities)
        declared = cls.__dict__.get("permissions", {})
        abilities.update({key: Ability(permission) for key, permission in declared.items()})
        cls._abilities = abilities

    def __init__(self, default_policy: Permission = "rw") -> None:
        self.default_policy: Permission = default_policy
        self._data: dict[str, StoreValue] = {}

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}(default_policy={self.default_policy!r}, keys={list(self._data)!r})"

    # ── permissions ──────────────────────────────────────────

    @classmethod
    def permission_table(cls) -> dict[str, Permission]:
        """Return a copy of the merged permission table enforced for this type."""
        return {key: ability.permission for key, ability in cls._abilities.items()}

    def get_ability(self, key: str) -> Ability:
        """Return the declared ability for *key*, else one built from ``default_policy``."""
        return self._abilities.get(key) or Ability(self.default_policy)

    def allowed_to_read(self, key: str) -> bool:
        return self.get_ability(key).can_read()

    def allowed_to_write(self, key: str) -> bool:
        return self.get_ability(key).can_write()

    # ── path access ──────────────────────────────────────────

    def read(self, path: str) -> StoreResult:
        """Read the value at *path*, invoking producers along the way.

        Raises:
            AccessDeniedError: If any traversed key is not readable.
        """
        return self._deep_read(path.split(PATH_SEPARATOR))

    def write(self, path: str, value: StoreValue) -> StoreValue:
        """Write *value* at *path*, creating intermediate stores as needed.

        A mapping is not stored as-is: it is flattened into one write per
        leaf (``write("a", {"b": 1})`` is ``write("a:b", 1)``) and the
        original mapping is returned.  Leaves already written stay written
        if a later one is denied.

        Raises:
            AccessDeniedError: If any traversed key is not writable.
            PathConflictError: If the path descends through a non-store value.
        """
        if _is_structured(value):
            for leaf_path, leaf in self._flatten(path, value):  # type: ignore[arg-type]
                self._deep_write(leaf_path.split(PATH_SEPARATOR), leaf)
            return value
        return self._deep_write(path.split(PATH_SEPARATOR), value)

    def write_entries(self, entries: Mapping[str, Any]) -> None:
        """Flatten *entries* from the root of this store and write every leaf."""
        for leaf_path, leaf in self._flatten(None, entries):
            self._deep_write(leaf_path.split(PATH_SEPARATOR), leaf)

    def entries(self) -> dict[str, Any]:
        """Return a snapshot of every readable key, in insertion order.

        Nested stores are snapshotted recursively under their own
        permissions.  Producers are *not* invoked here: they appear as the
        callable itself, unlike :meth:`read`.
        """
        snapshot: dict[str, Any] = {}
        for key, value in self._data.items():
            if not self.allowed_to_read(key):
                continue
            snapshot[key] = value.entries() if isinstance(value, Store) else value
        return snapshot

    def set_entry(self, key: str, value: StoreValue) -> None:
        """Assign *value* at *key* without a permission check."""
        self._data[key] = value

    # ── internals ────────────────────────────────────────────

    def _deep_read(self, path: list[str]) -> StoreResult:
        key = path[0]
        if not self.allowed_to_read(key):
            logger.debug("Read denied for key %r on %s", key, type(self).__name__)
            raise AccessDeniedError(key, "read")

        item = self._data.get(key)
        if _is_producer(item):
            item = item()  # type: ignore[operator]

        # Trailing segments below a non-store value are ignored.
        if isinstance(item, Store) and len(path) > 1:
            return item._deep_read(path[1:])
        return item  # type: ignore[return-value]

    def _deep_write(self, path: list[str], value: StoreValue) -> StoreValue:
        key = path[0]
        if not self.allowed_to_write(key):
            logger.debug("Write denied for key %r on %s", key, type(self).__name__)
            raise AccessDeniedError(key, "write")

        if len(path) == 1:
            if value is _EMPTY_MAPPING:
                return self._ensure_store(key)
            self._data[key] = value
            return value

        child = self._ensure_store(key)
        if not isinstance(child, Store):
            raise PathConflictError(key, child)
        return child._deep_write(path[1:], value)

    def _ensure_store(self, key: str) -> StoreValue:
        """Create a plain store at *key* if it is absent or ``None``; return the entry."""
        child = self._data.get(key)
        if child is None:
            logger.debug("Creating intermediate store at %r", key)
            child = Store()
            self._data[key] = child
        return child

    @staticmethod
    def _flatten(base: str | None, value: Mapping[str, Any]) -> list[tuple[str, StoreValue]]:
        """Turn a nested mapping into ``(colon_path, leaf)`` pairs.

        Lists, primitives, producers and stores are leaves.  An empty nested
        mapping is written as a marker: it creates an empty :class:`Store`
        where nothing is stored yet and leaves any existing entry alone.
        """
        pairs: list[tuple[str, StoreValue]] = []
        for key, item in value.items():
            path = f"{base}{PATH_SEPARATOR}{key}" if base else str(key)
            if not _is_structured(item):
                pairs.append((path, item))
            elif item:
                pairs.extend(Store._flatten(path, item))
            else:
                pairs.append((path, _EMPTY_MAPPING))  # type: ignore[arg-type]
        return pairs
