# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Store factory for creating store instances from configuration.

Permissions belong to a store *type*, so a configured permission table is
turned into a dedicated ``Store`` subclass rather than attached to an
instance.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from scoped_store.exceptions import StoreConfigError
from scoped_store.stores import Store
from scoped_store.stores.base import PATH_SEPARATOR

from .schema import StoreConfigSchema

logger = logging.getLogger(__name__)


class StoreFactory:
    """Creates root stores from configuration.

    Example:
        factory = StoreFactory()
        store = factory.create(
            StoreConfigSchema(
                default_policy="none",
                permissions={"profile": "r"},
                entries={"profile": {"name": "alice"}},
            )
        )
        store.read("profile:name")  # "alice"
    """

    def __init__(self, base: type[Store] = Store) -> None:
        """Initialize factory.

        Args:
            base: Store class the configured type derives from
        """
        self._base = base

    def create(self, config: StoreConfigSchema) -> Store:
        """Create a store from configuration.

        Initial entries are assigned without permission checks, so a store
        can be seeded with keys it will later refuse to expose.  Nested
        mappings become plain read-write stores.

        Args:
            config: Store configuration

        Returns:
            Configured store instance

        Raises:
            StoreConfigError: If a key contains the path separator
        """
        self._validate_keys(config.permissions, "permission")
        self._validate_keys(config.entries, "entry")

        store_class = self.build_type(config.permissions)
        store = store_class(default_policy=config.default_policy)
        for key, value in config.entries.items():
            store.set_entry(key, self._seed_value(value))

        logger.debug(
            "Created %s with default_policy=%r and %d entries",
            store_class.__name__,
            config.default_policy,
            len(config.entries),
        )
        return store

    def build_type(self, permissions: Mapping[str, Any]) -> type[Store]:
        """Return a ``Store`` subclass declaring *permissions*."""
        if not permissions:
            return self._base
        return type("ConfiguredStore", (self._base,), {"permissions": dict(permissions)})

    def _seed_value(self, value: Any) -> Any:
        if not isinstance(value, Mapping):
            return value
        nested = Store()
        if value:
            nested.write_entries(value)
        return nested

    def _validate_keys(self, mapping: Mapping[str, Any], kind: str) -> None:
        """Reject keys containing the separator, at any nesting depth."""
        for key, value in mapping.items():
            if PATH_SEPARATOR in key:
                raise StoreConfigError(
                    f"{kind} key '{key}' must not contain the path separator '{PATH_SEPARATOR}'"
                )
            if isinstance(value, Mapping):
                self._validate_keys(value, kind)
