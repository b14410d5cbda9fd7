"""scoped_store — A hierarchical, permission-scoped key-value store.

Every key carries an ability (``r``, ``w``, ``rw`` or ``none``).  Paths are
colon-delimited and each segment is checked by the store that owns it.
"""

from scoped_store.ability import Ability, Permission
from scoped_store.exceptions import (
    AccessDeniedError,
    PathConflictError,
    StoreConfigError,
    StoreError,
)
from scoped_store.stores import AdminStore, Store

__all__ = [
    "Ability",
    "AccessDeniedError",
    "AdminStore",
    "PathConflictError",
    "Permission",
    "Store",
    "StoreConfigError",
    "StoreError",
]
