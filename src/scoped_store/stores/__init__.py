"""Store implementations."""

from scoped_store.stores.admin import AdminStore
from scoped_store.stores.base import Store

__all__ = ["AdminStore", "Store"]
