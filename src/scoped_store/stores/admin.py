"""AdminStore — an administrative view over a user store and credentials."""

from __future__ import annotations

from typing import ClassVar

from scoped_store.ability import Permission
from scoped_store.stores.base import Store


class AdminStore(Store):
    """A store that denies everything except the keys it explicitly opens up.

    Entries:
        user:           The injected user store (shared reference), ``rw``.
        name:           Display name of the administrator, ``none``.
        getCredentials: Producer returning the credential store, ``rw``.

    Any other key falls back to the ``"none"`` default policy, so it can be
    neither read nor written.

    Parameters:
        user:        Store holding the managed user's data.
        credentials: Store returned by the ``getCredentials`` producer.
                     Defaults to :meth:`default_credentials`.
        name:        Value of the ``name`` entry.
    """

    permissions: ClassVar[dict[str, Permission]] = {
        "user": "rw",
        "name": "none",
        "getCredentials": "rw",
    }

    def __init__(
        self,
        user: Store,
        credentials: Store | None = None,
        *,
        name: str = "John Doe",
    ) -> None:
        super().__init__(default_policy="none")
        self._credentials = credentials if credentials is not None else self.default_credentials()
        self.set_entry("user", user)
        self.set_entry("name", name)
        self.set_entry("getCredentials", self.get_credentials)

    @staticmethod
    def default_credentials() -> Store:
        credentials = Store()
        credentials.write_entries({"username": "user1"})
        return credentials

    def get_credentials(self) -> Store:
        return self._credentials
