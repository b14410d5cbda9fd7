"""Custom exceptions for the scoped_store package."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all store-related errors."""


class AccessDeniedError(StoreError):
    """Raised when a key's permission does not allow the requested access."""

    def __init__(self, key: str, operation: str) -> None:
        self.key = key
        self.operation = operation
        super().__init__(f"Cannot {operation} property '{key}'")


class PathConflictError(StoreError):
    """Raised when a deep write must descend through a value that is not a store."""

    def __init__(self, key: str, value: object) -> None:
        self.key = key
        super().__init__(
            f"Cannot write below '{key}': it holds a {type(value).__name__}, not a store"
        )


class StoreConfigError(StoreError):
    """Raised when a store is misconfigured."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Store misconfigured: {message}")
