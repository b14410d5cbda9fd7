# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Data transfer objects for runner input/output.

These Pydantic models define the JSON contract of
``python -m scoped_store.runner``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from scoped_store.ability import Permission

OperationType = Literal[
    "read",
    "write",
    "write_entries",
    "entries",
    "allowed_to_read",
    "allowed_to_write",
]


class StoreConfigSchema(BaseModel):
    """Configuration of the root store.

    Attributes:
        default_policy: Permission for keys without an explicit declaration
        permissions: Per-key permission table for the root store's type
        entries: Initial entries, assigned without permission checks
    """

    default_policy: Permission = "rw"
    permissions: dict[str, Permission] = Field(default_factory=dict)
    entries: dict[str, Any] = Field(default_factory=dict)


class OperationSchema(BaseModel):
    """A single store operation.

    Attributes:
        op: Operation name
        path: Colon-delimited path (``read`` / ``write``)
        key: Key name (``allowed_to_read`` / ``allowed_to_write``)
        value: Value to write (``write`` / ``write_entries``)
    """

    op: OperationType
    path: str | None = None
    key: str | None = None
    value: Any = None


class RunnerInput(BaseModel):
    """Complete input read from stdin.

    Attributes:
        store: Root store configuration
        operations: Operations applied in order
    """

    store: StoreConfigSchema = Field(default_factory=StoreConfigSchema)
    operations: list[OperationSchema] = Field(default_factory=list)


class OperationResultSchema(BaseModel):
    """Outcome of a single operation.

    Attributes:
        op: Operation name
        success: Whether the operation completed
        result: Operation result (stores are rendered as their entries)
        error: Error message (on failure)
        error_type: Error class name (on failure)
    """

    op: str
    success: bool
    result: Any = None
    error: str = ""
    error_type: str = ""


class RunnerOutput(BaseModel):
    """Complete output written to stdout.

    The runner always outputs valid JSON matching this schema,
    even on errors.

    Attributes:
        success: Whether every operation succeeded
        results: Per-operation outcomes, in input order
        entries: Final snapshot of the root store
        error: Error message (on failure before any operation ran)
        error_type: Error class name (on failure)
    """

    success: bool
    results: list[OperationResultSchema] = Field(default_factory=list)
    entries: dict[str, Any] = Field(default_factory=dict)
    error: str = ""
    error_type: str = ""
