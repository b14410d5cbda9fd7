# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Executor for applying store operations from a runner input.

Orchestrates the full execution flow:
1. Create the root store from configuration
2. Apply every operation in order
3. Return per-operation results and a final snapshot
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from scoped_store.exceptions import StoreConfigError, StoreError
from scoped_store.stores import Store

from .factory import StoreFactory
from .schema import OperationResultSchema, OperationSchema, RunnerInput, RunnerOutput

logger = logging.getLogger(__name__)


class Executor:
    """Applies a batch of operations to a store.

    Responsibilities:
    - Create the store from configuration
    - Apply operations in order, recording each outcome
    - Translate results to the output schema

    A failing operation does not stop the batch: its error is recorded and
    the next operation runs against the store as left by the previous ones.

    Example:
        executor = Executor()
        output = executor.execute(input_data)

        # For testing with a prepared store:
        executor = Executor(store=AdminStore(user=Store()))
    """

    def __init__(self, store: Store | None = None) -> None:
        """Initialize executor with optional injected store.

        Args:
            store: Optional store to use instead of creating from config.
        """
        self._injected_store = store

    def execute(self, input_data: RunnerInput) -> RunnerOutput:
        """Apply all operations and build the output.

        Note:
            This method catches all exceptions and returns them as
            RunnerOutput errors, ensuring valid JSON is always returned.
        """
        try:
            return self._execute_internal(input_data)
        except StoreConfigError as e:
            return RunnerOutput(
                success=False,
                error=str(e),
                error_type="StoreConfigError",
            )
        except Exception as e:
            return RunnerOutput(
                success=False,
                error=str(e),
                error_type=type(e).__name__,
            )

    def _execute_internal(self, input_data: RunnerInput) -> RunnerOutput:
        if self._injected_store is not None:
            store = self._injected_store
        else:
            store = StoreFactory().create(input_data.store)

        results = [self._run_operation(store, op) for op in input_data.operations]
        failed = sum(1 for r in results if not r.success)
        logger.info("Applied %d operations (%d failed)", len(results), failed)

        return RunnerOutput(
            success=failed == 0,
            results=results,
            entries=self._render(store.entries()),
        )

    def _run_operation(self, store: Store, op: OperationSchema) -> OperationResultSchema:
        try:
            result = self._apply(store, op)
        except StoreError as e:
            logger.info("Operation '%s' failed: %s", op.op, e)
            return OperationResultSchema(
                op=op.op,
                success=False,
                error=str(e),
                error_type=type(e).__name__,
            )
        return OperationResultSchema(op=op.op, success=True, result=self._render(result))

    def _apply(self, store: Store, op: OperationSchema) -> Any:
        if op.op == "read":
            return store.read(self._require(op, "path"))
        if op.op == "write":
            return store.write(self._require(op, "path"), op.value)
        if op.op == "write_entries":
            if not isinstance(op.value, Mapping):
                raise StoreConfigError("operation 'write_entries' requires an object 'value'")
            store.write_entries(op.value)
            return None
        if op.op == "entries":
            return store.entries()
        if op.op == "allowed_to_read":
            return store.allowed_to_read(self._require(op, "key"))
        # allowed_to_write
        return store.allowed_to_write(self._require(op, "key"))

    def _require(self, op: OperationSchema, field: str) -> str:
        value = getattr(op, field)
        if value is None:
            raise StoreConfigError(f"operation '{op.op}' requires '{field}'")
        return str(value)

    def _render(self, value: Any) -> Any:
        """Convert a store result into plain JSON data.

        Stores render as their readable entries.  Producers have no JSON
        form and render as ``None``.
        """
        if isinstance(value, Store):
            return self._render(value.entries())
        if isinstance(value, Mapping):
            return {key: self._render(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self._render(item) for item in value]
        if callable(value):
            return None
        return value
