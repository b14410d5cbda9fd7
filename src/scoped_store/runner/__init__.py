# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Runner submodule for applying store operations described as JSON.

Usage:
    python -m scoped_store.runner < input.json > output.json

Exports:
    Executor: Applies a batch of operations to a store
    StoreFactory: Creates stores from configuration
    RunnerInput: Input schema
    RunnerOutput: Output schema
"""

from .executor import Executor
from .factory import StoreFactory
from .schema import (
    OperationResultSchema,
    OperationSchema,
    RunnerInput,
    RunnerOutput,
    StoreConfigSchema,
)

__all__ = [
    "Executor",
    "OperationResultSchema",
    "OperationSchema",
    "RunnerInput",
    "RunnerOutput",
    "StoreConfigSchema",
    "StoreFactory",
]
