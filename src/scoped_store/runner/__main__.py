# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Entry point for the scoped_store runner.

Usage:
    python -m scoped_store.runner < input.json > output.json

The runner reads JSON input from stdin, applies the operations to a
configured store, and writes JSON output to stdout.  Logs go to stderr.

Exit codes:
    0: Every operation succeeded
    1: At least one operation failed (details in JSON output)
"""

from __future__ import annotations

import logging
import os
import sys

from .executor import Executor
from .schema import RunnerInput, RunnerOutput


def _log_level() -> int:
    """Resolve ``SCOPED_STORE_LOG_LEVEL``, falling back to WARNING for unknown names."""
    level = logging.getLevelName(os.environ.get("SCOPED_STORE_LOG_LEVEL", "WARNING").upper())
    return level if isinstance(level, int) else logging.WARNING


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        logging.basicConfig(
            level=_log_level(),
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

        # Read input from stdin
        input_json = sys.stdin.read()

        # Validate input against schema
        input_data = RunnerInput.model_validate_json(input_json)

        output = Executor().execute(input_data)

        # Write output to stdout
        print(output.model_dump_json())

        return 0 if output.success else 1

    except Exception as e:
        # Ensure we always output valid JSON, even on unexpected errors
        error_output = RunnerOutput(
            success=False,
            error=str(e),
            error_type=type(e).__name__,
        )
        print(error_output.model_dump_json())
        return 1


if __name__ == "__main__":
    sys.exit(main())
