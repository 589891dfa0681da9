"""
Testing subpackage for reactor simulation.

This subpackage provides tools for testing and debugging the simulation:
- Snapshot validation against the model invariants
- A quick self-test run

Example usage:
    from reactor_simulation.testing import validate_snapshot, run_quick_test

    ok, failures = run_quick_test(n_ticks=600)
"""

from .validation import (
    validate_snapshot,
    run_quick_test,
)

__all__ = [
    # Validation
    "validate_snapshot",
    "run_quick_test",
]
