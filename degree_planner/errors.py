"""
Error types for the degree planner.

Only structural problems are exceptions. Unmet minimums, overflow and
duplicate skips are outcomes and are returned as data.
"""


class ValidationError(ValueError):
    """A slot, enrollment or record has a malformed shape; the call is aborted."""
