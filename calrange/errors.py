"""Exceptions raised by calrange.

Both derive from ``ValueError`` so callers that already guard range
arithmetic with ``except ValueError`` keep working.
"""


class InvalidRangeError(ValueError):
    """A range could not be built from the given bounds or text."""


class MergeError(ValueError):
    """Two ranges neither overlap nor touch, so they have no single union."""
