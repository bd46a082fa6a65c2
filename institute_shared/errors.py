"""
Errors raised by the scheduling core for caller-input problems.

Conflicts found while validating a batch are not errors; see
`institute_shared.services.batch_conflicts`.
"""
from __future__ import annotations


class SchedulingError(ValueError):
    """Base class for input the scheduling core refuses to work with."""


class InvalidRangeError(SchedulingError):
    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: start {start} is after end {end}")
