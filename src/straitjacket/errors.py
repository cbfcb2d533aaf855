"""Exception types raised for degenerate numeric input."""
from __future__ import annotations


class NumericDomainError(ValueError):
    """Base class for inputs that have no finite answer."""


class DegenerateFactorError(NumericDomainError):
    """Rounding/flooring factor is zero."""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: factor must be non-zero")
        self.operation = operation


class DegenerateRangeError(NumericDomainError):
    """Source range of a remap has zero width."""

    def __init__(self, operation: str):
        super().__init__(f"{operation}: input range must have non-zero width")
        self.operation = operation
