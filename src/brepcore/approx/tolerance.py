"""Approximation tolerance.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from dataclasses import dataclass
from math import isfinite

from brepcore.errors import ToleranceError


@dataclass(frozen=True, order=True)
class Tolerance:
    """Maximum deviation of an approximation from the true geometry."""

    value: float

    def __post_init__(self):
        value = self.value
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not isfinite(value) or value <= 0:
            raise ToleranceError('tolerance must be a positive, finite number, got {!r}'.format(value))
        object.__setattr__(self, 'value', float(value))

    @classmethod
    def of(cls, tolerance):
        """Accept either a ``Tolerance`` or a plain number."""
        if isinstance(tolerance, Tolerance):
            return tolerance
        return cls(tolerance)

    def __float__(self):
        return self.value


__all__ = ['Tolerance']
