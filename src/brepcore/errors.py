"""Exceptions raised by the brepcore kernel.

All kernel errors derive from :class:`KernelError`, which is itself a
``ValueError`` so that callers treating bad geometry as bad input keep
working.  Each error carries an optional ``details`` dictionary with the
offending values.

Copyright (c) 2025 brepcore contributors
MIT License
"""


class KernelError(ValueError):
    """Base class for geometry and topology errors."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class IncidenceError(KernelError):
    """A point or curve does not lie on the carrier it is projected onto."""


class DegenerateGeometryError(KernelError):
    """A requested primitive collapses (coincident or collinear points, zero radius, ...)."""


class ValidationError(KernelError):
    """A topological invariant would be violated."""


class UnsupportedOperationError(KernelError):
    """An operation is not defined for the given combination of carriers."""


class ToleranceError(KernelError):
    """A tolerance or minimum distance is not a positive, finite number."""


__all__ = [
    'KernelError',
    'IncidenceError',
    'DegenerateGeometryError',
    'ValidationError',
    'UnsupportedOperationError',
    'ToleranceError',
]
