# -*- coding: utf-8 -*-
"""brepcore: a small boundary representation geometry kernel.

Shapes are stored as topology (vertices, edges, cycles, faces, shells)
in an ``Objects`` store, approximated into polygons within a tolerance,
and triangulated into meshes.
"""

import logging

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("brepcore")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from brepcore.errors import (DegenerateGeometryError, IncidenceError, KernelError,  # noqa: E402
                             ToleranceError, UnsupportedOperationError, ValidationError)
from brepcore.objects import DEFAULT_COLOR, Handle  # noqa: E402
from brepcore.store import Objects  # noqa: E402

__all__ = [
    '__version__',
    'DEFAULT_COLOR',
    'DegenerateGeometryError',
    'Handle',
    'IncidenceError',
    'KernelError',
    'Objects',
    'ToleranceError',
    'UnsupportedOperationError',
    'ValidationError',
]
