"""Points produced by approximation.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True, order=True)
class ApproxPoint:
    """A point of an approximation in two coordinate spaces at once.

    ``local_form`` is the point in the coordinates of whatever was
    approximated: a 1-tuple curve parameter for global curves, surface
    coordinates for curves on a surface.  ``global_form`` is the same
    point in model space.  ``source`` optionally records which curve and
    parameter produced the point; it does not take part in comparisons.
    """

    local_form: Tuple[float, ...]
    global_form: Tuple[float, float, float]
    source: Optional[Tuple[Any, float]] = field(default=None, compare=False)


__all__ = ['ApproxPoint']
