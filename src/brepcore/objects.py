"""Topological entities of the brepcore boundary representation.

Topology hierarchy:
- GlobalVertex: point in model space
- Vertex: point in the coordinates of a (local) curve, referring to its
  global vertex
- GlobalCurve: model-space identity of a curve
- Curve: 2D curve embedded in a surface, referring to its global curve
- GlobalEdge: model-space identity of an edge, shared by the faces that
  meet there
- HalfEdge: a face's oriented use of a global edge
- Cycle: closed sequence of half-edges
- Face: surface bounded by an exterior cycle and optional interior cycles
- Shell: set of faces

Entities are immutable values.  They refer to each other through
``Handle`` instances and never embed one another; all of them are owned
by an ``Objects`` store (see ``brepcore.store``), which is the only
place handles can be resolved.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from brepcore.curves import Circle, Line
from brepcore.surfaces import Plane, SweptCurve

Color = Tuple[int, int, int, int]

DEFAULT_COLOR: Color = (255, 0, 0, 255)


@dataclass(frozen=True, order=True)
class Handle:
    """Reference to an entity in an ``Objects`` store.

    A handle is only an address.  Two handles are equal when they point
    at the same slot, regardless of whether the entities behind two
    different slots happen to be equal.
    """

    kind: str
    index: int

    def __repr__(self):
        return '{}#{}'.format(self.kind, self.index)


@dataclass(frozen=True)
class GlobalVertex:
    position: Tuple[float, float, float]


@dataclass(frozen=True)
class Vertex:
    """A vertex on a local curve; ``position`` is the curve parameter."""

    position: float
    curve: Handle
    global_vertex: Handle


@dataclass(frozen=True)
class GlobalCurve:
    path: Union[Line, Circle]


@dataclass(frozen=True)
class Curve:
    """A curve in the coordinates of ``surface``.

    ``path`` and the path of ``global_curve`` share their parametrization.
    """

    path: Union[Line, Circle]
    surface: Handle
    global_curve: Handle


@dataclass(frozen=True)
class GlobalEdge:
    """Model-space edge.

    ``vertices`` is ``None`` for edges that connect to themselves, such
    as a full circle.
    """

    curve: Handle
    vertices: Optional[Tuple[Handle, Handle]]


@dataclass(frozen=True)
class HalfEdge:
    """A face-local, oriented edge.

    Bounded half-edges run from ``vertices[0]`` to ``vertices[1]`` in the
    coordinates of ``curve``.  Self-connected half-edges have no vertices;
    ``reverse`` tells whether they run against the curve parameter.
    """

    curve: Handle
    vertices: Optional[Tuple[Handle, Handle]]
    global_edge: Handle
    reverse: bool = False


@dataclass(frozen=True)
class Cycle:
    """Half-edges in order; each ends where the next one starts."""

    half_edges: Tuple[Handle, ...]


@dataclass(frozen=True)
class Face:
    surface: Handle
    exterior: Handle
    interiors: Tuple[Handle, ...] = ()
    color: Color = DEFAULT_COLOR

    def all_cycles(self):
        return (self.exterior,) + tuple(self.interiors)


@dataclass(frozen=True)
class Shell:
    faces: Tuple[Handle, ...] = field(default_factory=tuple)


# store kind for every entity type
KINDS = {
    GlobalVertex: 'global_vertex',
    Vertex: 'vertex',
    GlobalCurve: 'global_curve',
    Curve: 'curve',
    GlobalEdge: 'global_edge',
    HalfEdge: 'half_edge',
    Cycle: 'cycle',
    Plane: 'surface',
    SweptCurve: 'surface',
    Face: 'face',
    Shell: 'shell',
}


def kind_of(entity):
    try:
        return KINDS[type(entity)]
    except KeyError:
        raise TypeError('not a topological entity: {!r}'.format(entity)) from None


__all__ = [
    'Color',
    'DEFAULT_COLOR',
    'Handle',
    'GlobalVertex',
    'Vertex',
    'GlobalCurve',
    'Curve',
    'GlobalEdge',
    'HalfEdge',
    'Cycle',
    'Face',
    'Shell',
    'KINDS',
    'kind_of',
]
