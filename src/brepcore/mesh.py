"""Triangles and indexed triangle meshes.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Sequence, Tuple

from brepcore import geom
from brepcore.errors import DegenerateGeometryError
from brepcore.objects import DEFAULT_COLOR, Color

Point = Tuple[float, ...]


def _collinear(a: Point, b: Point, c: Point) -> bool:
    ab = geom.sub(b, a)
    ac = geom.sub(c, a)
    scale = geom.mag(ab) * geom.mag(ac)
    if len(a) == 2:
        area = abs(geom.cross2(ab, ac))
    else:
        area = geom.mag(geom.cross(ab, ac))
    return area <= geom.epsilon * scale


@dataclass(frozen=True)
class Triangle:
    """Immutable, non-degenerate triangle in 2D or 3D.

    The points are stored in a canonical rotation: the lexicographically
    smallest point comes first and the winding is kept.  Two triangles
    are therefore equal exactly when they have the same points in the
    same cyclic order.
    """

    a: Point
    b: Point
    c: Point

    def __post_init__(self) -> None:
        points = [geom.vec(p) for p in (self.a, self.b, self.c)]
        if len({len(p) for p in points}) != 1 or len(points[0]) not in (2, 3):
            raise ValueError('triangle points must all be 2D or all be 3D')
        a, b, c = points
        if a == b or b == c or a == c:
            raise DegenerateGeometryError('triangle has coincident points',
                                          details={'points': tuple(points)})
        if _collinear(a, b, c):
            raise DegenerateGeometryError('triangle points are collinear',
                                          details={'points': tuple(points)})
        first = points.index(min(points))
        points = points[first:] + points[:first]
        object.__setattr__(self, 'a', points[0])
        object.__setattr__(self, 'b', points[1])
        object.__setattr__(self, 'c', points[2])

    @property
    def points(self) -> Tuple[Point, Point, Point]:
        return (self.a, self.b, self.c)

    @property
    def dim(self) -> int:
        return len(self.a)

    def normalize(self) -> Tuple[Point, Point, Point]:
        """Sorted points; equal for triangles that differ only in winding."""
        return tuple(sorted(self.points))

    def reverse(self) -> 'Triangle':
        return Triangle(self.a, self.c, self.b)

    def normal(self) -> Point:
        """Unit normal following the right-hand rule (3D triangles only)."""
        if self.dim != 3:
            raise ValueError('only 3D triangles have a normal')
        return geom.unit(geom.cross(geom.sub(self.b, self.a), geom.sub(self.c, self.a)))

    def area(self) -> float:
        ab = geom.sub(self.b, self.a)
        ac = geom.sub(self.c, self.a)
        if self.dim == 2:
            return 0.5 * abs(geom.cross2(ab, ac))
        return 0.5 * geom.mag(geom.cross(ab, ac))


@dataclass(frozen=True)
class MeshTriangle:
    inner: Triangle
    color: Color = DEFAULT_COLOR


class Mesh:
    """Indexed triangle mesh.

    Vertices are deduplicated by exact equality; two vertices that differ
    in the last bit are kept apart.  Deduplicating by proximity is the
    business of the ``Objects`` store, not of the mesh.
    """

    def __init__(self) -> None:
        self._vertices: List[Point] = []
        self._indices: List[int] = []
        self._indices_by_vertex: Dict[Point, int] = {}
        self._triangles: List[MeshTriangle] = []
        self._normalized: set = set()

    def push_vertex(self, vertex: Sequence[float]) -> int:
        vertex = geom.vec(vertex)
        index = self._indices_by_vertex.get(vertex)
        if index is None:
            index = len(self._vertices)
            self._vertices.append(vertex)
            self._indices_by_vertex[vertex] = index
        self._indices.append(index)
        return index

    def push_triangle(self, triangle, color: Color = DEFAULT_COLOR) -> MeshTriangle:
        """Add ``triangle`` (a ``Triangle`` or three points) to the mesh."""
        if not isinstance(triangle, Triangle):
            triangle = Triangle(*triangle)
        for point in triangle.points:
            self.push_vertex(point)
        entry = MeshTriangle(triangle, tuple(color))
        self._triangles.append(entry)
        self._normalized.add(triangle.normalize())
        return entry

    def contains_triangle(self, triangle) -> bool:
        """Whether the mesh holds ``triangle``, in either winding."""
        if not isinstance(triangle, Triangle):
            triangle = Triangle(*triangle)
        return triangle.normalize() in self._normalized

    def vertices(self) -> Iterator[Point]:
        return iter(self._vertices)

    def indices(self) -> Iterator[int]:
        return iter(self._indices)

    def triangles(self) -> Iterator[MeshTriangle]:
        return iter(self._triangles)

    def __len__(self) -> int:
        return len(self._triangles)

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)


__all__ = ['Triangle', 'MeshTriangle', 'Mesh']
