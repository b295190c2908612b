"""Builders for common faces and shells.

Copyright (c) 2025 brepcore contributors
MIT License
"""

import logging

from brepcore import geom
from brepcore.errors import DegenerateGeometryError
from brepcore.objects import DEFAULT_COLOR, Face, Handle, Shell
from brepcore.partial import PartialCycle, PartialHalfEdge, PartialVertex
from brepcore.surfaces import Plane, is_surface
from brepcore.validate import validate_shell

logger = logging.getLogger(__name__)


def _surface_handle(objects, surface):
    if isinstance(surface, Handle):
        objects.get(surface, 'surface')
        return surface
    if is_surface(surface):
        return objects.insert(surface)
    raise TypeError('expected a surface or a surface handle, got {!r}'.format(surface))


def _oriented(points, ccw):
    points = [geom.vec(p) for p in points]
    if (geom.signed_area(points) > 0) != ccw:
        points.reverse()
    return points


class FaceBuilder:
    """Construction of faces from surface coordinates or model points."""

    @staticmethod
    def polygon(objects, surface, points, interiors=(), color=DEFAULT_COLOR):
        """Polygonal face on ``surface`` with optional polygonal holes.

        ``points`` and each hole are given in surface coordinates.  The
        exterior is wound counter-clockwise and holes clockwise, whatever
        order the points come in.
        """
        surface = _surface_handle(objects, surface)
        exterior = PartialCycle(surface)
        exterior.update_as_polygon_from_points(_oriented(points, ccw=True))
        holes = []
        for hole_points in interiors:
            hole = PartialCycle(surface)
            hole.update_as_polygon_from_points(_oriented(hole_points, ccw=False))
            holes.append(hole)
        return FaceBuilder._build(objects, surface, exterior, holes, color)

    @staticmethod
    def circle(objects, surface, center, radius, holes=(), color=DEFAULT_COLOR):
        """Disk bounded by one self-connected circular edge.

        ``holes`` is a sequence of ``(center, radius)`` pairs, each cut out
        of the disk as a clockwise circle.
        """
        surface = _surface_handle(objects, surface)
        exterior = PartialCycle(surface)
        exterior.add_half_edge(PartialHalfEdge().update_as_circle(center, radius))
        interiors = []
        for hole_center, hole_radius in holes:
            hole = PartialCycle(surface)
            hole.add_half_edge(PartialHalfEdge().update_as_circle(hole_center, hole_radius,
                                                                  reverse=True))
            interiors.append(hole)
        return FaceBuilder._build(objects, surface, exterior, interiors, color)

    @staticmethod
    def triangle(objects, points, known_edges=None, color=DEFAULT_COLOR):
        """Triangular face through three model points.

        The face lies on the plane through the points, and is wound
        ``a -> b -> c``.  ``known_edges`` maps ``frozenset`` pairs of global
        vertex handles to global edges: edges found there are reused,
        edges created here are added.

        Returns ``(face, global_edges)``.
        """
        a, b, c = (geom.vec(p) for p in points)
        plane = Plane.from_points(a, b, c)
        vertices = [objects.global_vertex_at(p) for p in (a, b, c)]
        if len(set(vertices)) != 3:
            raise DegenerateGeometryError('triangle points collapse onto each other',
                                          details={'points': (a, b, c)})
        surface = objects.insert(plane)
        cycle = PartialCycle(surface)
        for i in range(3):
            half_edge = PartialHalfEdge(start=PartialVertex(global_vertex=vertices[i]))
            if known_edges is not None:
                half_edge.global_edge = known_edges.get(frozenset((vertices[i], vertices[(i + 1) % 3])))
            cycle.add_half_edge(half_edge)
        cycle_handle = cycle.build(objects)

        edges = [objects.get(h, 'half_edge').global_edge
                 for h in objects.get(cycle_handle, 'cycle').half_edges]
        if known_edges is not None:
            for i, edge in enumerate(edges):
                known_edges.setdefault(frozenset((vertices[i], vertices[(i + 1) % 3])), edge)
        face = objects.insert(Face(surface, cycle_handle, (), tuple(color)))
        return face, edges

    @staticmethod
    def _build(objects, surface, exterior, interiors, color):
        exterior_handle = exterior.build(objects)
        interior_handles = tuple(cycle.build(objects) for cycle in interiors)
        return objects.insert(Face(surface, exterior_handle, interior_handles, tuple(color)))


class ShellBuilder:
    """Construction of closed shells."""

    @staticmethod
    def tetrahedron(objects, points, color=DEFAULT_COLOR):
        """Closed tetrahedron shell from four model points.

        The six edges are created once and shared by the two faces meeting
        at each.  All faces are wound so their normals point outwards.
        """
        a, b, c, d = (geom.vec(p) for p in points)
        volume = geom.dot(geom.sub(b, a), geom.cross(geom.sub(c, a), geom.sub(d, a)))
        scale = geom.mag(geom.sub(b, a)) * geom.mag(geom.sub(c, a)) * geom.mag(geom.sub(d, a))
        if abs(volume) <= geom.epsilon * scale:
            raise DegenerateGeometryError('tetrahedron points are coplanar',
                                          details={'points': (a, b, c, d)})
        faces = [(a, c, b), (a, b, d), (b, c, d), (c, a, d)]
        if volume < 0:
            faces = [(p, r, q) for p, q, r in faces]

        known_edges = {}
        handles = tuple(FaceBuilder.triangle(objects, face, known_edges, color)[0]
                        for face in faces)
        shell = objects.insert(Shell(handles))
        validate_shell(objects, shell)
        logger.debug('built tetrahedron %r with %d edges', shell, len(known_edges))
        return shell


__all__ = ['FaceBuilder', 'ShellBuilder']
