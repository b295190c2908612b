"""Operations creating new topology from existing topology.

Nothing here modifies stored entities.  Every operation inserts new
entities and returns the handle of the new face or shell; whatever the
result shares with its input (global edges, global vertices) is shared
by handle.

Copyright (c) 2025 brepcore contributors
MIT License
"""

import logging

from brepcore import geom
from brepcore.curves import Line
from brepcore.errors import DegenerateGeometryError, UnsupportedOperationError
from brepcore.objects import (Curve, Cycle, Face, GlobalCurve, GlobalEdge,
                              HalfEdge, Shell, Vertex)
from brepcore.partial import PartialCycle, PartialHalfEdge, PartialVertex
from brepcore.surfaces import Plane, SweptCurve
from brepcore.validate import validate_shell
from brepcore.xform import Translation

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Transforms
# -----------------------------------------------------------------------------

class _Transformer:
    """Transforms entities, each at most once per memo."""

    def __init__(self, objects, matrix, memo):
        self.objects = objects
        self.matrix = matrix
        self.memo = memo

    def _once(self, handle, make):
        if handle not in self.memo:
            self.memo[handle] = make()
        return self.memo[handle]

    def global_vertex(self, handle):
        def make():
            position = self.objects.get(handle, 'global_vertex').position
            return self.objects.global_vertex_at(self.matrix.transform_point(position))
        return self._once(handle, make)

    def global_curve(self, handle):
        def make():
            path = self.objects.get(handle, 'global_curve').path
            return self.objects.insert(GlobalCurve(path.transform(self.matrix)))
        return self._once(handle, make)

    def global_edge(self, handle):
        def make():
            edge = self.objects.get(handle, 'global_edge')
            vertices = None
            if edge.vertices is not None:
                vertices = tuple(self.global_vertex(v) for v in edge.vertices)
            return self.objects.insert(GlobalEdge(self.global_curve(edge.curve), vertices))
        return self._once(handle, make)

    def surface(self, handle):
        def make():
            surface = self.objects.get(handle, 'surface')
            return self.objects.insert(surface.transform(self.matrix))
        return self._once(handle, make)

    def curve(self, handle):
        # local coordinates survive a rigid transform of the surface unchanged
        def make():
            curve = self.objects.get(handle, 'curve')
            return self.objects.insert(Curve(curve.path, self.surface(curve.surface),
                                             self.global_curve(curve.global_curve)))
        return self._once(handle, make)

    def vertex(self, handle):
        def make():
            vertex = self.objects.get(handle, 'vertex')
            return self.objects.insert(Vertex(vertex.position, self.curve(vertex.curve),
                                              self.global_vertex(vertex.global_vertex)))
        return self._once(handle, make)

    def half_edge(self, handle):
        def make():
            half_edge = self.objects.get(handle, 'half_edge')
            vertices = None
            if half_edge.vertices is not None:
                vertices = tuple(self.vertex(v) for v in half_edge.vertices)
            return self.objects.insert(HalfEdge(self.curve(half_edge.curve), vertices,
                                                self.global_edge(half_edge.global_edge),
                                                half_edge.reverse))
        return self._once(handle, make)

    def cycle(self, handle):
        def make():
            cycle = self.objects.get(handle, 'cycle')
            return self.objects.insert(Cycle(tuple(self.half_edge(h) for h in cycle.half_edges)))
        return self._once(handle, make)

    def face(self, handle):
        def make():
            face = self.objects.get(handle, 'face')
            return self.objects.insert(Face(self.surface(face.surface),
                                            self.cycle(face.exterior),
                                            tuple(self.cycle(c) for c in face.interiors),
                                            face.color))
        return self._once(handle, make)


def transform_face(objects, face, matrix, memo=None):
    """Insert a transformed copy of ``face``; return its handle.

    ``memo`` maps original handles to transformed ones.  Pass the same
    dict to several calls to transform shared entities only once.
    """
    if memo is None:
        memo = {}
    return _Transformer(objects, matrix, memo).face(face)


def transform_shell(objects, shell, matrix, memo=None):
    if memo is None:
        memo = {}
    transformer = _Transformer(objects, matrix, memo)
    faces = tuple(transformer.face(f) for f in objects.get(shell, 'shell').faces)
    return objects.insert(Shell(faces))


# -----------------------------------------------------------------------------
# Reversal
# -----------------------------------------------------------------------------

def reverse_face(objects, face):
    """Insert ``face`` with its orientation flipped; return the new handle.

    The new face lies on the reversed surface and its cycles run the
    other way around, through the same global edges as the original.
    """
    original = objects.get(face, 'face')
    surface = objects.insert(objects.get(original.surface, 'surface').reverse())
    cycles = []
    for cycle in original.all_cycles():
        partial = PartialCycle(surface)
        partial.connect_to_edges(objects, reversed(objects.get(cycle, 'cycle').half_edges))
        cycles.append(partial.build(objects))
    return objects.insert(Face(surface, cycles[0], tuple(cycles[1:]), original.color))


# -----------------------------------------------------------------------------
# Sweep
# -----------------------------------------------------------------------------

def _vertical_edge(objects, vertex, path, memo, verticals):
    if vertex not in verticals:
        position = objects.get(vertex, 'global_vertex').position
        curve = objects.insert(GlobalCurve(Line(position, path)))
        verticals[vertex] = objects.insert(GlobalEdge(curve, (vertex, memo[vertex])))
    return verticals[vertex]


def _side_surface(objects, half_edge, path, normal):
    """Carrier of the wall swept by ``half_edge``, facing away from the face."""
    edge = objects.get(objects.get(half_edge, 'half_edge').global_edge, 'global_edge')
    curve = objects.get(edge.curve, 'global_curve').path
    start, end = objects.half_edge_range(half_edge)
    t = 0.5 * (start + end)
    tangent = curve.tangent_at(t)
    if end < start:
        tangent = geom.neg(tangent)
    outward = geom.cross(tangent, normal)
    if isinstance(curve, Line):
        surface = Plane(curve.origin, curve.direction, path)
    else:
        surface = SweptCurve(curve, path)
    if geom.dot(surface.normal_at((t, 0.0)), outward) < 0:
        surface = surface.reverse()
    return surface


def _sweep_bounded(objects, half_edge, surface, path, memo, verticals, color):
    bottom_edge = objects.get(half_edge, 'half_edge').global_edge
    top_edge = memo[bottom_edge]
    a, b = objects.half_edge_global_vertices(half_edge)
    a2, b2 = memo[a], memo[b]
    ta, tb = objects.half_edge_range(half_edge)

    def curve_of(edge):
        return objects.get(objects.get(edge, 'global_edge').curve, 'global_curve').path

    # bottom and top keep the parameters of the swept half-edge
    bottom_local = surface.project_curve(curve_of(bottom_edge))
    top_local = surface.project_curve(curve_of(top_edge))
    uv = [bottom_local.point_from_curve_coords(ta), bottom_local.point_from_curve_coords(tb),
          top_local.point_from_curve_coords(tb), top_local.point_from_curve_coords(ta)]

    vertical_a = _vertical_edge(objects, a, path, memo, verticals)
    vertical_b = _vertical_edge(objects, b, path, memo, verticals)
    # verticals run from bottom to top; their local curves sit at the
    # corner parameters rather than wherever projection puts them
    rise_a = Line(uv[0], geom.sub(uv[3], uv[0]))
    rise_b = Line(uv[1], geom.sub(uv[2], uv[1]))
    sides = [(a, bottom_edge, None, (ta, tb)),
             (b, vertical_b, rise_b, (0.0, 1.0)),
             (b2, top_edge, None, (tb, ta)),
             (a2, vertical_a, rise_a, (1.0, 0.0))]
    if geom.signed_area(uv) < 0:
        sides = [(a, vertical_a, rise_a, (0.0, 1.0)),
                 (a2, top_edge, None, (ta, tb)),
                 (b2, vertical_b, rise_b, (1.0, 0.0)),
                 (b, bottom_edge, None, (tb, ta))]

    surface_handle = objects.insert(surface)
    cycle = PartialCycle(surface_handle)
    for corner, edge, local, boundary in sides:
        cycle.add_half_edge(PartialHalfEdge(start=PartialVertex(global_vertex=corner), path=local,
                                            global_edge=edge, boundary=boundary))
    return objects.insert(Face(surface_handle, cycle.build(objects), (), color))


def _sweep_self_connected(objects, half_edge, surface, memo, color):
    bottom_edge = objects.get(half_edge, 'half_edge').global_edge
    top_edge = memo[bottom_edge]
    bottom_curve = objects.get(objects.get(bottom_edge, 'global_edge').curve, 'global_curve')
    # the band is counter-clockwise in surface coordinates when the bottom
    # runs towards +s and the top towards -s
    bottom_reverse = surface.project_curve(bottom_curve.path).direction[0] < 0

    surface_handle = objects.insert(surface)
    cycles = []
    for edge, reverse in ((bottom_edge, bottom_reverse), (top_edge, not bottom_reverse)):
        cycle = PartialCycle(surface_handle)
        cycle.add_half_edge(PartialHalfEdge(global_curve=objects.get(edge, 'global_edge').curve,
                                            global_edge=edge, reverse=reverse))
        cycles.append(cycle.build(objects))
    return objects.insert(Face(surface_handle, cycles[0], (cycles[1],), color))


def sweep_face(objects, face, path, color=None):
    """Sweep a planar face along ``path`` into a closed shell.

    The shell consists of the original face and a translated copy, one
    oriented towards the outside each, plus one side face per half-edge
    of the original.  Side faces share their edges with the caps and
    with each other.

    Returns the shell handle.
    """
    path = geom.vec(path)
    if len(path) != 3:
        raise ValueError('sweep path must be 3D, got {!r}'.format(path))
    original = objects.get(face, 'face')
    surface = objects.get(original.surface, 'surface')
    if not isinstance(surface, Plane):
        raise UnsupportedOperationError('only planar faces can be swept',
                                        details={'surface': surface})
    if geom.mag(path) <= geom.epsilon:
        raise DegenerateGeometryError('sweep path must not be zero', details={'path': path})
    normal = surface.normal
    along = geom.dot(path, normal)
    if abs(along) <= geom.epsilon * geom.mag(path):
        raise DegenerateGeometryError('sweep path is parallel to the face',
                                      details={'path': path, 'normal': normal})
    if color is None:
        color = original.color
    color = tuple(color)

    memo = {}
    translated = transform_face(objects, face, Translation(path), memo)
    if along > 0:
        bottom, top = reverse_face(objects, face), translated
    else:
        bottom, top = face, reverse_face(objects, translated)
    logger.debug('sweeping %r along %r (path %s the face normal)',
                 face, path, 'along' if along > 0 else 'against')

    verticals = {}
    sides = []
    for cycle in original.all_cycles():
        for half_edge in objects.get(cycle, 'cycle').half_edges:
            side_surface = _side_surface(objects, half_edge, path, normal)
            if objects.get(half_edge, 'half_edge').vertices is None:
                sides.append(_sweep_self_connected(objects, half_edge, side_surface, memo, color))
            else:
                sides.append(_sweep_bounded(objects, half_edge, side_surface, path, memo,
                                            verticals, color))

    shell = objects.insert(Shell((bottom, top) + tuple(sides)))
    validate_shell(objects, shell)
    return shell


# -----------------------------------------------------------------------------
# Boolean operations
# -----------------------------------------------------------------------------

def difference(objects, a, b):
    """Boolean difference of two shells.  Not supported."""
    raise UnsupportedOperationError('boolean difference is not supported',
                                    details={'a': a, 'b': b})


__all__ = [
    'transform_face',
    'transform_shell',
    'reverse_face',
    'sweep_face',
    'difference',
]
