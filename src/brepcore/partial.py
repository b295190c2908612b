"""Staging objects for building topology.

Building a cycle means creating a lot of entities that refer to each
other: global vertices, global curves and edges, local curves, vertices,
half-edges.  The ``Partial*`` classes collect what is known about each
of them (a surface position here, an existing global edge there) and
``PartialCycle.build`` turns the lot into stored entities in one go.

Partial objects are plain mutable dataclasses.  They are never stored;
only what ``build`` inserts into an ``Objects`` store is topology.

Copyright (c) 2025 brepcore contributors
MIT License
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from brepcore import geom
from brepcore.curves import Circle, Line
from brepcore.errors import (DegenerateGeometryError, UnsupportedOperationError,
                             ValidationError)
from brepcore.objects import (Curve, Cycle, GlobalCurve, GlobalEdge, Handle,
                              HalfEdge, Vertex)
from brepcore.surfaces import Plane
from brepcore.validate import validate_cycle

logger = logging.getLogger(__name__)


@dataclass
class PartialVertex:
    """A vertex given by its surface position, its global vertex, or both."""

    surface_position: Optional[geom.Vec2] = None
    global_vertex: Optional[Handle] = None


@dataclass
class PartialHalfEdge:
    """A half-edge under construction.

    ``start`` is ``None`` for self-connected half-edges.  ``path`` is the
    local curve; when it is missing it is derived by projecting the
    global curve into the cycle's surface.  ``boundary`` holds the curve
    parameters of the start and end vertex; when it is missing they are
    located on the global curve, and an arc of a circle runs in the
    direction of the circle parameter.
    """

    start: Optional[PartialVertex] = None
    path: Optional[object] = None
    global_curve: Optional[Handle] = None
    global_edge: Optional[Handle] = None
    boundary: Optional[Tuple[float, float]] = None
    reverse: bool = False

    def update_as_line_segment(self, start, end):
        start = geom.vec(start)
        end = geom.vec(end)
        self.start = PartialVertex(surface_position=start)
        self.path = Line.from_points(start, end)
        self.boundary = (0.0, 1.0)
        return self

    def update_as_circle(self, center, radius, reverse=False):
        self.start = None
        self.path = Circle.from_center_and_radius(center, radius)
        self.boundary = None
        self.reverse = reverse
        return self

    @property
    def is_self_connected(self):
        return self.start is None


def _lift_path(surface, path):
    """Model-space curve of a local curve, with the same parametrization."""
    if isinstance(path, Line):
        if not isinstance(surface, Plane) and not isinstance(getattr(surface, 'curve', None), Line):
            if abs(path.direction[0]) > geom.epsilon:
                raise UnsupportedOperationError(
                    'only lines along the sweep path can be lifted from a swept circle',
                    details={'path': path})
        origin = surface.point_surface_to_model(path.origin)
        tip = surface.point_surface_to_model(path.point_from_curve_coords(1.0))
        return Line(origin, geom.sub(tip, origin))
    if isinstance(path, Circle):
        if not isinstance(surface, Plane):
            raise UnsupportedOperationError('circles can only be lifted from planes',
                                            details={'surface': surface})
        try:
            return Circle(surface.point_surface_to_model(path.center),
                          surface.vector_surface_to_model(path.a),
                          surface.vector_surface_to_model(path.b))
        except DegenerateGeometryError as exc:
            raise UnsupportedOperationError(
                'circles can only be lifted from planes with orthonormal directions',
                details={'surface': surface}) from exc
    raise TypeError('not a curve: {!r}'.format(path))


@dataclass
class PartialCycle:
    """A cycle under construction on the surface ``surface`` (a handle)."""

    surface: Handle
    half_edges: List[PartialHalfEdge] = field(default_factory=list)

    def add_half_edge(self, half_edge):
        self.half_edges.append(half_edge)
        return half_edge

    def update_as_polygon_from_points(self, points):
        """Add one line segment per pair of consecutive surface points.

        The polygon is closed: the last segment runs from the last point
        back to the first.  Returns the new partial half-edges.
        """
        points = [geom.vec(p) for p in points]
        if len(points) < 3:
            raise DegenerateGeometryError('a polygon needs at least three points',
                                          details={'points': points})
        added = []
        for start, end in zip(points, points[1:] + points[:1]):
            added.append(self.add_half_edge(PartialHalfEdge().update_as_line_segment(start, end)))
        return added

    def connect_to_edges(self, objects, half_edges):
        """Add half-edges sharing the global edges of stored ``half_edges``.

        New half-edge ``i`` uses the global edge of ``half_edges[i]`` and
        starts at the start vertex of ``half_edges[i - 1]``.  Given the
        half-edges of a cycle in reverse order, this yields the same cycle
        traversed the other way.
        """
        handles = list(half_edges)
        added = []
        for i, handle in enumerate(handles):
            stored = objects.get(handle, 'half_edge')
            global_edge = objects.get(stored.global_edge, 'global_edge')
            partial = PartialHalfEdge(global_curve=global_edge.curve,
                                      global_edge=stored.global_edge)
            if stored.vertices is None:
                partial.reverse = not stored.reverse
            else:
                previous = objects.half_edge_global_vertices(handles[i - 1])
                if previous is None:
                    raise ValidationError('cannot connect a bounded edge to a self-connected one',
                                          details={'half_edge': handles[i - 1]})
                partial.start = PartialVertex(global_vertex=previous[0])
                # running backwards along the stored half-edge
                if objects.half_edge_global_vertices(handle)[1] == previous[0]:
                    start, end = objects.half_edge_range(handle)
                    partial.boundary = (end, start)
            added.append(self.add_half_edge(partial))
        return added

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def _resolve_start(self, objects, surface, partial):
        vertex = partial.start
        if vertex.global_vertex is not None:
            objects.get(vertex.global_vertex, 'global_vertex')
            return vertex.global_vertex
        if vertex.surface_position is None:
            raise ValidationError('partial vertex has neither a surface position nor a global vertex')
        return objects.global_vertex_at(surface.point_surface_to_model(vertex.surface_position))

    def build(self, objects):
        """Insert the cycle and everything it needs; return the cycle handle."""
        surface = objects.get(self.surface, 'surface')
        count = len(self.half_edges)
        if count == 0:
            raise ValidationError('cannot build an empty cycle')

        starts = [None if p.is_self_connected else self._resolve_start(objects, surface, p)
                  for p in self.half_edges]
        if count > 1 and any(s is None for s in starts):
            raise ValidationError('self-connected half-edges must be alone in their cycle',
                                  details={'count': count})

        handles = []
        for i, partial in enumerate(self.half_edges):
            if partial.is_self_connected:
                handles.append(self._build_self_connected(objects, surface, partial))
            else:
                handles.append(self._build_bounded(objects, surface, partial,
                                                   starts[i], starts[(i + 1) % count]))

        cycle = objects.insert(Cycle(tuple(handles)))
        validate_cycle(objects, cycle)
        logger.debug('built %r with %d half-edges on %r', cycle, count, self.surface)
        return cycle

    def _global_curve(self, objects, surface, partial, fallback):
        if partial.global_curve is not None:
            return partial.global_curve
        if partial.path is not None:
            path = _lift_path(surface, partial.path)
        else:
            path = fallback()
        return objects.insert(GlobalCurve(path))

    def _local_curve(self, objects, surface, partial, global_curve):
        if partial.path is not None:
            path = partial.path
        else:
            path = surface.project_curve(objects.get(global_curve, 'global_curve').path)
        return objects.insert(Curve(path, self.surface, global_curve))

    def _build_self_connected(self, objects, surface, partial):
        if partial.global_edge is not None:
            global_edge = partial.global_edge
            global_curve = objects.get(global_edge, 'global_edge').curve
        else:
            if partial.path is None and partial.global_curve is None:
                raise ValidationError('self-connected half-edge needs a path or a global curve')
            global_curve = self._global_curve(objects, surface, partial, None)
            global_edge = objects.insert(GlobalEdge(global_curve, None))
        curve = self._local_curve(objects, surface, partial, global_curve)
        return objects.insert(HalfEdge(curve, None, global_edge, partial.reverse))

    def _build_bounded(self, objects, surface, partial, start, end):
        if start == end:
            raise ValidationError('half-edge starts and ends at the same vertex',
                                  details={'vertex': start})

        def position(handle):
            return objects.get(handle, 'global_vertex').position

        if partial.global_edge is not None:
            global_edge = objects.get(partial.global_edge, 'global_edge')
            if global_edge.vertices is None or set(global_edge.vertices) != {start, end}:
                raise ValidationError('global edge does not connect the half-edge vertices',
                                      details={'global_edge': partial.global_edge,
                                               'vertices': (start, end)})
            global_curve = global_edge.curve
            global_edge_handle = partial.global_edge
        else:
            global_curve = self._global_curve(
                objects, surface, partial,
                lambda: Line.from_points(position(start), position(end)))
            global_edge_handle = objects.insert(GlobalEdge(global_curve, (start, end)))

        curve = self._local_curve(objects, surface, partial, global_curve)
        if partial.boundary is not None:
            t0, t1 = partial.boundary
        else:
            path = objects.get(global_curve, 'global_curve').path
            t0 = path.point_to_curve_coords(position(start))
            t1 = path.point_to_curve_coords(position(end))
            if isinstance(path, Circle):
                # arcs run with the circle parameter, possibly across angle 0
                t1 = t0 + (t1 - t0) % geom.pi2
        v0 = objects.insert(Vertex(t0, curve, start))
        v1 = objects.insert(Vertex(t1, curve, end))
        return objects.insert(HalfEdge(curve, (v0, v1), global_edge_handle, t0 > t1))


__all__ = ['PartialVertex', 'PartialHalfEdge', 'PartialCycle']
