"""Validation of brepcore topology.

Two kinds of checks live here:

- insert-time checks (``validate_entity``), run by ``Objects.insert``
  for every entity before it is stored;
- explicit passes (``validate_cycle``, ``validate_shell``,
  ``validate_objects``) that walk already stored topology.  Cycle
  closure is established by the builders; these passes only confirm it.

All failures raise ``ValidationError`` with a ``details`` dict.

Copyright (c) 2025 brepcore contributors
MIT License
"""

import logging

from brepcore import geom
from brepcore.errors import ValidationError
from brepcore.objects import (Curve, Cycle, Face, GlobalCurve, GlobalEdge,
                              GlobalVertex, HalfEdge, Shell, Vertex)
from brepcore.surfaces import is_surface

logger = logging.getLogger(__name__)


def _position_tolerance(objects):
    return max(objects.min_distance, geom.epsilon)


# -----------------------------------------------------------------------------
# Insert-time validation
# -----------------------------------------------------------------------------

def _validate_global_vertex(objects, vertex):
    if len(vertex.position) != 3:
        raise ValidationError('global vertex position must be 3D',
                              details={'position': vertex.position})
    existing = objects.find_global_vertex(vertex.position)
    if existing is not None:
        other = objects.get(existing).position
        raise ValidationError(
            'global vertex is closer than the minimum distance to an existing vertex',
            details={'position': vertex.position, 'existing': existing,
                     'distance': geom.dist(other, vertex.position),
                     'min_distance': objects.min_distance})


def _curve_model_point(objects, curve, t):
    surface = objects.get(curve.surface, 'surface')
    return surface.point_surface_to_model(curve.path.point_from_curve_coords(t))


def _validate_vertex(objects, vertex):
    curve = objects.get(vertex.curve, 'curve')
    global_vertex = objects.get(vertex.global_vertex, 'global_vertex')
    position = _curve_model_point(objects, curve, vertex.position)
    distance = geom.dist(position, global_vertex.position)
    if distance > _position_tolerance(objects):
        raise ValidationError('vertex does not coincide with its global vertex',
                              details={'vertex': position,
                                       'global_vertex': global_vertex.position,
                                       'distance': distance})


def _validate_global_curve(objects, curve):
    if curve.path.dim != 3:
        raise ValidationError('global curves must be 3D', details={'path': curve.path})


def _validate_curve(objects, curve):
    if curve.path.dim != 2:
        raise ValidationError('local curves must be 2D', details={'path': curve.path})
    global_curve = objects.get(curve.global_curve, 'global_curve')
    # local and global forms share their parametrization
    for t in (0.0, 1.0):
        local = _curve_model_point(objects, curve, t)
        expected = global_curve.path.point_from_curve_coords(t)
        if geom.dist(local, expected) > _position_tolerance(objects):
            raise ValidationError('local curve does not match its global curve',
                                  details={'parameter': t, 'local': local, 'global': expected})


def _validate_global_edge(objects, edge):
    curve = objects.get(edge.curve, 'global_curve').path
    if edge.vertices is None:
        if not curve.is_closed:
            raise ValidationError('only closed curves can carry self-connected edges',
                                  details={'curve': curve})
        return
    a, b = edge.vertices
    if a == b:
        raise ValidationError('bounded edge must connect two distinct vertices',
                              details={'vertices': edge.vertices})
    for handle in edge.vertices:
        position = objects.get(handle, 'global_vertex').position
        on_curve = curve.point_from_curve_coords(curve.point_to_curve_coords(position))
        if geom.dist(on_curve, position) > _position_tolerance(objects):
            raise ValidationError('edge vertex is not on the edge curve',
                                  details={'vertex': handle, 'position': position})


def _validate_half_edge(objects, half_edge):
    curve = objects.get(half_edge.curve, 'curve')
    global_edge = objects.get(half_edge.global_edge, 'global_edge')
    if curve.global_curve != global_edge.curve:
        raise ValidationError('half-edge curve and global edge refer to different global curves',
                              details={'curve': curve.global_curve, 'global_edge': global_edge.curve})
    if (half_edge.vertices is None) != (global_edge.vertices is None):
        raise ValidationError('half-edge and global edge disagree on being self-connected',
                              details={'half_edge': half_edge.vertices, 'global_edge': global_edge.vertices})
    if half_edge.vertices is None:
        return
    start, end = (objects.get(v, 'vertex') for v in half_edge.vertices)
    for vertex in (start, end):
        if vertex.curve != half_edge.curve:
            raise ValidationError('half-edge vertices must lie on the half-edge curve',
                                  details={'vertex_curve': vertex.curve, 'curve': half_edge.curve})
    if geom.close(start.position, end.position):
        raise ValidationError('half-edge has zero length',
                              details={'position': start.position})
    if half_edge.reverse != (start.position > end.position):
        raise ValidationError('bounded half-edge direction flag does not match its vertices',
                              details={'reverse': half_edge.reverse,
                                       'range': (start.position, end.position)})
    if {start.global_vertex, end.global_vertex} != set(global_edge.vertices):
        raise ValidationError('half-edge vertices do not match its global edge',
                              details={'half_edge': (start.global_vertex, end.global_vertex),
                                       'global_edge': global_edge.vertices})


def _validate_cycle(objects, cycle):
    if not cycle.half_edges:
        raise ValidationError('cycle has no half-edges')
    for handle in cycle.half_edges:
        objects.get(handle, 'half_edge')


def _validate_face(objects, face):
    objects.get(face.surface, 'surface')
    for cycle_handle in face.all_cycles():
        cycle = objects.get(cycle_handle, 'cycle')
        for handle in cycle.half_edges:
            curve = objects.get(objects.get(handle).curve)
            if curve.surface != face.surface:
                raise ValidationError('half-edge curve is not on the face surface',
                                      details={'half_edge': handle, 'surface': curve.surface,
                                               'face_surface': face.surface})


def _validate_shell(objects, shell):
    for handle in shell.faces:
        objects.get(handle, 'face')


_VALIDATORS = {
    GlobalVertex: _validate_global_vertex,
    Vertex: _validate_vertex,
    GlobalCurve: _validate_global_curve,
    Curve: _validate_curve,
    GlobalEdge: _validate_global_edge,
    HalfEdge: _validate_half_edge,
    Cycle: _validate_cycle,
    Face: _validate_face,
    Shell: _validate_shell,
}


def validate_entity(objects, entity):
    """Raise ``ValidationError`` if ``entity`` may not be inserted into ``objects``."""
    if is_surface(entity):
        return
    validator = _VALIDATORS.get(type(entity))
    if validator is None:
        raise TypeError('not a topological entity: {!r}'.format(entity))
    validator(objects, entity)


# -----------------------------------------------------------------------------
# Explicit validation passes
# -----------------------------------------------------------------------------

def validate_cycle(objects, handle):
    """Confirm that the half-edges of a stored cycle connect end to start.

    A self-connected half-edge must be the only half-edge of its cycle.
    """
    cycle = objects.get(handle, 'cycle')
    ends = [objects.half_edge_global_vertices(h) for h in cycle.half_edges]
    if any(e is None for e in ends):
        if len(ends) != 1:
            raise ValidationError('self-connected half-edge shares a cycle with other half-edges',
                                  details={'cycle': handle})
        return
    for i, (_, end) in enumerate(ends):
        start_of_next = ends[(i + 1) % len(ends)][0]
        if end != start_of_next:
            raise ValidationError('cycle is not closed',
                                  details={'cycle': handle, 'index': i,
                                           'end': end, 'next_start': start_of_next})


def compute_shell_closure(objects, handle):
    """Compute whether a shell is topologically closed.

    A shell is closed if every global edge is used by exactly two
    half-edges of its faces.

    Returns
    -------
    tuple
        (is_closed: bool, details: dict) where details contains
        'edge_usage', 'boundary_edges' and 'non_manifold_edges'.
    """
    usage = objects.shell_edge_usage(handle)
    boundary = [edge for edge, faces in usage.items() if len(faces) == 1]
    non_manifold = [edge for edge, faces in usage.items() if len(faces) > 2]
    details = {
        'edge_usage': usage,
        'boundary_edges': boundary,
        'non_manifold_edges': non_manifold,
    }
    return not boundary and not non_manifold, details


def validate_shell(objects, handle):
    """Validate the cycles of every face of a shell and its closure.

    Returns the closure details if validation passes.
    """
    shell = objects.get(handle, 'shell')
    for face in shell.faces:
        for cycle in objects.get(face, 'face').all_cycles():
            validate_cycle(objects, cycle)

    is_closed, details = compute_shell_closure(objects, handle)
    if not is_closed:
        messages = []
        if details['boundary_edges']:
            messages.append('{} boundary edge(s)'.format(len(details['boundary_edges'])))
        if details['non_manifold_edges']:
            messages.append('{} non-manifold edge(s)'.format(len(details['non_manifold_edges'])))
        raise ValidationError('shell is not closed: {}'.format('; '.join(messages)), details)
    return details


def validate_objects(objects):
    """Validate every stored cycle and shell; return the number checked."""
    count = 0
    for handle, _ in objects.store('cycle'):
        validate_cycle(objects, handle)
        count += 1
    for handle, _ in objects.store('shell'):
        validate_shell(objects, handle)
        count += 1
    logger.debug('validated %d cycles and shells', count)
    return count


__all__ = [
    'validate_entity',
    'validate_cycle',
    'compute_shell_closure',
    'validate_shell',
    'validate_objects',
]
