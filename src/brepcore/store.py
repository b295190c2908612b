"""Arena storage for brepcore topology.

``Objects`` owns every topological entity and every surface.  Entities
are appended to a per-kind ``Store`` and addressed through ``Handle``
values; nothing is ever removed or modified in place.  Insertion runs
the validators in ``brepcore.validate`` first, so an entity that would
break an invariant never makes it into the store.

Copyright (c) 2025 brepcore contributors
MIT License
"""

import logging
from itertools import product
from math import floor, isfinite

from brepcore import geom
from brepcore.errors import ToleranceError, ValidationError
from brepcore.objects import KINDS, GlobalVertex, Handle, kind_of
from brepcore.validate import validate_entity, validate_objects

logger = logging.getLogger(__name__)

# 0.5 µm, assuming model units of millimeters
DEFAULT_MIN_DISTANCE = 5e-7


class Store:
    """Append-only arena of entities of a single kind."""

    def __init__(self, kind):
        self.kind = kind
        self._items = []

    def insert(self, entity):
        handle = Handle(self.kind, len(self._items))
        self._items.append(entity)
        return handle

    def get(self, handle):
        if handle not in self:
            raise ValidationError('unknown {} handle: {!r}'.format(self.kind, handle),
                                  details={'handle': handle})
        return self._items[handle.index]

    def __contains__(self, handle):
        return (isinstance(handle, Handle) and handle.kind == self.kind
                and 0 <= handle.index < len(self._items))

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        for index, entity in enumerate(self._items):
            yield Handle(self.kind, index), entity


class Objects:
    """Container for a complete boundary representation.

    Parameters
    ----------
    min_distance : float, optional
        Global vertices closer to each other than this are considered the
        same point.  Inserting a second global vertex that close to an
        existing one is rejected; ``global_vertex_at`` returns the
        existing one instead.
    """

    def __init__(self, min_distance=DEFAULT_MIN_DISTANCE):
        if not isinstance(min_distance, (int, float)) or not isfinite(min_distance) or min_distance <= 0:
            raise ToleranceError('minimum distance must be a positive number, got {!r}'.format(min_distance))
        self.min_distance = float(min_distance)
        self._stores = {kind: Store(kind) for kind in set(KINDS.values())}
        # global vertices by grid cell of side min_distance
        self._vertex_cells = {}

    # -------------------------------------------------------------------------
    # Insertion and lookup
    # -------------------------------------------------------------------------

    def insert(self, entity):
        """Validate ``entity`` and add it to the store; return its handle."""
        kind = kind_of(entity)
        try:
            validate_entity(self, entity)
        except ValidationError as exc:
            logger.debug('rejected %s: %s', kind, exc)
            raise
        handle = self._stores[kind].insert(entity)
        if kind == 'global_vertex':
            self._vertex_cells.setdefault(self._cell(entity.position), []).append(handle)
        return handle

    def get(self, handle, kind=None):
        """Resolve ``handle``, optionally checking that it has the expected kind."""
        if not isinstance(handle, Handle) or handle.kind not in self._stores:
            raise ValidationError('not a handle: {!r}'.format(handle))
        if kind is not None and handle.kind != kind:
            raise ValidationError('expected a {} handle, got {!r}'.format(kind, handle),
                                  details={'handle': handle, 'expected': kind})
        return self._stores[handle.kind].get(handle)

    def __contains__(self, handle):
        return (isinstance(handle, Handle) and handle.kind in self._stores
                and handle in self._stores[handle.kind])

    def store(self, kind):
        return self._stores[kind]

    def find_global_vertex(self, position):
        """Return the handle of the global vertex nearest to ``position``
        if it lies closer than ``min_distance``, otherwise ``None``."""
        position = geom.vec(position)
        best = None
        best_distance = self.min_distance
        store = self._stores['global_vertex']
        cx, cy, cz = self._cell(position)
        for dx, dy, dz in product((-1, 0, 1), repeat=3):
            for handle in self._vertex_cells.get((cx + dx, cy + dy, cz + dz), ()):
                distance = geom.dist(store.get(handle).position, position)
                if distance < best_distance:
                    best, best_distance = handle, distance
        return best

    def _cell(self, position):
        return tuple(int(floor(c / self.min_distance)) for c in position)

    def global_vertex_at(self, position):
        """Global vertex at ``position``, deduplicated by proximity."""
        existing = self.find_global_vertex(position)
        if existing is not None:
            return existing
        return self.insert(GlobalVertex(geom.vec(position)))

    # -------------------------------------------------------------------------
    # Traversal
    # -------------------------------------------------------------------------

    def half_edge_global_vertices(self, handle):
        """``(start, end)`` global vertex handles of a half-edge, or ``None``
        for a self-connected one."""
        half_edge = self.get(handle, 'half_edge')
        if half_edge.vertices is None:
            return None
        start, end = (self.get(v, 'vertex') for v in half_edge.vertices)
        return start.global_vertex, end.global_vertex

    def half_edge_range(self, handle):
        """``(start, end)`` curve parameters covered by a half-edge."""
        half_edge = self.get(handle, 'half_edge')
        if half_edge.vertices is None:
            return (geom.pi2, 0.0) if half_edge.reverse else (0.0, geom.pi2)
        start, end = (self.get(v, 'vertex') for v in half_edge.vertices)
        return start.position, end.position

    def face_half_edges(self, handle):
        face = self.get(handle, 'face')
        for cycle in face.all_cycles():
            yield from self.get(cycle, 'cycle').half_edges

    def face_surface(self, handle):
        return self.get(self.get(handle, 'face').surface, 'surface')

    def shell_edge_usage(self, handle):
        """Map each global edge of a shell to the faces using it.

        Returns a dict mapping global edge handle -> list of face handles,
        one entry per half-edge referring to the global edge.
        """
        shell = self.get(handle, 'shell')
        usage = {}
        for face in shell.faces:
            for half_edge in self.face_half_edges(face):
                edge = self.get(half_edge, 'half_edge').global_edge
                usage.setdefault(edge, []).append(face)
        return usage

    def summary(self):
        """Return a summary of the store contents."""
        return {kind: len(store) for kind, store in sorted(self._stores.items())}

    def validate(self):
        """Run the explicit validation pass over all cycles and shells."""
        return validate_objects(self)


__all__ = ['DEFAULT_MIN_DISTANCE', 'Store', 'Objects']
