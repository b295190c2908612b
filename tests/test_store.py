"""Tests for the entity store and its validation."""

import pytest

from brepcore.curves import Circle, Line
from brepcore.errors import ToleranceError, ValidationError
from brepcore.objects import (Curve, Cycle, Face, GlobalCurve, GlobalEdge,
                              GlobalVertex, HalfEdge, Handle, Shell, Vertex)
from brepcore.store import DEFAULT_MIN_DISTANCE, Objects
from brepcore.surfaces import Plane
from brepcore.validate import compute_shell_closure, validate_cycle, validate_shell


def _segment(objects, surface, a, b):
    """Bounded half-edge from model point ``a`` to ``b`` on ``surface``."""
    ga = objects.global_vertex_at(a)
    gb = objects.global_vertex_at(b)
    gc = objects.insert(GlobalCurve(Line.from_points(a, b)))
    ge = objects.insert(GlobalEdge(gc, (ga, gb)))
    plane = objects.get(surface)
    curve = objects.insert(Curve(plane.project_curve(objects.get(gc).path), surface, gc))
    v0 = objects.insert(Vertex(0.0, curve, ga))
    v1 = objects.insert(Vertex(1.0, curve, gb))
    return objects.insert(HalfEdge(curve, (v0, v1), ge))


class TestHandles:
    """Test handle identity and lookup."""

    def test_handle_identity(self):
        assert Handle('face', 1) == Handle('face', 1)
        assert Handle('face', 1) != Handle('shell', 1)
        assert repr(Handle('face', 3)) == 'face#3'
        assert len({Handle('face', 1), Handle('face', 1)}) == 1

    def test_equal_entities_get_distinct_handles(self):
        objects = Objects()
        a = objects.insert(Plane.x_y_plane())
        b = objects.insert(Plane.x_y_plane())
        assert a != b
        assert objects.get(a) == objects.get(b)

    def test_get_checks_kind(self):
        objects = Objects()
        plane = objects.insert(Plane.x_y_plane())
        assert objects.get(plane, 'surface') == Plane.x_y_plane()
        with pytest.raises(ValidationError):
            objects.get(plane, 'face')

    def test_unknown_handle(self):
        objects = Objects()
        with pytest.raises(ValidationError):
            objects.get(Handle('global_vertex', 0))
        with pytest.raises(ValidationError):
            objects.get('not a handle')
        assert Handle('global_vertex', 0) not in objects

    def test_store_iteration(self):
        objects = Objects()
        handles = [objects.global_vertex_at((i, 0, 0)) for i in range(3)]
        store = objects.store('global_vertex')
        assert len(store) == 3
        assert [h for h, _ in store] == handles
        assert objects.summary()['global_vertex'] == 3


class TestGlobalVertices:
    """Test vertex uniqueness."""

    def test_min_distance_must_be_positive(self):
        with pytest.raises(ToleranceError):
            Objects(min_distance=0)
        with pytest.raises(ToleranceError):
            Objects(min_distance=float('nan'))
        assert Objects().min_distance == DEFAULT_MIN_DISTANCE

    def test_too_close_rejected(self):
        objects = Objects()
        objects.insert(GlobalVertex((0.0, 0.0, 0.0)))
        with pytest.raises(ValidationError) as excinfo:
            objects.insert(GlobalVertex((1e-7, 0.0, 0.0)))
        assert 'existing' in excinfo.value.details
        assert len(objects.store('global_vertex')) == 1

    def test_far_enough_accepted(self):
        objects = Objects()
        objects.insert(GlobalVertex((0.0, 0.0, 0.0)))
        objects.insert(GlobalVertex((1e-6, 0.0, 0.0)))
        assert len(objects.store('global_vertex')) == 2

    def test_global_vertex_at_deduplicates(self):
        objects = Objects()
        a = objects.global_vertex_at((1, 2, 3))
        b = objects.global_vertex_at((1, 2, 3 + 1e-8))
        c = objects.global_vertex_at((1, 2, 4))
        assert a == b
        assert a != c

    def test_lookup_across_cells(self):
        objects = Objects(min_distance=1.0)
        a = objects.insert(GlobalVertex((0.99, 0.0, 0.0)))
        b = objects.insert(GlobalVertex((-0.5, -0.5, -0.5)))
        assert objects.find_global_vertex((1.5, 0.0, 0.0)) == a
        assert objects.find_global_vertex((-1.2, -0.5, -0.5)) == b
        assert objects.find_global_vertex((2.0, 0.0, 0.0)) is None

    def test_lookup_picks_nearest(self):
        objects = Objects(min_distance=1.0)
        objects.insert(GlobalVertex((0.0, 0.0, 0.0)))
        far = objects.insert(GlobalVertex((1.5, 0.0, 0.0)))
        assert objects.find_global_vertex((0.8, 0.0, 0.0)) == far

    def test_many_vertices(self):
        objects = Objects(min_distance=1e-4)
        handles = {}
        for i in range(10):
            for j in range(10):
                for k in range(10):
                    position = (i * 1e-3, j * 1e-3, k * 1e-3)
                    handles[position] = objects.global_vertex_at(position)
        assert len(objects.store('global_vertex')) == 1000
        for (x, y, z), handle in handles.items():
            assert objects.global_vertex_at((x + 2e-5, y - 2e-5, z)) == handle


class TestInsertValidation:
    """Test the checks run before an entity is stored."""

    def test_vertex_must_match_global_vertex(self):
        objects = Objects()
        surface = objects.insert(Plane.x_y_plane())
        gc = objects.insert(GlobalCurve(Line((0, 0, 0), (1, 0, 0))))
        curve = objects.insert(Curve(Line((0, 0), (1, 0)), surface, gc))
        far = objects.global_vertex_at((5, 0, 0))
        with pytest.raises(ValidationError):
            objects.insert(Vertex(1.0, curve, far))
        assert len(objects.store('vertex')) == 0

    def test_local_curve_must_match_global_curve(self):
        objects = Objects()
        surface = objects.insert(Plane.x_y_plane())
        gc = objects.insert(GlobalCurve(Line((0, 0, 0), (1, 0, 0))))
        with pytest.raises(ValidationError):
            objects.insert(Curve(Line((0, 0), (2, 0)), surface, gc))

    def test_curve_dimensions(self):
        objects = Objects()
        with pytest.raises(ValidationError):
            objects.insert(GlobalCurve(Line((0, 0), (1, 0))))

    def test_open_curve_cannot_be_self_connected(self):
        objects = Objects()
        gc = objects.insert(GlobalCurve(Line((0, 0, 0), (1, 0, 0))))
        with pytest.raises(ValidationError):
            objects.insert(GlobalEdge(gc, None))
        circle = objects.insert(GlobalCurve(Circle((0, 0, 0), (1, 0, 0), (0, 1, 0))))
        objects.insert(GlobalEdge(circle, None))

    def test_edge_vertices_must_be_on_curve(self):
        objects = Objects()
        gc = objects.insert(GlobalCurve(Line((0, 0, 0), (1, 0, 0))))
        a = objects.global_vertex_at((0, 0, 0))
        off = objects.global_vertex_at((0, 1, 0))
        with pytest.raises(ValidationError):
            objects.insert(GlobalEdge(gc, (a, off)))
        with pytest.raises(ValidationError):
            objects.insert(GlobalEdge(gc, (a, a)))

    def test_half_edge_must_match_global_edge(self):
        objects = Objects()
        surface = objects.insert(Plane.x_y_plane())
        he = _segment(objects, surface, (0, 0, 0), (1, 0, 0))
        half_edge = objects.get(he)
        other = _segment(objects, surface, (0, 1, 0), (1, 1, 0))
        with pytest.raises(ValidationError):
            objects.insert(HalfEdge(half_edge.curve, half_edge.vertices,
                                    objects.get(other).global_edge))

    def test_half_edge_direction_flag(self):
        objects = Objects()
        surface = objects.insert(Plane.x_y_plane())
        half_edge = objects.get(_segment(objects, surface, (0, 0, 0), (1, 0, 0)))
        assert not half_edge.reverse
        with pytest.raises(ValidationError):
            objects.insert(HalfEdge(half_edge.curve, half_edge.vertices,
                                    half_edge.global_edge, True))
        backwards = tuple(reversed(half_edge.vertices))
        objects.insert(HalfEdge(half_edge.curve, backwards, half_edge.global_edge, True))
        with pytest.raises(ValidationError):
            objects.insert(HalfEdge(half_edge.curve, backwards, half_edge.global_edge))

    def test_face_curves_must_be_on_face_surface(self):
        objects = Objects()
        surface = objects.insert(Plane.x_y_plane())
        other = objects.insert(Plane.x_y_plane())
        cycle = objects.insert(Cycle((_segment(objects, surface, (0, 0, 0), (1, 0, 0)),)))
        with pytest.raises(ValidationError):
            objects.insert(Face(other, cycle))

    def test_empty_cycle(self):
        with pytest.raises(ValidationError):
            Objects().insert(Cycle(()))

    def test_not_an_entity(self):
        with pytest.raises(TypeError):
            Objects().insert((1, 2, 3))


class TestExplicitValidation:
    """Test cycle closure and shell closure passes."""

    def _triangle(self, objects, close=True):
        surface = objects.insert(Plane.x_y_plane())
        points = [(0, 0, 0), (1, 0, 0), (0, 1, 0)]
        edges = [_segment(objects, surface, points[0], points[1]),
                 _segment(objects, surface, points[1], points[2])]
        if close:
            edges.append(_segment(objects, surface, points[2], points[0]))
        return surface, objects.insert(Cycle(tuple(edges)))

    def test_closed_cycle(self):
        objects = Objects()
        _, cycle = self._triangle(objects)
        validate_cycle(objects, cycle)

    def test_open_cycle(self):
        objects = Objects()
        _, cycle = self._triangle(objects, close=False)
        with pytest.raises(ValidationError) as excinfo:
            validate_cycle(objects, cycle)
        assert excinfo.value.details['cycle'] == cycle

    def test_open_shell(self):
        objects = Objects()
        surface, cycle = self._triangle(objects)
        face = objects.insert(Face(surface, cycle))
        shell = objects.insert(Shell((face,)))
        is_closed, details = compute_shell_closure(objects, shell)
        assert not is_closed
        assert len(details['boundary_edges']) == 3
        with pytest.raises(ValidationError):
            validate_shell(objects, shell)
        with pytest.raises(ValidationError):
            objects.validate()

    def test_edge_usage(self):
        objects = Objects()
        surface, cycle = self._triangle(objects)
        face = objects.insert(Face(surface, cycle))
        shell = objects.insert(Shell((face,)))
        usage = objects.shell_edge_usage(shell)
        assert len(usage) == 3
        assert all(faces == [face] for faces in usage.values())

    def test_validate_counts(self):
        objects = Objects()
        self._triangle(objects)
        assert objects.validate() == 1
