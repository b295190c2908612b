"""Tests for face and shell triangulation."""

import math

from brepcore import geom
from brepcore.approx import ApproxCache, number_of_vertices_for_circle
from brepcore.builder import FaceBuilder, ShellBuilder
from brepcore.mesh import Mesh, Triangle
from brepcore.operations import sweep_face
from brepcore.store import Objects
from brepcore.surfaces import Plane
from brepcore.triangulate import triangulate_face, triangulate_shell


def _total_area(triangles):
    return sum(t.area() for t in triangles)


def _normals_agree(triangles, normal):
    return all(geom.dot(t.normal(), normal) > 0 for t in triangles)


class TestTriangulateFace:
    """Test triangulation of single faces."""

    def test_square(self):
        objects = Objects()
        face = FaceBuilder.polygon(objects, Plane.x_y_plane(), [(0, 0), (1, 0), (1, 1), (0, 1)])
        triangles = triangulate_face(objects, face, 0.01)
        assert len(triangles) == 2
        assert math.isclose(_total_area(triangles), 1.0)
        assert _normals_agree(triangles, (0, 0, 1))

    def test_reversed_plane(self):
        objects = Objects()
        face = FaceBuilder.polygon(objects, Plane.x_y_plane().reverse(),
                                   [(0, 0), (1, 0), (1, 1), (0, 1)])
        triangles = triangulate_face(objects, face, 0.01)
        assert _normals_agree(triangles, (0, 0, -1))

    def test_square_with_hole(self):
        objects = Objects()
        face = FaceBuilder.polygon(objects, Plane.x_y_plane(),
                                   [(0, 0), (4, 0), (4, 4), (0, 4)],
                                   interiors=[[(1, 1), (3, 1), (3, 3), (1, 3)]])
        triangles = triangulate_face(objects, face, 0.01)
        assert math.isclose(_total_area(triangles), 12.0)
        assert _normals_agree(triangles, (0, 0, 1))

    def test_disk(self):
        objects = Objects()
        face = FaceBuilder.circle(objects, Plane.x_y_plane(), (0, 0), 1.0)
        triangles = triangulate_face(objects, face, 1e-3)
        n = number_of_vertices_for_circle(1e-3, 1.0)
        assert len(triangles) == n - 2
        polygon_area = 0.5 * n * math.sin(geom.pi2 / n)
        assert math.isclose(_total_area(triangles), polygon_area, rel_tol=1e-9)
        assert _normals_agree(triangles, (0, 0, 1))


class TestTriangulateShell:
    """Test triangulation of closed shells into meshes."""

    def test_tetrahedron(self):
        objects = Objects()
        points = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]
        shell = ShellBuilder.tetrahedron(objects, points)
        mesh = triangulate_shell(objects, shell, 0.01)
        assert isinstance(mesh, Mesh)
        assert len(mesh) == 4
        assert mesh.vertex_count == 4
        assert mesh.contains_triangle(Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0)))
        centroid = (0.25, 0.25, 0.25)
        for entry in mesh.triangles():
            tri = entry.inner
            outward = geom.sub(tri.a, centroid)
            assert geom.dot(tri.normal(), outward) > 0

    def test_cylinder_is_watertight(self):
        objects = Objects()
        disk = FaceBuilder.circle(objects, Plane.x_y_plane(), (0, 0), 1.0)
        shell = sweep_face(objects, disk, (0, 0, 2))
        cache = ApproxCache()
        mesh = triangulate_shell(objects, shell, 0.01, cache)
        n = number_of_vertices_for_circle(0.01, 1.0)
        # two rings of n vertices, shared by caps and side wall
        assert mesh.vertex_count == 2 * n
        assert len(mesh) == 2 * (n - 2) + 2 * n

        # every edge of a closed triangle mesh is used exactly twice,
        # once in each direction
        directed = {}
        for entry in mesh.triangles():
            a, b, c = entry.inner.points
            for edge in ((a, b), (b, c), (c, a)):
                directed[edge] = directed.get(edge, 0) + 1
        assert all(count == 1 for count in directed.values())
        assert all((b, a) in directed for a, b in directed)

    def test_cylinder_normals_point_outward(self):
        objects = Objects()
        disk = FaceBuilder.circle(objects, Plane.x_y_plane(), (0, 0), 1.0)
        shell = sweep_face(objects, disk, (0, 0, 2))
        mesh = triangulate_shell(objects, shell, 0.05)
        for entry in mesh.triangles():
            tri = entry.inner
            center = geom.scale(geom.add(geom.add(tri.a, tri.b), tri.c), 1.0 / 3.0)
            outward = geom.sub(center, (0.0, 0.0, 1.0))
            assert geom.dot(tri.normal(), outward) > 0

    def test_shell_color(self):
        objects = Objects()
        shell = ShellBuilder.tetrahedron(objects, [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)],
                                         color=(1, 2, 3, 4))
        mesh = triangulate_shell(objects, shell, 0.01)
        assert {t.color for t in mesh.triangles()} == {(1, 2, 3, 4)}
