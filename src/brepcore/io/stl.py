"""STL export for brepcore meshes.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from __future__ import annotations

import logging
import struct
from typing import Iterable, List, Tuple

from brepcore.mesh import Mesh

logger = logging.getLogger(__name__)

_HEADER_SIZE = 80
_STRUCT_TRIANGLE = struct.Struct('<12fH')

Facet = Tuple[Tuple[float, float, float], ...]


def mesh_facets(mesh: Mesh) -> List[Facet]:
    """``(normal, v0, v1, v2)`` for every triangle of a 3D mesh."""
    facets = []
    for entry in mesh.triangles():
        triangle = entry.inner
        facets.append((triangle.normal(), triangle.a, triangle.b, triangle.c))
    return facets


def write_stl(mesh: Mesh, path_or_file, *, binary: bool = True, name: str = 'brepcore') -> None:
    """Write ``mesh`` to STL.

    ``path_or_file`` can be a filesystem path or an open binary/text stream.
    """
    facets = mesh_facets(mesh)
    logger.debug('writing %d facets to %r', len(facets), path_or_file)
    if binary:
        _write_binary(facets, path_or_file, name)
    else:
        _write_ascii(facets, path_or_file, name)


def _write_binary(facets: List[Facet], path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'wb')
        close_when_done = True

    try:
        header = (name[:_HEADER_SIZE]).encode('ascii', errors='replace')
        header = header.ljust(_HEADER_SIZE, b' ')
        stream.write(header)
        stream.write(struct.pack('<I', len(facets)))
        for normal, v0, v1, v2 in facets:
            stream.write(_STRUCT_TRIANGLE.pack(*normal, *v0, *v1, *v2, 0))
    finally:
        if close_when_done:
            stream.close()


def _write_ascii(facets: Iterable[Facet], path_or_file, name: str) -> None:
    close_when_done = False
    if hasattr(path_or_file, 'write'):
        stream = path_or_file
    else:
        stream = open(path_or_file, 'w', encoding='ascii')
        close_when_done = True

    try:
        print(f"solid {name}", file=stream)
        for normal, *vertices in facets:
            print(f"  facet normal {normal[0]:.6e} {normal[1]:.6e} {normal[2]:.6e}", file=stream)
            print("    outer loop", file=stream)
            for v in vertices:
                print(f"      vertex {v[0]:.6e} {v[1]:.6e} {v[2]:.6e}", file=stream)
            print("    endloop", file=stream)
            print("  endfacet", file=stream)
        print(f"endsolid {name}", file=stream)
    finally:
        if close_when_done:
            stream.close()


__all__ = ['mesh_facets', 'write_stl']
