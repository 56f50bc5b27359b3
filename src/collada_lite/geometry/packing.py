"""Vertex packing: resolve index triples into interleaved vertex records.

The index stream has stride three, ``(position, normal, texcoord)``
repeating. A trailing group with fewer than three indices is ignored. If any
index points outside its array the whole operation fails with ``None``; a
partial buffer is never returned.
"""

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from collada_lite.geometry.types import (
    MAX_INDEX,
    IndexedVertices,
    Normal,
    Position,
    TextureCoordinates,
    Vertex,
)

IndexTriple = Tuple[int, int, int]


def _triples(indices: Sequence[int]) -> Iterator[IndexTriple]:
    for start in range(0, len(indices) - 2, 3):
        yield indices[start], indices[start + 1], indices[start + 2]


def _in_range(index: int, size: int) -> bool:
    return 0 <= index < size


def _resolve(
    triple: IndexTriple,
    positions: Sequence[Position],
    normals: Sequence[Normal],
    tex_coords: Sequence[TextureCoordinates],
) -> Optional[Vertex]:
    position_index, normal_index, tex_index = triple
    if not (
        _in_range(position_index, len(positions))
        and _in_range(normal_index, len(normals))
        and _in_range(tex_index, len(tex_coords))
    ):
        return None
    return Vertex(
        position=positions[position_index],
        normal=normals[normal_index],
        tex_coords=tex_coords[tex_index],
    )


def pack_vertices(
    positions: Sequence[Position],
    normals: Sequence[Normal],
    tex_coords: Sequence[TextureCoordinates],
    indices: Sequence[int],
) -> Optional[List[Vertex]]:
    """Build one vertex per index triple, in index-stream order.

    Args:
        positions: Source positions
        normals: Source normals
        tex_coords: Source texture coordinates
        indices: Interleaved ``(position, normal, texcoord)`` indices

    Returns:
        Vertex list, or ``None`` if any index is out of range
    """
    vertices: List[Vertex] = []
    for triple in _triples(indices):
        vertex = _resolve(triple, positions, normals, tex_coords)
        if vertex is None:
            return None
        vertices.append(vertex)
    return vertices


def pack_indexed_vertices(
    positions: Sequence[Position],
    normals: Sequence[Normal],
    tex_coords: Sequence[TextureCoordinates],
    indices: Sequence[int],
) -> Optional[IndexedVertices]:
    """Build a deduplicated vertex buffer and a 16-bit index buffer.

    Identical index triples share a vertex; vertices appear in order of first
    use. Fails when any index is out of range or the distinct vertices do not
    fit 16-bit indices.
    """
    vertices: List[Vertex] = []
    packed: List[int] = []
    seen: Dict[IndexTriple, int] = {}
    for triple in _triples(indices):
        slot = seen.get(triple)
        if slot is None:
            vertex = _resolve(triple, positions, normals, tex_coords)
            if vertex is None:
                return None
            slot = len(vertices)
            if slot > MAX_INDEX:
                return None
            seen[triple] = slot
            vertices.append(vertex)
        packed.append(slot)
    return IndexedVertices(vertices=tuple(vertices), indices=tuple(packed))
