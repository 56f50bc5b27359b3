"""Geometry value types handed to rendering code."""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Tuple

Matrix4 = Tuple[
    Tuple[float, float, float, float],
    Tuple[float, float, float, float],
    Tuple[float, float, float, float],
    Tuple[float, float, float, float],
]

IDENTITY_MATRIX: Matrix4 = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)

# Largest value an unsigned 16-bit index can hold.
MAX_INDEX = 0xFFFF


class Position(NamedTuple):
    """Vertex position."""

    x: float
    y: float
    z: float


class Normal(NamedTuple):
    """Vertex normal."""

    x: float
    y: float
    z: float


class TextureCoordinates(NamedTuple):
    """Texture coordinates."""

    u: float
    v: float


@dataclass(frozen=True)
class Vertex:
    """Interleaved vertex record."""

    position: Position = Position(0.0, 0.0, 0.0)
    normal: Normal = Normal(0.0, 0.0, 0.0)
    tex_coords: TextureCoordinates = TextureCoordinates(0.0, 0.0)

    def as_tuple(self) -> Tuple[float, ...]:
        """Flatten to ``(px, py, pz, nx, ny, nz, u, v)``."""
        return (*self.position, *self.normal, *self.tex_coords)


@dataclass(frozen=True)
class IndexedVertices:
    """Deduplicated vertices with an index buffer into them."""

    vertices: Tuple[Vertex, ...]
    indices: Tuple[int, ...]


@dataclass
class Model:
    """Geometry recovered from one document."""

    positions: List[Position] = field(default_factory=list)
    normals: List[Normal] = field(default_factory=list)
    tex_coords: List[TextureCoordinates] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    transform: Matrix4 = IDENTITY_MATRIX
    has_transform: bool = False

    @property
    def triangle_count(self) -> int:
        """Number of complete triangles described by the index stream."""
        return len(self.indices) // 9

    def vertices(self) -> Optional[List[Vertex]]:
        """Interleave the arrays; ``None`` when an index is out of range."""
        from collada_lite.geometry.packing import pack_vertices

        return pack_vertices(self.positions, self.normals, self.tex_coords, self.indices)

    def indexed(self) -> Optional[IndexedVertices]:
        """Deduplicated vertex buffer; ``None`` when packing fails."""
        from collada_lite.geometry.packing import pack_indexed_vertices

        return pack_indexed_vertices(
            self.positions, self.normals, self.tex_coords, self.indices
        )
