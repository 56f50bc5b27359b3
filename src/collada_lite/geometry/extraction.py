"""Schema-driven extraction of geometry from parsed documents.

Every extractor takes the ``Header`` rooted tree produced by the grammar and
walks a fixed path of tag names. The first missing step ends the walk and the
extractor returns ``None``.

Path summary::

    library_geometries/geometry/mesh/<source id~"position">/float_array
    library_geometries/geometry/mesh/<source id~"normal">/float_array
    library_geometries/geometry/mesh/<source id~"map">/float_array
    library_geometries/geometry/mesh/triangles/p
    library_visual_scenes/visual_scene/node/matrix
"""

import math
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from collada_lite.geometry.types import (
    IDENTITY_MATRIX,
    MAX_INDEX,
    Matrix4,
    Model,
    Normal,
    Position,
    TextureCoordinates,
)
from collada_lite.tree.nodes import Header, Node, Tag
from collada_lite.tree.query import (
    extract_numbers,
    find_child_by_name,
    find_path,
    find_source,
)

GEOMETRY_PATH = ("library_geometries", "geometry", "mesh")
TRANSFORM_PATH = ("library_visual_scenes", "visual_scene", "node", "matrix")

POSITION_KEY = "position"
NORMAL_KEY = "normal"
TEXCOORD_KEY = "map"

MATRIX_SIZE = 16

G = TypeVar("G")


def _group(
    values: Sequence[float], size: int, build: Callable[..., G]
) -> List[G]:
    """Split ``values`` into consecutive groups, dropping a short tail."""
    return [
        build(*values[start:start + size])
        for start in range(0, len(values) - size + 1, size)
    ]


def group_to_positions(values: Sequence[float]) -> List[Position]:
    return _group(values, 3, Position)


def group_to_normals(values: Sequence[float]) -> List[Normal]:
    return _group(values, 3, Normal)


def group_to_tex_coords(values: Sequence[float]) -> List[TextureCoordinates]:
    return _group(values, 2, TextureCoordinates)


def to_index(value: float) -> int:
    """Convert a float to an unsigned 16-bit index.

    Fractions truncate toward zero; out-of-range values saturate, and NaN
    becomes 0.
    """
    if math.isnan(value):
        return 0
    if value >= MAX_INDEX:
        return MAX_INDEX
    if value <= 0:
        return 0
    return int(value)


def to_indices(values: Sequence[float]) -> List[int]:
    return [to_index(value) for value in values]


def to_matrix(values: Sequence[float]) -> Optional[Matrix4]:
    """Reshape 16 values into a 4x4 matrix.

    The flat list is read in column-major order: ``values[4 * row + col]``
    is stored at ``matrix[col][row]``. Any other length yields ``None``.
    """
    if len(values) != MATRIX_SIZE:
        return None
    return tuple(  # type: ignore[return-value]
        tuple(values[4 * row + col] for row in range(4)) for col in range(4)
    )


def _mesh(document: Node) -> Optional[Tag]:
    if not isinstance(document, Header):
        return None
    return find_path(document, *GEOMETRY_PATH)


def _source_numbers(document: Node, key: str) -> Optional[Tuple[float, ...]]:
    mesh = _mesh(document)
    if mesh is None:
        return None
    source = find_source(mesh, key)
    if source is None:
        return None
    return extract_numbers(find_child_by_name(source, "float_array"))


def extract_positions(
    document: Node, key: str = POSITION_KEY
) -> Optional[List[Position]]:
    """Return mesh positions, or ``None`` when any path step is missing."""
    values = _source_numbers(document, key)
    if values is None:
        return None
    return group_to_positions(values)


def extract_normals(
    document: Node, key: str = NORMAL_KEY
) -> Optional[List[Normal]]:
    """Return mesh normals, or ``None`` when any path step is missing."""
    values = _source_numbers(document, key)
    if values is None:
        return None
    return group_to_normals(values)


def extract_texture_coordinates(
    document: Node, key: str = TEXCOORD_KEY
) -> Optional[List[TextureCoordinates]]:
    """Return texture coordinates, or ``None`` when any path step is missing."""
    values = _source_numbers(document, key)
    if values is None:
        return None
    return group_to_tex_coords(values)


def extract_indices(document: Node) -> Optional[List[int]]:
    """Return the triangle index stream, or ``None`` when absent."""
    mesh = _mesh(document)
    if mesh is None:
        return None
    values = extract_numbers(find_path(mesh, "triangles", "p"))
    if values is None:
        return None
    return to_indices(values)


def extract_transform_matrix(document: Node) -> Optional[Matrix4]:
    """Return the scene node transform, or ``None`` when absent or malformed."""
    if not isinstance(document, Header):
        return None
    values = extract_numbers(find_path(document, *TRANSFORM_PATH))
    if values is None:
        return None
    return to_matrix(values)


class ExtractionError(Exception):
    """Raised by :func:`extract_model` when a required array is missing."""

    def __init__(self, message: str, component: str) -> None:
        super().__init__(message)
        self.component = component


def extract_model(
    document: Node,
    position_key: str = POSITION_KEY,
    normal_key: str = NORMAL_KEY,
    texcoord_key: str = TEXCOORD_KEY,
    require_texture_coordinates: bool = True,
    identity_when_no_transform: bool = True,
) -> Model:
    """Collect every geometry array of ``document`` into a :class:`Model`.

    Raises:
        ExtractionError: If positions, normals, indices, or (when required)
            texture coordinates cannot be found. ``component`` names the
            missing array.
    """
    positions = extract_positions(document, position_key)
    if positions is None:
        raise ExtractionError("Mesh positions not found", "positions")
    normals = extract_normals(document, normal_key)
    if normals is None:
        raise ExtractionError("Mesh normals not found", "normals")
    tex_coords = extract_texture_coordinates(document, texcoord_key)
    if tex_coords is None:
        if require_texture_coordinates:
            raise ExtractionError("Texture coordinates not found", "tex_coords")
        tex_coords = []
    indices = extract_indices(document)
    if indices is None:
        raise ExtractionError("Triangle indices not found", "indices")

    transform = extract_transform_matrix(document)
    if transform is None and not identity_when_no_transform:
        raise ExtractionError("Transform matrix not found", "transform")

    return Model(
        positions=positions,
        normals=normals,
        tex_coords=tex_coords,
        indices=indices,
        transform=transform or IDENTITY_MATRIX,
        has_transform=transform is not None,
    )
