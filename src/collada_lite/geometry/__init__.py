"""Geometry extraction and vertex packing.

Key Components:
    extract_positions, extract_normals, extract_texture_coordinates,
    extract_indices, extract_transform_matrix: Fixed-path tree walks
    extract_model: Collect all arrays of a document into a Model
    pack_vertices: Interleave arrays through the index stream
    pack_indexed_vertices: Deduplicated vertex and index buffers
"""

from .extraction import (
    ExtractionError,
    extract_indices,
    extract_model,
    extract_normals,
    extract_positions,
    extract_texture_coordinates,
    extract_transform_matrix,
    group_to_normals,
    group_to_positions,
    group_to_tex_coords,
    to_index,
    to_indices,
    to_matrix,
)
from .packing import pack_indexed_vertices, pack_vertices
from .types import (
    IDENTITY_MATRIX,
    IndexedVertices,
    Matrix4,
    Model,
    Normal,
    Position,
    TextureCoordinates,
    Vertex,
)

__all__ = [
    "IDENTITY_MATRIX",
    "ExtractionError",
    "IndexedVertices",
    "Matrix4",
    "Model",
    "Normal",
    "Position",
    "TextureCoordinates",
    "Vertex",
    "extract_indices",
    "extract_model",
    "extract_normals",
    "extract_positions",
    "extract_texture_coordinates",
    "extract_transform_matrix",
    "group_to_normals",
    "group_to_positions",
    "group_to_tex_coords",
    "pack_indexed_vertices",
    "pack_vertices",
    "to_index",
    "to_indices",
    "to_matrix",
]
