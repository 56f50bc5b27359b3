"""Tests for vertex packing and the geometry value types."""

import itertools

from collada_lite.geometry import (
    IndexedVertices,
    Model,
    Normal,
    Position,
    TextureCoordinates,
    Vertex,
    pack_indexed_vertices,
    pack_vertices,
)

POSITIONS = [Position(0, 0, 0), Position(1, 0, 0), Position(0, 1, 0)]
NORMALS = [Normal(0, 0, 1)]
TEX_COORDS = [TextureCoordinates(0, 0), TextureCoordinates(1, 1)]


class TestPackVertices:
    """Test interleaved vertex packing."""

    def test_resolves_triples(self):
        """Test one vertex per index triple in stream order."""
        vertices = pack_vertices(POSITIONS, NORMALS, TEX_COORDS, [2, 0, 1, 0, 0, 0])
        assert vertices == [
            Vertex(Position(0, 1, 0), Normal(0, 0, 1), TextureCoordinates(1, 1)),
            Vertex(Position(0, 0, 0), Normal(0, 0, 1), TextureCoordinates(0, 0)),
        ]

    def test_position_out_of_range(self):
        """Test that position index 5 against three positions fails."""
        assert pack_vertices(POSITIONS, NORMALS, TEX_COORDS, [5, 0, 0]) is None

    def test_any_out_of_range_fails_whole_buffer(self):
        """Test every slot with every bad index, after valid triples."""
        valid = [0, 0, 0, 1, 0, 1]
        bad_values = {0: [3, 65535], 1: [1, 9], 2: [2, 400]}
        for slot, values in bad_values.items():
            for value in values:
                triple = [0, 0, 0]
                triple[slot] = value
                assert pack_vertices(POSITIONS, NORMALS, TEX_COORDS, valid + triple) is None
                assert pack_indexed_vertices(
                    POSITIONS, NORMALS, TEX_COORDS, valid + triple
                ) is None

    def test_every_in_range_triple_packs(self):
        """Test that all in-range combinations succeed."""
        for triple in itertools.product(range(3), range(1), range(2)):
            vertices = pack_vertices(POSITIONS, NORMALS, TEX_COORDS, list(triple))
            assert vertices is not None
            assert len(vertices) == 1

    def test_incomplete_group_ignored(self):
        """Test that a trailing partial triple is dropped."""
        vertices = pack_vertices(POSITIONS, NORMALS, TEX_COORDS, [0, 0, 0, 1, 9])
        assert vertices is not None
        assert len(vertices) == 1

    def test_empty_stream(self):
        """Test that no indices give no vertices."""
        assert pack_vertices(POSITIONS, NORMALS, TEX_COORDS, []) == []

    def test_vertex_flattening(self):
        """Test the flat tuple layout of a vertex."""
        vertex = Vertex(Position(1, 2, 3), Normal(4, 5, 6), TextureCoordinates(7, 8))
        assert vertex.as_tuple() == (1, 2, 3, 4, 5, 6, 7, 8)


class TestPackIndexedVertices:
    """Test deduplicated packing."""

    def test_shared_triples(self):
        """Test that repeated triples reuse one vertex."""
        indexed = pack_indexed_vertices(
            POSITIONS, NORMALS, TEX_COORDS, [0, 0, 0, 1, 0, 1, 0, 0, 0, 2, 0, 1]
        )
        assert isinstance(indexed, IndexedVertices)
        assert len(indexed.vertices) == 3
        assert indexed.indices == (0, 1, 0, 2)

    def test_matches_plain_packing(self):
        """Test that expanding the index buffer gives the plain vertices."""
        indices = [0, 0, 0, 1, 0, 1, 2, 0, 1, 1, 0, 1, 0, 0, 0]
        indexed = pack_indexed_vertices(POSITIONS, NORMALS, TEX_COORDS, indices)
        expanded = [indexed.vertices[i] for i in indexed.indices]
        assert expanded == pack_vertices(POSITIONS, NORMALS, TEX_COORDS, indices)


class TestModel:
    """Test the model bundle."""

    def test_vertices_and_indexed(self):
        """Test packing through the model helpers."""
        model = Model(
            positions=list(POSITIONS),
            normals=list(NORMALS),
            tex_coords=list(TEX_COORDS),
            indices=[0, 0, 0, 1, 0, 1, 2, 0, 1],
        )
        assert model.triangle_count == 1
        assert len(model.vertices()) == 3
        assert len(model.indexed().vertices) == 3

    def test_bad_indices(self):
        """Test that a model with a bad index cannot be packed."""
        model = Model(positions=list(POSITIONS), indices=[0, 0, 0])
        assert model.vertices() is None
        assert model.indexed() is None
