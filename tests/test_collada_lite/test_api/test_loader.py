"""Tests for the model loading API."""

import io
from pathlib import Path

import pytest

from collada_lite import (
    LoaderConfig,
    LoadResult,
    ModelLoader,
    ModelLoadError,
    load_model,
    load_model_file,
    parse_string,
)
from collada_lite.geometry import IDENTITY_MATRIX
from collada_lite.shared import DiagnosticSeverity
from collada_lite.tree import Header, Numbers, Tag


def _without(text: str, start: str, end: str) -> str:
    head, _, rest = text.partition(start)
    _, _, tail = rest.partition(end)
    return head + tail


def _components(result: LoadResult, severity: DiagnosticSeverity):
    return [diag.component for diag in result.get_diagnostics_by_severity(severity)]


class TestLoadModel:
    """Test the module-level load functions."""

    def test_load_text(self, plane_text):
        """Test a successful load from document text."""
        result = load_model(plane_text)
        assert result.success
        assert result.parsed
        assert isinstance(result.document, Header)
        assert len(result.vertices) == 6
        assert result.metrics.vertex_count == 6
        assert result.metrics.element_count > 10
        assert result.metrics.characters_processed == len(plane_text)
        assert result.correlation_id

    def test_load_file(self, plane_file):
        """Test loading from a path."""
        result = load_model_file(plane_file)
        assert result.success
        assert result.source == str(plane_file)
        assert result.model.transform[3] == (5.0, 6.0, 7.0, 1.0)

    def test_load_path_object(self, plane_file):
        """Test that Path objects are read from disk."""
        assert load_model(plane_file).success

    def test_load_stream(self, plane_text):
        """Test loading from a text stream."""
        assert load_model(io.StringIO(plane_text)).success

    def test_unsupported_input(self):
        """Test that unsupported input types raise TypeError."""
        with pytest.raises(TypeError):
            load_model(42)

    def test_explicit_correlation_id(self, plane_text):
        """Test that a given correlation ID is stamped on the result."""
        result = load_model(plane_text, correlation_id="req-1")
        assert result.correlation_id == "req-1"


class TestFailures:
    """Test the never-fail reporting."""

    def test_missing_file(self, tmp_path):
        """Test a path that does not exist."""
        result = load_model_file(tmp_path / "absent.dae")
        assert not result.success
        assert _components(result, DiagnosticSeverity.CRITICAL) == ["file_reader"]

    def test_directory(self, tmp_path):
        """Test a path that is a directory."""
        result = load_model_file(tmp_path)
        assert "not a file" in result.diagnostics[0].message

    def test_unparseable(self):
        """Test text that is not a document."""
        result = load_model("this is not a document")
        assert not result.parsed
        assert _components(result, DiagnosticSeverity.CRITICAL) == ["grammar"]

    def test_missing_normals(self, plane_text):
        """Test that the missing array is named."""
        text = _without(plane_text, '<source id="Plane-mesh-normals">', "</source>")
        result = load_model(text)
        assert result.parsed
        assert result.model is None
        errors = result.get_diagnostics_by_severity(DiagnosticSeverity.ERROR)
        assert errors[0].details == {"missing": "normals"}

    def test_bad_index(self, plane_text):
        """Test an index stream pointing past the arrays."""
        text = plane_text.replace("3 0 3 2 0 2</p>", "9 0 3 2 0 2</p>")
        result = load_model(text)
        assert result.model is not None
        assert result.vertices is None
        assert _components(result, DiagnosticSeverity.ERROR) == ["packing"]
        assert not result.success

    def test_size_limit(self, plane_text):
        """Test rejecting oversized input."""
        config = LoaderConfig().override(global___max_input_size_bytes=100)
        result = load_model(plane_text, config)
        assert not result.parsed
        assert _components(result, DiagnosticSeverity.CRITICAL) == ["input"]

    def test_raise_for_status(self):
        """Test converting a failed result into an exception."""
        with pytest.raises(ModelLoadError) as exc_info:
            load_model("<broken").raise_for_status()
        assert exc_info.value.diagnostics

    def test_raise_for_status_success(self, plane_text):
        """Test that a successful result is returned unchanged."""
        result = load_model(plane_text)
        assert result.raise_for_status() is result


class TestConfiguredLoading:
    """Test loading with non-default configuration."""

    def test_identity_transform_info(self, plane_text):
        """Test that a missing matrix is reported and replaced."""
        text = _without(plane_text, "<matrix", "</matrix>")
        result = load_model(text)
        assert result.success
        assert result.model.transform == IDENTITY_MATRIX
        assert _components(result, DiagnosticSeverity.INFO) == ["extraction"]

    def test_strict_preset_rejects_mismatched_tags(self, plane_text):
        """Test that strict close tags fail a mismatched document."""
        text = plane_text.replace("</up_axis>", "</up>")
        assert load_model(text).success
        assert not load_model(text, LoaderConfig.strict()).parsed

    def test_positions_only(self, plane_text):
        """Test loading without texture coordinates or packing."""
        text = _without(plane_text, '<source id="Plane-mesh-map-0">', "</source>")
        result = load_model(text, LoaderConfig.positions_only())
        assert result.success
        assert result.vertices is None
        assert _components(result, DiagnosticSeverity.WARNING) == ["extraction"]

    def test_deduplicated_vertices(self, plane_text):
        """Test the indexed vertex buffer."""
        config = LoaderConfig().override(packing__deduplicate_vertices=True)
        result = load_model(plane_text, config)
        assert result.success
        assert len(result.indexed.vertices) == 4
        assert result.indexed.indices == (0, 1, 2, 1, 3, 2)
        assert result.vertices is None

    def test_custom_keys(self, plane_text):
        """Test selecting sources by other id substrings."""
        text = plane_text.replace("mesh-map-0", "mesh-uv-0")
        assert not load_model(text).success
        config = LoaderConfig().override(extraction__texcoord_key="uv")
        assert load_model(text, config).success


class TestModelLoader:
    """Test the configured loader object."""

    def test_statistics(self, plane_text):
        """Test load counters."""
        loader = ModelLoader()
        loader.load_string(plane_text)
        loader.load_string("nothing")
        stats = loader.statistics
        assert stats["loads"] == 2
        assert stats["successful_loads"] == 1
        assert stats["failed_loads"] == 1
        assert stats["characters_processed"] == len(plane_text) + len("nothing")

        loader.reset_statistics()
        assert loader.statistics["loads"] == 0
        assert loader.statistics["average_time_ms"] == 0.0

    def test_correlation_disabled(self, plane_text):
        """Test that no ID is generated when tracking is off."""
        config = LoaderConfig().override(global___enable_correlation_tracking=False)
        assert ModelLoader(config).load_string(plane_text).correlation_id is None

    def test_summary(self, plane_text):
        """Test the plain summary of a result."""
        summary = ModelLoader().load_string(plane_text, source_name="plane").summary()
        assert summary["source"] == "plane"
        assert summary["positions"] == 4
        assert summary["indices"] == 18
        assert summary["has_transform"] is True

    def test_deep_nesting(self):
        """Test that exhausting the recursion limit is reported."""
        depth = 5000
        text = "<a>" * depth + "x" + "</a>" * depth
        result = ModelLoader().load_string(text)
        assert not result.parsed
        assert result.has_errors()


class TestParseString:
    """Test parsing without extraction."""

    def test_default(self):
        """Test the lenient default grammar."""
        assert parse_string("<a>1</a>") == Tag("a", (), (Numbers((1.0,)),))

    def test_with_config(self):
        """Test grammar settings taken from configuration."""
        assert parse_string("<a>x</b>") is not None
        assert parse_string("<a>x</b>", LoaderConfig.strict()) is None

    def test_file_source_name(self, plane_file):
        """Test that stream names become the result source."""
        with Path(plane_file).open(encoding="utf-8") as stream:
            result = load_model(stream)
        assert result.source == str(plane_file)
