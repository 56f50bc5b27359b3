"""Test module for collada_lite package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    import collada_lite

    assert collada_lite is not None


def test_package_has_version() -> None:
    """Test that the package exposes its version."""
    import collada_lite

    assert isinstance(collada_lite.__version__, str)
    assert collada_lite.__version__ == "0.1.0"


def test_package_all_exports() -> None:
    """Test that __all__ lists the top-level API."""
    import collada_lite

    expected = [
        "load_model",
        "load_model_file",
        "parse_string",
        "parse_document",
        "serialize",
        "ModelLoader",
        "LoaderConfig",
        "LoadResult",
        "ModelLoadError",
        "Model",
        "Vertex",
    ]
    for name in expected:
        assert name in collada_lite.__all__
        assert hasattr(collada_lite, name)
