"""Loading API: parse documents and recover renderer-ready geometry."""

from .loader import (
    LoadResult,
    ModelLoader,
    ModelLoadError,
    load_model,
    load_model_file,
    parse_string,
)

__all__ = [
    "LoadResult",
    "ModelLoadError",
    "ModelLoader",
    "load_model",
    "load_model_file",
    "parse_string",
]
