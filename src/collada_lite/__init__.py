"""collada-lite: combinator-built parser and geometry loader for COLLADA files.

A restricted XML-like grammar is assembled from a small parser-combinator
library; a fixed-path walk over the resulting tree recovers positions,
normals, texture coordinates, triangle indices and the scene transform, and
packs them into interleaved vertices.

Progressive API Disclosure:
- Level 1: Simple functions - load_model(), load_model_file(), parse_string()
- Level 2: Configured loader - ModelLoader with LoaderConfig
- Level 3: Building blocks - collada_lite.combinators, collada_lite.tree,
  collada_lite.geometry
"""

__version__ = "0.1.0"

from .api import (
    LoadResult,
    ModelLoader,
    ModelLoadError,
    load_model,
    load_model_file,
    parse_string,
)
from .geometry import Model, Vertex
from .shared.config import LoaderConfig
from .tree import parse_document, serialize

__all__ = [
    "__version__",

    # Level 1: Simple functions
    "load_model",
    "load_model_file",
    "parse_string",
    "parse_document",
    "serialize",

    # Level 2: Configured loader
    "ModelLoader",
    "LoaderConfig",

    # Result objects
    "LoadResult",
    "ModelLoadError",
    "Model",
    "Vertex",
]
