"""Model loading API with progressive disclosure.

Module-level functions cover the common case::

    >>> result = load_model_file("cube.dae")
    >>> result.success
    True
    >>> len(result.vertices)
    36

``ModelLoader`` carries a ``LoaderConfig`` and load statistics for callers
that load many files with the same settings. Every entry point follows the
never-fail pattern: problems are reported as diagnostics on the returned
``LoadResult`` and ``raise_for_status`` converts them into an exception for
callers that want one.
"""

import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO, Union

from collada_lite.geometry import (
    ExtractionError,
    IndexedVertices,
    Model,
    Vertex,
    extract_model,
    pack_indexed_vertices,
    pack_vertices,
)
from collada_lite.shared import (
    CorrelationLogger,
    DiagnosticEntry,
    DiagnosticSeverity,
    LoaderConfig,
    LoadMetrics,
    get_logger,
)
from collada_lite.tree import (
    DocumentGrammar,
    Node,
    count_elements,
    max_depth,
    parse_document,
)

InputType = Union[str, Path, TextIO]

PREVIEW_LENGTH = 80  # Max length for content preview in logs
MS_PER_SECOND = 1000


class ModelLoadError(Exception):
    """Raised by ``LoadResult.raise_for_status`` for failed loads."""

    def __init__(self, message: str, diagnostics: List[DiagnosticEntry]) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


@dataclass
class LoadResult:
    """Outcome of loading one document."""

    document: Optional[Node] = None
    model: Optional[Model] = None
    vertices: Optional[List[Vertex]] = None
    indexed: Optional[IndexedVertices] = None

    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: LoadMetrics = field(default_factory=LoadMetrics)

    source: Optional[str] = None
    correlation_id: Optional[str] = None

    @property
    def parsed(self) -> bool:
        """Whether the grammar produced a tree."""
        return self.document is not None

    @property
    def success(self) -> bool:
        """Whether a model was recovered without errors."""
        return self.model is not None and not self.has_errors()

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [diag for diag in self.diagnostics if diag.severity == severity]

    def has_errors(self) -> bool:
        """Check if result contains any error diagnostics."""
        return any(
            diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diag in self.diagnostics
        )

    def raise_for_status(self) -> "LoadResult":
        """Raise ``ModelLoadError`` unless the load succeeded.

        Returns:
            This result, so calls can be chained
        """
        if self.success:
            return self
        errors = [
            diag for diag in self.diagnostics
            if diag.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
        ]
        reason = errors[0].message if errors else "No model was produced"
        where = f" ({self.source})" if self.source else ""
        raise ModelLoadError(f"Failed to load model{where}: {reason}", self.diagnostics)

    def summary(self) -> Dict[str, Any]:
        """Plain summary for reporting."""
        model = self.model
        return {
            "source": self.source,
            "success": self.success,
            "parsed": self.parsed,
            "positions": len(model.positions) if model else 0,
            "normals": len(model.normals) if model else 0,
            "tex_coords": len(model.tex_coords) if model else 0,
            "indices": len(model.indices) if model else 0,
            "has_transform": model.has_transform if model else False,
            "vertex_count": self.metrics.vertex_count,
            "metrics": self.metrics.to_dict(),
            "diagnostics": [diag.to_dict() for diag in self.diagnostics],
        }


class ModelLoader:
    """Configured loader that parses, extracts and packs documents.

    Args:
        config: Loader configuration (lenient defaults when omitted)
        correlation_id: ID stamped on logs and diagnostics; generated per load
            when omitted and correlation tracking is enabled
    """

    def __init__(
        self,
        config: Optional[LoaderConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or LoaderConfig()
        self.correlation_id = correlation_id
        self.grammar = DocumentGrammar(
            strict_close_tags=self.config.grammar.strict_close_tags,
            allow_trailing_content=self.config.grammar.allow_trailing_content,
        )
        self._statistics: Dict[str, Any] = {}
        self.reset_statistics()

    def _next_correlation_id(self) -> Optional[str]:
        if self.correlation_id is not None:
            return self.correlation_id
        if self.config.global_.enable_correlation_tracking:
            return uuid.uuid4().hex[:12]
        return None

    def load(self, source: InputType) -> LoadResult:
        """Load from document text, a ``Path``, or a readable text stream."""
        if isinstance(source, Path):
            return self.load_file(source)
        if isinstance(source, str):
            return self.load_string(source)
        if hasattr(source, "read"):
            name = getattr(source, "name", None)
            return self.load_string(source.read(), source_name=name)
        raise TypeError(f"Unsupported input type: {type(source).__name__}")

    def load_file(self, path: Union[str, Path], encoding: str = "utf-8") -> LoadResult:
        """Load a document from disk."""
        path_obj = Path(path)
        correlation_id = self._next_correlation_id()
        logger = get_logger(__name__, correlation_id, "load_file")
        logger.info("Loading model file", extra={"file_path": str(path_obj)})

        error_message = None
        if not path_obj.exists():
            error_message = f"File not found: {path_obj}"
        elif not path_obj.is_file():
            error_message = f"Path is not a file: {path_obj}"
        if error_message is None:
            try:
                content = path_obj.read_text(encoding=encoding)
            except (OSError, UnicodeDecodeError) as e:
                error_message = f"Could not read {path_obj}: {e}"

        if error_message is not None:
            logger.error(error_message)
            result = LoadResult(source=str(path_obj), correlation_id=correlation_id)
            result.add_diagnostic(DiagnosticSeverity.CRITICAL, error_message, "file_reader")
            self._record(result)
            return result

        return self._load_text(content, str(path_obj), correlation_id)

    def load_string(self, text: str, source_name: Optional[str] = None) -> LoadResult:
        """Load a document held in memory."""
        return self._load_text(text, source_name, self._next_correlation_id())

    def _load_text(
        self, text: str, source_name: Optional[str], correlation_id: Optional[str]
    ) -> LoadResult:
        logger = get_logger(__name__, correlation_id, "load")
        result = LoadResult(source=source_name, correlation_id=correlation_id)
        result.metrics.characters_processed = len(text)

        logger.info(
            "Starting model load",
            extra={
                "content_length": len(text),
                "preview": (
                    text[:PREVIEW_LENGTH] + "..." if len(text) > PREVIEW_LENGTH else text
                ),
            },
        )

        limit = self.config.global_.max_input_size_bytes
        if limit is not None and len(text.encode("utf-8")) > limit:
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                f"Input exceeds {limit} bytes",
                "input",
                details={"limit": limit},
            )
            logger.warning("Input rejected by size limit", extra={"limit": limit})
            self._record(result)
            return result

        try:
            self._parse(text, result, logger)
            if result.document is not None:
                self._extract(result.document, result, logger)
            if result.model is not None and self.config.packing.pack_on_load:
                self._pack(result.model, result, logger)
        except Exception as e:
            # Never-fail: unexpected errors become diagnostics
            logger.exception("Model load failed", extra={"error": str(e)})
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                f"Model load failed: {e}",
                "loader",
                details={"exception": type(e).__name__},
            )

        logger.info(
            "Model load completed",
            extra={
                "success": result.success,
                "total_time_ms": result.metrics.total_time_ms,
                "diagnostics_count": len(result.diagnostics),
            },
        )
        self._record(result)
        return result

    def _parse(self, text: str, result: LoadResult, logger: CorrelationLogger) -> None:
        start = time.perf_counter()
        try:
            document = self.grammar.parse(text)
        except RecursionError:
            document = None
            result.add_diagnostic(
                DiagnosticSeverity.CRITICAL,
                "Document nesting exceeds the interpreter recursion limit",
                "grammar",
            )
        result.metrics.parse_time_ms = (time.perf_counter() - start) * MS_PER_SECOND

        if document is None:
            if not result.has_errors():
                result.add_diagnostic(
                    DiagnosticSeverity.CRITICAL,
                    "Document could not be parsed",
                    "grammar",
                )
            logger.warning("Parse failed", extra={"parse_time_ms": result.metrics.parse_time_ms})
            return

        result.document = document
        result.metrics.element_count = count_elements(document)
        result.metrics.max_depth = max_depth(document)
        logger.debug(
            "Parse completed",
            extra={
                "element_count": result.metrics.element_count,
                "max_depth": result.metrics.max_depth,
                "parse_time_ms": result.metrics.parse_time_ms,
            },
        )

    def _extract(self, document: Node, result: LoadResult, logger: CorrelationLogger) -> None:
        settings = self.config.extraction
        start = time.perf_counter()
        try:
            model = extract_model(
                document,
                position_key=settings.position_key,
                normal_key=settings.normal_key,
                texcoord_key=settings.texcoord_key,
                require_texture_coordinates=settings.require_texture_coordinates,
                identity_when_no_transform=settings.identity_when_no_transform,
            )
        except ExtractionError as e:
            result.add_diagnostic(
                DiagnosticSeverity.ERROR, str(e), "extraction",
                details={"missing": e.component},
            )
            logger.warning("Extraction failed", extra={"missing": e.component})
            return
        finally:
            result.metrics.extraction_time_ms = (
                (time.perf_counter() - start) * MS_PER_SECOND
            )

        if not model.tex_coords:
            result.add_diagnostic(
                DiagnosticSeverity.WARNING,
                "No texture coordinates; continuing without them",
                "extraction",
            )
        if not model.has_transform:
            result.add_diagnostic(
                DiagnosticSeverity.INFO,
                "No transform matrix; using identity",
                "extraction",
            )
        result.model = model
        logger.debug(
            "Extraction completed",
            extra={
                "positions": len(model.positions),
                "normals": len(model.normals),
                "tex_coords": len(model.tex_coords),
                "indices": len(model.indices),
            },
        )

    def _pack(self, model: Model, result: LoadResult, logger: CorrelationLogger) -> None:
        with logger.timed("Packing") as fields:
            if self.config.packing.deduplicate_vertices:
                indexed = pack_indexed_vertices(
                    model.positions, model.normals, model.tex_coords, model.indices
                )
                result.indexed = indexed
                vertex_count = len(indexed.vertices) if indexed else 0
                packed = indexed is not None
            else:
                vertices = pack_vertices(
                    model.positions, model.normals, model.tex_coords, model.indices
                )
                result.vertices = vertices
                vertex_count = len(vertices) if vertices is not None else 0
                packed = vertices is not None
            fields["vertex_count"] = vertex_count

        if not packed:
            result.add_diagnostic(
                DiagnosticSeverity.ERROR,
                "Index stream references data outside the source arrays",
                "packing",
                details={"indices": len(model.indices)},
            )
            return
        result.metrics.vertex_count = vertex_count

    def _record(self, result: LoadResult) -> None:
        self._statistics["loads"] += 1
        if result.success:
            self._statistics["successful_loads"] += 1
        else:
            self._statistics["failed_loads"] += 1
        self._statistics["total_time_ms"] += result.metrics.total_time_ms
        self._statistics["characters_processed"] += result.metrics.characters_processed

    @property
    def statistics(self) -> Dict[str, Any]:
        """Totals over every load made with this loader."""
        stats = dict(self._statistics)
        loads = stats["loads"]
        stats["average_time_ms"] = stats["total_time_ms"] / loads if loads else 0.0
        return stats

    def reset_statistics(self) -> None:
        self._statistics = {
            "loads": 0,
            "successful_loads": 0,
            "failed_loads": 0,
            "total_time_ms": 0.0,
            "characters_processed": 0,
        }


def parse_string(text: str, config: Optional[LoaderConfig] = None) -> Optional[Node]:
    """Parse document text into a tree without extracting geometry."""
    if config is None:
        return parse_document(text)
    grammar_config = config.grammar
    grammar = DocumentGrammar(
        strict_close_tags=grammar_config.strict_close_tags,
        allow_trailing_content=grammar_config.allow_trailing_content,
    )
    return grammar.parse(text)


def load_model(
    source: InputType,
    config: Optional[LoaderConfig] = None,
    correlation_id: Optional[str] = None,
) -> LoadResult:
    """Load a model from text, a ``Path``, or a text stream.

    Plain strings are treated as document text; pass a ``Path`` (or use
    :func:`load_model_file`) to read from disk.
    """
    return ModelLoader(config, correlation_id).load(source)


def load_model_file(
    path: Union[str, Path],
    config: Optional[LoaderConfig] = None,
    correlation_id: Optional[str] = None,
) -> LoadResult:
    """Load a model from a file on disk."""
    return ModelLoader(config, correlation_id).load_file(path)
