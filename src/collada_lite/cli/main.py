"""Main CLI entry point for the collada-lite command-line tool.

Commands:
    parse    Check that files parse and report element counts
    extract  Load geometry and print counts or full arrays
    tree     Pretty-print the parsed document
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from collada_lite import __version__
from collada_lite.api import LoadResult, ModelLoader
from collada_lite.shared import PRESETS, ConfigError, LoaderConfig, configure_logging, get_logger
from collada_lite.tree import count_elements, max_depth, serialize

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.loader_config = LoaderConfig()
        self.output_format = "text"
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CLIConfig":
        """Build CLI configuration from parsed arguments.

        Raises:
            ConfigError: If the configuration file is missing or invalid
        """
        config = cls()
        if getattr(args, "config", None):
            config.loader_config = load_config_file(args.config)
        elif getattr(args, "preset", None):
            config.loader_config = PRESETS[args.preset]()
        if getattr(args, "strict", False):
            config.loader_config = config.loader_config.override(
                grammar__strict_close_tags=True
            )
        config.output_format = getattr(args, "format", config.output_format)
        config.verbose = args.verbose
        config.quiet = args.quiet
        return config


def load_config_file(path: Path) -> LoaderConfig:
    """Read a ``LoaderConfig`` from a JSON file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    return LoaderConfig.from_json(text)


def _parse_report(loader: ModelLoader, path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return {"file": str(path), "parsed": False, "error": str(e)}
    document = loader.grammar.parse(text)
    if document is None:
        return {"file": str(path), "parsed": False, "error": "Document could not be parsed"}
    return {
        "file": str(path),
        "parsed": True,
        "element_count": count_elements(document),
        "max_depth": max_depth(document),
    }


def format_parse_reports(reports: List[Dict[str, Any]], format_type: str) -> str:
    """Format parse reports for output."""
    if format_type == "json":
        return json.dumps(reports, indent=2)
    if not reports:
        return "No files to report."
    parsed = sum(1 for report in reports if report["parsed"])
    lines = [f"Parsed {parsed} of {len(reports)} files", "-" * 60]
    for report in reports:
        if report["parsed"]:
            lines.append(
                f"ok   {report['file']}  elements={report['element_count']} "
                f"depth={report['max_depth']}"
            )
        else:
            lines.append(f"FAIL {report['file']}  {report['error']}")
    return "\n".join(lines)


def _full_geometry(result: LoadResult) -> Dict[str, Any]:
    data = result.summary()
    model = result.model
    if model is None:
        return data
    data.update({
        "positions_data": [list(p) for p in model.positions],
        "normals_data": [list(n) for n in model.normals],
        "tex_coords_data": [list(t) for t in model.tex_coords],
        "indices_data": list(model.indices),
        "transform": [list(row) for row in model.transform],
    })
    if result.vertices is not None:
        data["vertices"] = [list(vertex.as_tuple()) for vertex in result.vertices]
    if result.indexed is not None:
        data["vertices"] = [list(vertex.as_tuple()) for vertex in result.indexed.vertices]
        data["vertex_indices"] = list(result.indexed.indices)
    return data


def format_load_result(result: LoadResult, format_type: str, full: bool = False) -> str:
    """Format one load result for output."""
    data = _full_geometry(result) if full else result.summary()
    if format_type == "json":
        return json.dumps(data, indent=2)

    status = "ok" if result.success else "FAIL"
    lines = [f"{status} {result.source}"]
    lines.append(
        f"   positions={data['positions']} normals={data['normals']} "
        f"tex_coords={data['tex_coords']} indices={data['indices']} "
        f"vertices={data['vertex_count']}"
    )
    lines.append(
        f"   transform={'document' if data['has_transform'] else 'identity'} "
        f"time={result.metrics.total_time_ms:.1f}ms"
    )
    for diag in result.diagnostics:
        lines.append(f"   {diag.severity.name}: {diag.message}")
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="collada-lite",
        description="Parse COLLADA geometry files and extract renderer-ready vertices",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", "-c", type=Path, help="Loader configuration JSON file")
    common.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Loader configuration preset (ignored when --config is given)",
    )
    common.add_argument(
        "--strict",
        action="store_true",
        help="Require closing tag names to match opening names",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", parents=[common], help="Parse files")
    parse_parser.add_argument("paths", nargs="+", type=Path, help="Files to parse")
    parse_parser.add_argument(
        "--format", "-f", choices=["json", "text"], default="text",
        help="Output format (default: text)",
    )

    extract_parser = subparsers.add_parser(
        "extract", parents=[common], help="Extract geometry from a file"
    )
    extract_parser.add_argument("path", type=Path, help="File to load")
    extract_parser.add_argument(
        "--format", "-f", choices=["json", "text"], default="json",
        help="Output format (default: json)",
    )
    extract_parser.add_argument(
        "--full", action="store_true", help="Include every array and vertex"
    )
    extract_parser.add_argument(
        "--output", "-o", type=Path, help="Output file (default: stdout)"
    )

    tree_parser = subparsers.add_parser(
        "tree", parents=[common], help="Pretty-print the parsed document"
    )
    tree_parser.add_argument("path", type=Path, help="File to print")
    tree_parser.add_argument("--indent", type=int, default=2, help="Spaces per level")

    return parser


def cmd_parse(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle parse command."""
    loader = ModelLoader(config.loader_config)
    reports = [_parse_report(loader, path) for path in args.paths]
    print(format_parse_reports(reports, config.output_format))
    return EXIT_OK if all(report["parsed"] for report in reports) else EXIT_FAILURE


def cmd_extract(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle extract command."""
    loader = ModelLoader(config.loader_config)
    result = loader.load_file(args.path)
    output = format_load_result(result, config.output_format, full=args.full)

    if args.output:
        try:
            args.output.write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return EXIT_FAILURE
        if not config.quiet:
            print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output)
    return EXIT_OK if result.success else EXIT_FAILURE


def cmd_tree(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle tree command."""
    if args.indent < 0:
        print("--indent must be >= 0", file=sys.stderr)
        return EXIT_FAILURE
    try:
        text = args.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Could not read {args.path}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    document = ModelLoader(config.loader_config).grammar.parse(text)
    if document is None:
        print(f"Could not parse {args.path}", file=sys.stderr)
        return EXIT_FAILURE
    try:
        output = serialize(document, indent=" " * args.indent)
    except ValueError as e:
        print(f"Could not print {args.path}: {e}", file=sys.stderr)
        return EXIT_FAILURE
    print(output)
    return EXIT_OK


COMMANDS = {
    "parse": cmd_parse,
    "extract": cmd_extract,
    "tree": cmd_tree,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_FAILURE

    try:
        config = CLIConfig.from_args(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if config.verbose:
        configure_logging("DEBUG")
    elif config.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.loader_config.global_.logging_level)

    logger = get_logger(__name__, None, "cli")
    logger.debug("Running command", extra={"command": args.command})

    try:
        return COMMANDS[args.command](args, config)
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
