"""Tests for the CLI main module."""

import json
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from collada_lite.cli.main import (
    CLIConfig,
    create_argument_parser,
    format_parse_reports,
    load_config_file,
    main,
)
from collada_lite.shared import ConfigError, LoaderConfig


class TestCLIConfig:
    """Test CLI configuration management."""

    def test_default_config(self):
        """Test default configuration values."""
        config = CLIConfig()
        assert config.loader_config == LoaderConfig()
        assert config.output_format == "text"
        assert config.verbose is False
        assert config.quiet is False

    def test_from_args_preset_and_strict(self):
        """Test preset selection plus the strict flag."""
        parser = create_argument_parser()
        args = parser.parse_args(
            ["parse", "--preset", "positions_only", "--strict", "a.dae"]
        )
        config = CLIConfig.from_args(args)
        assert config.loader_config.name == "positions_only"
        assert config.loader_config.grammar.strict_close_tags is True

    def test_config_file(self, tmp_path):
        """Test loading loader configuration from JSON."""
        path = tmp_path / "config.json"
        path.write_text(LoaderConfig.strict().to_json(), encoding="utf-8")
        assert load_config_file(path) == LoaderConfig.strict()

    def test_missing_config_file(self, tmp_path):
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigError):
            load_config_file(tmp_path / "absent.json")


class TestArgumentParser:
    """Test argument parsing."""

    def test_parse_command(self):
        """Test parse with several paths."""
        args = create_argument_parser().parse_args(["parse", "a.dae", "b.dae", "-f", "json"])
        assert args.command == "parse"
        assert args.paths == [Path("a.dae"), Path("b.dae")]
        assert args.format == "json"

    def test_extract_defaults(self):
        """Test extract defaults to JSON counts."""
        args = create_argument_parser().parse_args(["extract", "a.dae"])
        assert args.format == "json"
        assert args.full is False
        assert args.output is None

    def test_version(self, capsys):
        """Test the version flag."""
        with pytest.raises(SystemExit) as exc_info:
            create_argument_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out


class TestFormatting:
    """Test report formatting."""

    def test_text_reports(self):
        """Test the text layout of parse reports."""
        reports = [
            {"file": "a.dae", "parsed": True, "element_count": 3, "max_depth": 2},
            {"file": "b.dae", "parsed": False, "error": "Document could not be parsed"},
        ]
        output = format_parse_reports(reports, "text")
        assert "Parsed 1 of 2 files" in output
        assert "ok   a.dae" in output
        assert "FAIL b.dae" in output

    def test_json_reports(self):
        """Test JSON output."""
        reports = [{"file": "a.dae", "parsed": True, "element_count": 1, "max_depth": 1}]
        assert json.loads(format_parse_reports(reports, "json")) == reports

    def test_no_reports(self):
        """Test an empty report list."""
        assert format_parse_reports([], "text") == "No files to report."


class TestMain:
    """Test the command entry point."""

    def test_no_command(self, capsys):
        """Test that help is printed without a command."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_parse_success(self, plane_file, capsys):
        """Test parsing a valid file."""
        assert main(["--quiet", "parse", str(plane_file)]) == 0
        assert "Parsed 1 of 1 files" in capsys.readouterr().out

    def test_parse_failure(self, tmp_path, capsys):
        """Test that an unparseable file gives a non-zero exit code."""
        bad = tmp_path / "bad.dae"
        bad.write_text("not a document", encoding="utf-8")
        assert main(["--quiet", "parse", "-f", "json", str(bad)]) == 1
        reports = json.loads(capsys.readouterr().out)
        assert reports[0]["parsed"] is False

    def test_extract_counts(self, plane_file, capsys):
        """Test extracting geometry counts as JSON."""
        assert main(["--quiet", "extract", str(plane_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["positions"] == 4
        assert data["vertex_count"] == 6

    def test_extract_full_to_file(self, plane_file, tmp_path):
        """Test writing every array to an output file."""
        output = tmp_path / "out.json"
        assert main(
            ["--quiet", "extract", "--full", "-o", str(output), str(plane_file)]
        ) == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["vertices"]) == 6
        assert data["vertices"][0] == [0, 0, 0, 0, 0, 1, 0, 0]
        assert data["transform"][3] == [5.0, 6.0, 7.0, 1.0]

    def test_extract_text(self, plane_file, capsys):
        """Test the text summary."""
        assert main(["--quiet", "extract", "-f", "text", str(plane_file)]) == 0
        output = capsys.readouterr().out
        assert output.startswith("ok ")
        assert "positions=4" in output

    def test_extract_missing_file(self, tmp_path):
        """Test extracting from a path that does not exist."""
        assert main(["--quiet", "extract", str(tmp_path / "absent.dae")]) == 1

    def test_tree(self, plane_file, capsys):
        """Test pretty-printing a document."""
        assert main(["--quiet", "tree", "--indent", "4", str(plane_file)]) == 0
        output = capsys.readouterr().out
        assert "    <library_geometries>" in output

    def test_tree_overflowing_number(self, tmp_path, capsys):
        """Test printing a document whose numbers overflow to infinity."""
        path = tmp_path / "big.dae"
        path.write_text("<a><p>1e400 2</p></a>", encoding="utf-8")
        assert main(["--quiet", "tree", str(path)]) == 0
        assert "<p>1e400 2</p>" in capsys.readouterr().out

    def test_tree_unprintable(self, plane_file, capsys):
        """Test that a serialization error is reported instead of raised."""
        failing = Mock(side_effect=ValueError("Cannot serialize non-finite number: nan"))
        with patch("collada_lite.cli.main.serialize", failing):
            assert main(["--quiet", "tree", str(plane_file)]) == 1
        assert "Could not print" in capsys.readouterr().err

    def test_bad_config(self, plane_file, tmp_path, capsys):
        """Test that an invalid configuration file is reported."""
        config = tmp_path / "config.json"
        config.write_text("{broken", encoding="utf-8")
        assert main(["extract", "--config", str(config), str(plane_file)]) == 1
        assert "Configuration error" in capsys.readouterr().err

    def test_keyboard_interrupt(self, plane_file):
        """Test the interrupt exit code."""
        interrupted = Mock(side_effect=KeyboardInterrupt)
        with patch.dict("collada_lite.cli.main.COMMANDS", {"parse": interrupted}):
            assert main(["--quiet", "parse", str(plane_file)]) == 130
