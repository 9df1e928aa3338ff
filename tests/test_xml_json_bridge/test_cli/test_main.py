"""Tests for the CLI main module."""

import json
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from xml_json_bridge.cli.main import (
    CLIConfig,
    FileConverter,
    create_argument_parser,
    main,
)
from xml_json_bridge.shared.config import ConverterConfig


@pytest.fixture
def xml_dir(tmp_path):
    """Directory with two good documents, one bad one and a non-XML file."""
    (tmp_path / "one.xml").write_text("<a>1</a>", encoding="utf-8")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "two.xml").write_text('<b x="true"/>', encoding="utf-8")
    (tmp_path / "notes.txt").write_text("<ignored/>", encoding="utf-8")
    return tmp_path


class TestCLIConfig:
    """Test CLI configuration management."""

    def test_default_config(self):
        """Test default configuration values."""
        config = CLIConfig()
        assert config.converter_config == ConverterConfig()
        assert config.encoding == "utf-8"

    def test_config_from_file(self, tmp_path):
        """Test loading a preset, overrides and encoding from file."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "preset": "untrusted_input",
            "converter": {"keep_strings": True, "json_indent": 4},
            "encoding": "latin-1",
        }))

        config = CLIConfig.from_file(config_path)

        assert config.converter_config.keep_strings is True
        assert config.converter_config.json_indent == 4
        assert config.converter_config.max_nesting_depth == (
            ConverterConfig.untrusted_input().max_nesting_depth
        )
        assert config.encoding == "latin-1"

    def test_config_from_nonexistent_file(self):
        """Test handling non-existent config file."""
        config = CLIConfig.from_file(Path("nonexistent.json"))
        assert config.converter_config == ConverterConfig()

    def test_invalid_config_file_falls_back_to_defaults(self, tmp_path, capsys):
        """Test that an invalid file warns and keeps defaults."""
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"converter": {"bogus": 1}}))

        config = CLIConfig.from_file(config_path)

        assert config.converter_config == ConverterConfig()
        assert "Could not load config file" in capsys.readouterr().err


class TestFileConverter:
    """Test file discovery and conversion."""

    def test_find_xml_files_recursive(self, xml_dir):
        """Test that directories are searched for XML files only."""
        converter = FileConverter(CLIConfig())
        found = list(converter.find_xml_files(xml_dir, recursive=True))
        assert sorted(p.name for p in found) == ["one.xml", "two.xml"]

    def test_find_xml_files_flat(self, xml_dir):
        """Test non-recursive discovery."""
        converter = FileConverter(CLIConfig())
        found = list(converter.find_xml_files(xml_dir, recursive=False))
        assert [p.name for p in found] == ["one.xml"]

    def test_convert_single_file_failure(self, tmp_path):
        """Test that conversion errors become failed records."""
        path = tmp_path / "bad.xml"
        path.write_text("<a>", encoding="utf-8")

        result = FileConverter(CLIConfig()).convert_single_file(path)

        assert result["success"] is False
        assert "Unclosed tag a" in result["error"]


class TestArgumentParser:
    """Test argument parsing."""

    def test_convert_arguments(self):
        """Test parsing of convert options."""
        parser = create_argument_parser()
        args = parser.parse_args([
            "convert", "doc.xml", "--keep-strings", "--max-depth", "10", "--indent", "2"
        ])
        assert args.command == "convert"
        assert args.paths == [Path("doc.xml")]
        assert args.keep_strings is True
        assert args.max_depth == 10
        assert args.indent == 2

    def test_check_defaults(self):
        """Test default check options."""
        args = create_argument_parser().parse_args(["check", "doc.xml"])
        assert args.format == "text"
        assert args.recursive is False


class TestMain:
    """Test the main entry point."""

    def test_no_command(self, capsys):
        """Test that running without a command prints help."""
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_convert_single_file(self, xml_dir, capsys):
        """Test converting one file prints its JSON."""
        exit_code = main(["convert", str(xml_dir / "one.xml")])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {"a": 1}

    def test_convert_keep_strings(self, xml_dir, capsys):
        """Test the --keep-strings flag."""
        exit_code = main(["convert", "--keep-strings", str(xml_dir / "one.xml")])

        assert exit_code == 0
        assert json.loads(capsys.readouterr().out) == {"a": "1"}

    def test_convert_directory(self, xml_dir, capsys):
        """Test that several files are keyed by path."""
        exit_code = main(["convert", "-r", str(xml_dir)])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {
            str(xml_dir / "nested" / "two.xml"): {"b": {"x": True}},
            str(xml_dir / "one.xml"): {"a": 1},
        }

    def test_convert_to_output_file(self, xml_dir, capsys):
        """Test writing results to a file."""
        output_path = xml_dir / "out.json"

        exit_code = main([
            "convert", str(xml_dir / "one.xml"), "--indent", "2", "-o", str(output_path)
        ])

        assert exit_code == 0
        assert output_path.read_text(encoding="utf-8") == '{\n  "a": 1\n}\n'
        assert "Results written to" in capsys.readouterr().err

    def test_convert_failure(self, tmp_path, capsys):
        """Test that a malformed file reports an error and exit code 1."""
        path = tmp_path / "bad.xml"
        path.write_text("<a><b></a>", encoding="utf-8")

        exit_code = main(["convert", str(path)])

        captured = capsys.readouterr()
        assert exit_code == 1
        assert captured.out == ""
        assert "Mismatched b and a" in captured.err

    def test_convert_missing_file(self, tmp_path, capsys):
        """Test that a missing file is reported as a failure."""
        exit_code = main(["convert", str(tmp_path / "missing.xml")])

        assert exit_code == 1
        assert "missing.xml" in capsys.readouterr().err

    def test_convert_depth_limit(self, tmp_path, capsys):
        """Test the --max-depth option."""
        path = tmp_path / "deep.xml"
        path.write_text("<a><b><c/></b></a>", encoding="utf-8")

        exit_code = main(["convert", "--max-depth", "2", str(path)])

        assert exit_code == 1
        assert "Maximum nesting depth 2 exceeded at <c>" in capsys.readouterr().err

    def test_convert_depth_limit_above_interpreter_stack(self, tmp_path, capsys):
        """Test that a very high --max-depth still reports a depth error."""
        depth = sys.getrecursionlimit() + 100
        path = tmp_path / "deep.xml"
        path.write_text("<a>" * depth + "</a>" * depth, encoding="utf-8")

        exit_code = main(["convert", "--max-depth", str(depth * 2), str(path)])

        assert exit_code == 1
        assert "Maximum nesting depth" in capsys.readouterr().err

    def test_invalid_max_depth(self, xml_dir, capsys):
        """Test that an invalid configuration override is rejected."""
        exit_code = main(["convert", "--max-depth", "0", str(xml_dir / "one.xml")])

        assert exit_code == 1
        assert "max_nesting_depth must be > 0" in capsys.readouterr().err

    def test_check_text(self, xml_dir, capsys):
        """Test the text report of the check command."""
        (xml_dir / "bad.xml").write_text("<a>", encoding="utf-8")

        exit_code = main(["check", str(xml_dir)])

        output = capsys.readouterr().out
        assert exit_code == 1
        assert "Checked 2 files, 1 valid" in output
        assert "Unclosed tag a" in output

    def test_check_json(self, xml_dir, capsys):
        """Test the JSON report of the check command."""
        exit_code = main(["check", "-r", "--format", "json", str(xml_dir)])

        results = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert len(results) == 2
        assert all(r["valid"] for r in results)

    def test_keyboard_interrupt(self, xml_dir, capsys):
        """Test the exit code when interrupted."""
        with patch("xml_json_bridge.cli.main.cmd_convert", side_effect=KeyboardInterrupt):
            exit_code = main(["convert", str(xml_dir / "one.xml")])

        assert exit_code == 130
        assert "interrupted" in capsys.readouterr().err
