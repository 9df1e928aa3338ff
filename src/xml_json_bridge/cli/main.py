"""Main CLI entry point for the xml-json-bridge command-line tool.

Provides commands to convert XML files to JSON and to check that files
convert cleanly.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from xml_json_bridge import __version__
from xml_json_bridge.api import XMLToJSONConverter
from xml_json_bridge.shared.config import ConfigError, ConverterConfig
from xml_json_bridge.shared.errors import ConversionError
from xml_json_bridge.shared.logging import get_logger

XML_SUFFIXES = {".xml", ".xhtml", ".svg"}

PRESETS = {
    "default": ConverterConfig.default,
    "preserve_strings": ConverterConfig.preserve_strings,
    "untrusted_input": ConverterConfig.untrusted_input,
}

EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.converter_config = ConverterConfig.default()
        self.encoding = "utf-8"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file may name a ``preset``, override individual converter fields
        under ``converter`` and set the input ``encoding``. A missing or
        invalid file leaves the defaults in place.
        """
        config = cls()
        if not config_path.exists():
            return config

        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ConfigError("Configuration file must contain a JSON object")

            preset = data.get("preset")
            if preset is not None:
                if preset not in PRESETS:
                    raise ConfigError(f"Unknown preset: {preset}")
                config.converter_config = PRESETS[preset]()

            overrides = data.get("converter", {})
            if overrides:
                config.converter_config = ConverterConfig.from_dict(
                    {**config.converter_config.to_dict(), **overrides}
                )

            config.encoding = data.get("encoding", config.encoding)

        except (OSError, ValueError, TypeError, ConfigError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)
            return cls()

        return config


class FileConverter:
    """Core file conversion logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.converter = XMLToJSONConverter(config=config.converter_config)
        self.logger = get_logger(__name__, None, "cli_converter")

    def convert_single_file(self, file_path: Path) -> Dict[str, Any]:
        """Convert a single XML file and return a result record."""
        try:
            result = self.converter.convert_file(file_path, encoding=self.config.encoding)
        except (ConversionError, OSError, UnicodeDecodeError) as e:
            self.logger.debug("Failed to convert file", extra={"file": str(file_path)})
            return {
                "file": str(file_path),
                "success": False,
                "error": str(e),
            }

        return {
            "file": str(file_path),
            "success": True,
            "data": result.data,
            "elements": result.metrics.elements_converted,
            "processing_time_ms": result.metrics.processing_time_ms,
        }

    def find_xml_files(self, path: Path, recursive: bool = True) -> Iterator[Path]:
        """Find XML files in path.

        Explicitly named files are always yielded; directories are searched
        for files with an XML-like suffix.
        """
        if path.is_file():
            yield path
        elif path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            for candidate in sorted(candidates):
                if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                    yield candidate
        else:
            # Reported as a failed conversion by convert_single_file
            yield path

    def batch_convert(self, paths: List[Path], recursive: bool = True) -> List[Dict[str, Any]]:
        """Convert every XML file found under ``paths``."""
        results = []
        for path in paths:
            for file_path in self.find_xml_files(path, recursive):
                results.append(self.convert_single_file(file_path))
        return results


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-json-bridge",
        description="Convert XML documents into JSON"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Convert command
    convert_parser = subparsers.add_parser("convert", help="Convert XML files to JSON")
    convert_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files or directories to convert"
    )
    convert_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    convert_parser.add_argument(
        "--keep-strings",
        action="store_true",
        help="Keep all values as strings instead of coercing numbers and booleans"
    )
    convert_parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum element nesting depth"
    )
    convert_parser.add_argument(
        "--indent",
        type=int,
        help="JSON indentation (default: compact)"
    )
    convert_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    convert_parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        help="Converter configuration preset"
    )
    convert_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check that XML files convert cleanly")
    check_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files or directories to check"
    )
    check_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    check_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )
    check_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def load_config(args: argparse.Namespace) -> CLIConfig:
    """Build the CLI configuration from the config file and command-line overrides."""
    config = CLIConfig()
    if args.config:
        config = CLIConfig.from_file(args.config)

    if getattr(args, "preset", None):
        config.converter_config = PRESETS[args.preset]()

    overrides: Dict[str, Any] = {}
    if getattr(args, "keep_strings", False):
        overrides["keep_strings"] = True
    if getattr(args, "max_depth", None) is not None:
        overrides["max_nesting_depth"] = args.max_depth
    if getattr(args, "indent", None) is not None:
        overrides["json_indent"] = args.indent
    if overrides:
        config.converter_config = config.converter_config.override(**overrides)

    return config


def cmd_convert(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle convert command."""
    converter = FileConverter(config)
    results = converter.batch_convert(args.paths, args.recursive)

    if not results:
        print("No XML files found", file=sys.stderr)
        return 1

    for result in results:
        if not result["success"]:
            print(f"Error: {result['file']}: {result['error']}", file=sys.stderr)

    successful = [r for r in results if r["success"]]
    if len(results) == 1:
        payload: Any = successful[0]["data"] if successful else None
    else:
        payload = {r["file"]: r["data"] for r in successful}

    if payload is not None:
        formatted_output = json.dumps(
            payload,
            indent=config.converter_config.json_indent,
            ensure_ascii=False
        )
        if args.output:
            try:
                args.output.write_text(formatted_output + "\n", encoding="utf-8")
            except OSError as e:
                print(f"Error writing output: {e}", file=sys.stderr)
                return 1
            print(f"Results written to {args.output}", file=sys.stderr)
        else:
            print(formatted_output)

    return 0 if len(successful) == len(results) else 1


def cmd_check(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle check command."""
    converter = FileConverter(config)
    results = [
        {
            "file": r["file"],
            "valid": r["success"],
            **({"error": r["error"]} if not r["success"] else {}),
        }
        for r in converter.batch_convert(args.paths, args.recursive)
    ]

    valid_count = sum(1 for r in results if r["valid"])
    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        print(f"Checked {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for result in results:
            status = "✓" if result["valid"] else "✗"
            print(f"{status} {result['file']}")
            if not result["valid"]:
                print(f"   Error: {result['error']}")

    return 0 if results and valid_count == len(results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Set up logging verbosity
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, config.converter_config.logging_level)
    logging.basicConfig(level=level)

    # Route to appropriate command handler
    try:
        if args.command == "convert":
            return cmd_convert(args, config)
        if args.command == "check":
            return cmd_check(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
