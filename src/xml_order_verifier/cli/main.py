"""Main CLI entry point for the xml-order-verify command-line tool.

Checks one or more XML files against sorted versions of them produced by an
external sorter:

    xml-order-verify pom.xml sorted/pom.xml other.xml sorted/other.xml
"""

import argparse
import json
import logging
import sys
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from xml_order_verifier import __version__
from xml_order_verifier.api import OrderVerifier
from xml_order_verifier.shared import (
    ConfigError,
    ConfigValidationError,
    UnsortedDocumentError,
    VerifyConfig,
    XMLInputError,
    get_logger,
    load_config_json,
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130  # Standard exit code for SIGINT

OUTPUT_FORMATS = ("text", "json")


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self, verify_config: Optional[VerifyConfig] = None):
        self.verify_config = verify_config or VerifyConfig()
        self.max_workers = 1
        self.output_format = "text"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON file.

        The file holds ``VerifyConfig`` fields plus the CLI-only keys
        ``max_workers`` and ``output_format``.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values
        """
        try:
            text = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e

        data = load_config_json(text)
        config = cls(VerifyConfig.from_dict(data))
        config.max_workers = data.get("max_workers", config.max_workers)
        config.output_format = data.get("output_format", config.output_format)
        config.validate()
        return config

    def validate(self) -> None:
        """Check the CLI-only settings.

        Raises:
            ConfigValidationError: If a setting has the wrong type or value
        """
        # bool is an int subclass
        if (
            isinstance(self.max_workers, bool)
            or not isinstance(self.max_workers, int)
            or self.max_workers < 1
        ):
            raise ConfigValidationError(
                f"Invalid max_workers: {self.max_workers!r} (must be a positive integer)",
                field_name="max_workers",
                suggestions=["1", "4"],
            )
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"Invalid output_format: {self.output_format!r}",
                field_name="output_format",
                suggestions=list(OUTPUT_FORMATS),
            )

    def apply_arguments(self, args: argparse.Namespace) -> None:
        """Apply command-line overrides on top of file or default settings."""
        overrides: Dict[str, Any] = {}
        if args.fail_on:
            overrides["fail_on"] = args.fail_on
        if args.fail_type:
            overrides["fail_type"] = args.fail_type
        if args.keep_namespaces:
            overrides["strip_namespaces"] = False
        if overrides:
            self.verify_config = self.verify_config.override(**overrides)

        if args.workers is not None:
            self.max_workers = args.workers
        if args.format:
            self.output_format = args.format
        self.validate()


def verify_pair(config: VerifyConfig, original: Path, canonical: Path) -> Dict[str, Any]:
    """Verify one file pair and describe the outcome as a dictionary.

    Runs in worker processes, so it must stay a module-level function.
    """
    verifier = OrderVerifier(config)
    try:
        report = verifier.verify_files(original, canonical)
    except UnsortedDocumentError as e:
        return {
            "file": e.label,
            "ordered": False,
            "stopped": True,
            "result": e.result.to_dict(),
        }
    except XMLInputError as e:
        return {"file": str(original.absolute()), "ordered": False, "error": str(e)}
    return report.to_dict()


class VerificationRunner:
    """Runs the verification of every file pair given on the command line."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.logger = get_logger(__name__, None, "cli_runner")

    def run(self, pairs: List[Tuple[Path, Path]]) -> List[Dict[str, Any]]:
        if self.config.max_workers > 1 and len(pairs) > 1:
            return self._run_parallel(pairs)
        return self._run_sequential(pairs)

    def _run_sequential(self, pairs: List[Tuple[Path, Path]]) -> List[Dict[str, Any]]:
        results = []
        for original, canonical in pairs:
            outcome = verify_pair(self.config.verify_config, original, canonical)
            results.append(outcome)
            if outcome.get("stopped"):
                # STOP policy: abort at the first unsorted file
                break
        return results

    def _run_parallel(self, pairs: List[Tuple[Path, Path]]) -> List[Dict[str, Any]]:
        self.logger.debug(
            "Verifying in parallel",
            extra={"pairs": len(pairs), "workers": self.config.max_workers},
        )
        with ProcessPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                executor.submit(verify_pair, self.config.verify_config, original, canonical)
                for original, canonical in pairs
            ]
            return [future.result() for future in futures]


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-order-verify",
        description=(
            "Verify that XML files are already in the order of their sorted versions"
        ),
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Pairs of ORIGINAL SORTED files",
    )
    parser.add_argument(
        "--fail-on",
        choices=["xmlelements", "stringdifference"],
        help="Compare xml elements (default) or the text line by line",
    )
    parser.add_argument(
        "--fail-type",
        choices=["warn", "stop"],
        help="Warn about unsorted files (default) or stop with an error",
    )
    parser.add_argument(
        "--keep-namespaces",
        action="store_true",
        help="Compare namespace-qualified element names",
    )
    parser.add_argument(
        "--format", "-f",
        choices=list(OUTPUT_FORMATS),
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file",
    )
    parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of parallel worker processes",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output",
    )

    return parser


def pair_paths(paths: List[Path]) -> List[Tuple[Path, Path]]:
    """Group positional paths into (original, sorted) pairs."""
    if len(paths) % 2:
        raise ValueError("Paths must be given as ORIGINAL SORTED pairs")
    return list(zip(paths[::2], paths[1::2]))


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format verification results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if not results:
        return "No files verified."

    lines = []
    ordered = sum(1 for r in results if r.get("ordered", False))
    lines.append(f"Verified {len(results)} files, {ordered} sorted")
    lines.append("-" * 60)

    for result in results:
        status = "✓" if result.get("ordered", False) else "✗"
        lines.append(f"{status} {result['file']}")
        if "error" in result:
            lines.append(f"   Error: {result['error']}")
        elif not result.get("ordered", False):
            lines.append(f"   {result['result']['message']}")

    return "\n".join(lines)


def exit_code_for(results: List[Dict[str, Any]]) -> int:
    """Failure when any file could not be read or the STOP policy fired."""
    if not results:
        return EXIT_FAILURE
    if any("error" in r or r.get("stopped") for r in results):
        return EXIT_FAILURE
    return EXIT_OK


def configure_logging(args: argparse.Namespace, config: CLIConfig) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, config.verify_config.logging_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        pairs = pair_paths(args.paths)
    except ValueError as e:
        parser.error(str(e))

    try:
        config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
        config.apply_arguments(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    configure_logging(args, config)

    try:
        results = VerificationRunner(config).run(pairs)
    except KeyboardInterrupt:
        print("\nVerification interrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED

    print(format_results(results, config.output_format))
    return exit_code_for(results)


if __name__ == "__main__":
    sys.exit(main())
