"""Command-line entry point.

Run with: styleguard [PATHS...] or python -m styleguard
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn, TypedDict

from styleguard._console import (
    log_debug,
    log_error,
    log_error_line,
    log_header,
    log_info,
    log_success,
    log_warning,
    set_verbose,
)
from styleguard.config import (
    ConfigError,
    StyleConfig,
    apply_overrides,
    find_config_file,
    load_config,
)
from styleguard.evaluator import evaluate_paths
from styleguard.examples import check_examples
from styleguard.registry import RuleRegistry, default_registry
from styleguard.reporter import (
    EXIT_ERROR,
    EXIT_OK,
    EXIT_VIOLATIONS,
    render_rule_list,
    report_json,
    report_text,
)


class ParsedArgs(TypedDict):
    """Parsed command-line arguments."""

    paths: list[str]
    root: str | None
    config: str | None
    select: list[str] | None
    ignore: list[str] | None
    line_length: int | None
    output_format: str
    list_rules: bool
    check_examples: bool
    verbose: bool


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit code 1."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        log_error(f"ERROR: {message}")
        raise SystemExit(EXIT_ERROR)


def _split_selectors(raw: str | None) -> list[str] | None:
    """Split a comma-separated selector list."""
    if raw is None:
        return None
    return [part.strip() for part in raw.split(",") if part.strip()]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = _ArgumentParser(
        prog="styleguard",
        description="Check Python source against the style guide",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help="Files or directories to check (default: the configured include dirs)",
    )
    parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Project root used for configuration and relative paths (default: cwd)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to pyproject.toml or a standalone TOML config file",
    )
    parser.add_argument(
        "--select",
        type=str,
        default=None,
        help="Comma-separated rules or sections to run (default: all)",
    )
    parser.add_argument(
        "--ignore",
        type=str,
        default=None,
        help="Comma-separated rules or sections to skip",
    )
    parser.add_argument(
        "--line-length",
        type=int,
        default=None,
        help="Maximum line length (default: 100)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List every rule grouped by guide section and exit",
    )
    parser.add_argument(
        "--check-examples",
        action="store_true",
        help="Verify each rule's good and bad examples and exit",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print each file as it is checked",
    )
    return parser


def _extract_args(args: argparse.Namespace) -> ParsedArgs:
    """Extract and validate arguments from Namespace.

    Raises:
        TypeError: If argument types are incorrect.
    """
    paths = args.paths
    if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
        msg = f"Expected list of str for paths, got {type(paths).__name__}"
        raise TypeError(msg)
    path_list: list[str] = [str(p) for p in paths]

    root = args.root
    if root is not None and not isinstance(root, str):
        msg = f"Expected str or None for root, got {type(root).__name__}"
        raise TypeError(msg)

    config = args.config
    if config is not None and not isinstance(config, str):
        msg = f"Expected str or None for config, got {type(config).__name__}"
        raise TypeError(msg)

    line_length = args.line_length
    if line_length is not None and not isinstance(line_length, int):
        msg = f"Expected int or None for line_length, got {type(line_length).__name__}"
        raise TypeError(msg)

    output_format = args.output_format
    if not isinstance(output_format, str):
        msg = f"Expected str for format, got {type(output_format).__name__}"
        raise TypeError(msg)

    return {
        "paths": path_list,
        "root": root,
        "config": config,
        "select": _split_selectors(args.select),
        "ignore": _split_selectors(args.ignore),
        "line_length": line_length,
        "output_format": output_format,
        "list_rules": bool(args.list_rules),
        "check_examples": bool(args.check_examples),
        "verbose": bool(args.verbose),
    }


def resolve_config(args: ParsedArgs, root: Path) -> StyleConfig:
    """Load the configuration file (explicit or discovered) and apply CLI overrides."""
    config_path = Path(args["config"]) if args["config"] is not None else find_config_file(root)
    config = load_config(config_path)
    return apply_overrides(
        config,
        select=args["select"],
        ignore=args["ignore"],
        line_length=args["line_length"],
    )


def target_paths(args: ParsedArgs, root: Path, config: StyleConfig) -> list[Path]:
    """Paths to scan: explicit ones, else existing include dirs, else the root."""
    if args["paths"]:
        return [Path(p) for p in args["paths"]]
    included = [root / name for name in config["include"] if (root / name).exists()]
    return included if included else [root]


def run_example_checks(registry: RuleRegistry, config: StyleConfig) -> int:
    """Check rule examples and return the exit code."""
    log_header("Rule example checks")
    log_info(f"Checking good and bad examples of {len(registry)} rules")
    failures = check_examples(registry, config)
    if failures:
        log_error("Example checks failed:")
        for failure in failures:
            log_error_line(f"  {failure.rule}: {failure.kind} {failure.detail}")
        return EXIT_VIOLATIONS
    log_success(f"Example checks passed: {len(registry)} rules consistent.")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Entry point for the styleguard command."""
    args = _extract_args(build_parser().parse_args(argv))
    set_verbose(args["verbose"])
    registry = default_registry()

    if args["list_rules"]:
        render_rule_list(registry)
        return EXIT_OK

    root = Path(args["root"]).resolve() if args["root"] is not None else Path.cwd()
    try:
        config = resolve_config(args, root)
        if args["check_examples"]:
            return run_example_checks(registry, config)
        rules = registry.select(config["select"], config["ignore"])
        paths = target_paths(args, root, config)
        result = evaluate_paths(paths, rules, config, root=root)
    except (ConfigError, FileNotFoundError, ValueError) as exc:
        log_error(f"ERROR: {exc}")
        return EXIT_ERROR

    log_debug(f"checked {len(result.files)} files with {len(rules)} rules")
    if not result.files:
        log_warning(f"No Python files found under {', '.join(str(p) for p in paths)}")
    if args["output_format"] == "json":
        return report_json(result, root)
    return report_text(result, root)


__all__ = ["ParsedArgs", "build_parser", "main", "resolve_config", "target_paths"]
