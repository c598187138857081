"""Reporting of evaluation results as text or JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypedDict

from styleguard._console import (
    log_error,
    log_error_line,
    log_line,
    log_rule,
    log_section,
    log_success,
)
from styleguard.evaluator import EvaluationResult
from styleguard.registry import RuleRegistry
from styleguard.rules import SECTIONS, RuleReport, Violation

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VIOLATIONS = 2

EXCERPT_WIDTH = 80


class ViolationJson(TypedDict):
    """Schema for one violation in JSON output."""

    file: str
    line: int
    column: int
    rule: str
    kind: str
    message: str
    source: str


class ReportJson(TypedDict):
    """Schema for the JSON report."""

    files_checked: int
    summary: dict[str, int]
    violations: list[ViolationJson]


def display_path(path: Path, root: Path | None) -> str:
    """Show a path relative to root when it lives under it."""
    if root is not None:
        resolved = path.resolve()
        resolved_root = root.resolve()
        if resolved.is_relative_to(resolved_root):
            return resolved.relative_to(resolved_root).as_posix()
    return path.as_posix()


def section_counts(reports: list[RuleReport]) -> dict[str, int]:
    """Total violations per guide section, in guide order."""
    counts = dict.fromkeys(SECTIONS, 0)
    for rep in reports:
        counts[rep.section] = counts.get(rep.section, 0) + rep.violations
    return counts


def excerpt(text: str) -> str:
    """Cut long source lines for display."""
    return text[:EXCERPT_WIDTH] + "..." if len(text) > EXCERPT_WIDTH else text


def format_violation(v: Violation, root: Path | None) -> str:
    """Format a violation as ``path:line:col: kind message``."""
    return f"{display_path(v.file, root)}:{v.line_no}:{v.col}: {v.kind} {v.message}"


def report_text(result: EvaluationResult, root: Path | None) -> int:
    """Print a section summary and any violations; return the exit code."""
    log_line("Style rule summary:")
    for section, count in section_counts(result.reports).items():
        log_line(f"  {section}: {count} violations")

    if result.violations:
        log_error("Style checks failed:")
        for v in result.violations:
            log_error_line(f"  {format_violation(v, root)}")
            if v.line:
                log_error_line(f"      {excerpt(v.line)}")
        return EXIT_VIOLATIONS

    log_success("Style checks passed: no violations found.")
    return EXIT_OK


def build_json_report(result: EvaluationResult, root: Path | None) -> ReportJson:
    """Build the JSON-serializable report."""
    violations: list[ViolationJson] = [
        {
            "file": display_path(v.file, root),
            "line": v.line_no,
            "column": v.col,
            "rule": v.rule,
            "kind": v.kind,
            "message": v.message,
            "source": v.line,
        }
        for v in result.violations
    ]
    return {
        "files_checked": len(result.files),
        "summary": section_counts(result.reports),
        "violations": violations,
    }


def report_json(result: EvaluationResult, root: Path | None) -> int:
    """Print the JSON report; return the exit code."""
    log_line(json.dumps(build_json_report(result, root), indent=2))
    return EXIT_VIOLATIONS if result.violations else EXIT_OK


def render_rule_list(registry: RuleRegistry) -> None:
    """Print every rule grouped under its guide section."""
    for section in registry.sections():
        log_section(SECTIONS[section])
        for rule in registry.rules():
            if rule.section == section:
                log_rule(rule.name, rule.summary)


__all__ = [
    "EXIT_ERROR",
    "EXIT_OK",
    "EXIT_VIOLATIONS",
    "build_json_report",
    "display_path",
    "excerpt",
    "format_violation",
    "render_rule_list",
    "report_json",
    "report_text",
    "section_counts",
]
