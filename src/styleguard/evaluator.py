"""Rule evaluation over scanned files."""

from __future__ import annotations

import fnmatch
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import NamedTuple

from styleguard._console import log_debug
from styleguard.config import StyleConfig
from styleguard.rules import Rule, RuleReport, Violation
from styleguard.scanner import ParseError, SourceFile, iter_source_files, scan_file

SYNTAX_ERROR = "syntax-error"
SYNTAX_ERROR_SECTION = "layout"


class EvaluationResult(NamedTuple):
    """Outcome of checking a set of files."""

    files: list[Path]
    violations: list[Violation]
    reports: list[RuleReport]


def _ignored_selectors(rel_path: Path, per_file_ignores: dict[str, list[str]]) -> set[str]:
    """Collect rule/section selectors ignored for this file."""
    posix = rel_path.as_posix()
    out: set[str] = set()
    for pattern, selectors in per_file_ignores.items():
        if fnmatch.fnmatch(posix, pattern):
            out.update(selectors)
    return out


def sort_violations(violations: Iterable[Violation]) -> list[Violation]:
    """Order violations by file, line, column and kind."""
    return sorted(violations, key=lambda v: (str(v.file), v.line_no, v.col, v.kind))


def evaluate_source(
    source: SourceFile, rules: Sequence[Rule], config: StyleConfig
) -> list[Violation]:
    """Apply each rule to one scanned file."""
    ignored = _ignored_selectors(source.rel_path, config["per_file_ignores"])
    violations: list[Violation] = []
    for rule in rules:
        if rule.name in ignored or rule.section in ignored:
            continue
        violations.extend(rule.check(source, config))
    return sort_violations(violations)


def _syntax_violation(exc: ParseError) -> Violation:
    return Violation(
        file=exc.path,
        line_no=exc.line_no,
        col=exc.col,
        rule=SYNTAX_ERROR,
        kind=SYNTAX_ERROR,
        message=exc.detail,
        line="",
    )


def evaluate_paths(
    paths: Iterable[Path],
    rules: Sequence[Rule],
    config: StyleConfig,
    root: Path | None = None,
) -> EvaluationResult:
    """Discover, scan and check every Python file under ``paths``.

    A file that fails to parse becomes a single syntax-error violation so
    one broken file does not hide the rest of the report.
    """
    files = iter_source_files(paths, config["exclude"])
    violations: list[Violation] = []
    for path in files:
        log_debug(f"checking {path}")
        try:
            source = scan_file(path, root=root)
        except ParseError as exc:
            log_debug(str(exc))
            violations.append(_syntax_violation(exc))
            continue
        violations.extend(evaluate_source(source, rules, config))

    counts = Counter(v.rule for v in violations)
    reports = [RuleReport(name=r.name, section=r.section, violations=counts[r.name]) for r in rules]
    if counts[SYNTAX_ERROR]:
        reports.append(
            RuleReport(
                name=SYNTAX_ERROR, section=SYNTAX_ERROR_SECTION, violations=counts[SYNTAX_ERROR]
            )
        )
    return EvaluationResult(files=files, violations=sort_violations(violations), reports=reports)


__all__ = [
    "SYNTAX_ERROR",
    "EvaluationResult",
    "evaluate_paths",
    "evaluate_source",
    "sort_violations",
]
