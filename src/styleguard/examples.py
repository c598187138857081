"""Consistency checks for the rules' own "do this" / "don't do this" examples.

A sound guide has examples that parse, good examples that pass their rule,
bad examples that fail it, and no good example that another rule rejects.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from styleguard._console import log_debug
from styleguard.config import StyleConfig, default_config
from styleguard.evaluator import evaluate_source
from styleguard.registry import RuleRegistry
from styleguard.rules import Rule
from styleguard.scanner import ParseError, SourceFile, scan_text


class ExampleFailure(NamedTuple):
    """A rule whose examples are inconsistent."""

    rule: str
    kind: str
    detail: str


def _scan_example(rule: Rule, good: bool) -> SourceFile:
    text = rule.examples.good if good else rule.examples.bad
    path = Path(rule.examples.path_for(good))
    return scan_text(path, text, root=None)


def check_rule_examples(
    rule: Rule, rules: list[Rule], config: StyleConfig
) -> list[ExampleFailure]:
    """Check one rule's examples against itself and the rest of the catalogue."""
    failures: list[ExampleFailure] = []
    scanned: dict[bool, SourceFile] = {}
    for good in (True, False):
        label = "good" if good else "bad"
        try:
            scanned[good] = _scan_example(rule, good)
        except ParseError as exc:
            log_debug(f"{rule.name} {label} example: {exc}")
            failures.append(ExampleFailure(rule.name, "example-syntax-error", f"{label}: {exc}"))
    if failures:
        return failures

    own_good = rule.check(scanned[True], config)
    if own_good:
        kinds = ", ".join(sorted({v.kind for v in own_good}))
        failures.append(ExampleFailure(rule.name, "good-example-violates", kinds))

    if not rule.check(scanned[False], config):
        failures.append(
            ExampleFailure(rule.name, "bad-example-passes", "bad example raised no violation")
        )

    others = [r for r in rules if r.name != rule.name]
    for v in evaluate_source(scanned[True], others, config):
        failures.append(
            ExampleFailure(
                rule.name,
                "good-example-conflicts",
                f"{v.rule} ({v.kind}) at line {v.line_no}: {v.message}",
            )
        )
    return failures


def check_examples(
    registry: RuleRegistry, config: StyleConfig | None = None
) -> list[ExampleFailure]:
    """Check every rule's examples; an empty list means the guide is consistent."""
    cfg = default_config() if config is None else config
    rules = registry.rules()
    failures: list[ExampleFailure] = []
    for rule in rules:
        failures.extend(check_rule_examples(rule, rules, cfg))
    return failures


__all__ = ["ExampleFailure", "check_examples", "check_rule_examples"]
