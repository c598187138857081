"""Style rules derived from the style guide.

Each rule is a small class that checks one scanned file and reports
violations. Rules are grouped by the guide section they come from.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple, Protocol

if TYPE_CHECKING:
    from styleguard.config import StyleConfig
    from styleguard.scanner import SourceFile

# Section id -> guide heading, in guide order.
SECTIONS: dict[str, str] = {
    "indentation": "Indentation",
    "layout": "Writing code that's easy on the eyes",
    "naming": "Naming",
    "data-types": "Data types",
    "function-style": "Function style",
    "testing": "Testing",
}


class Violation(NamedTuple):
    """A single rule violation."""

    file: Path
    line_no: int
    col: int
    rule: str
    kind: str
    message: str
    line: str


class RuleReport(NamedTuple):
    """Summary of violations for a rule."""

    name: str
    section: str
    violations: int


class RuleExamples(NamedTuple):
    """A "do this" and a "don't do this" snippet for a rule.

    ``path`` is the relative path the snippets are checked under, since some
    rules only apply to test or library files. ``bad_path`` overrides it for
    the bad snippet when the file name itself is what the rule checks.
    """

    good: str
    bad: str
    path: str = "src/example/module.py"
    bad_path: str = ""

    def path_for(self, good: bool) -> str:
        """Return the path a snippet is checked under."""
        if good or not self.bad_path:
            return self.path
        return self.bad_path


class Rule(Protocol):
    """Protocol for style rules."""

    @property
    def name(self) -> str: ...

    @property
    def section(self) -> str: ...

    @property
    def summary(self) -> str: ...

    @property
    def examples(self) -> RuleExamples: ...

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]: ...


__all__ = ["SECTIONS", "Rule", "RuleExamples", "RuleReport", "Violation"]
