"""Indentation rules.

Violations:
- tab-indent: leading whitespace contains a tab
- indent-width: a block is not indented by exactly the configured width
"""

from __future__ import annotations

import tokenize

from styleguard.config import StyleConfig
from styleguard.rules import RuleExamples, Violation
from styleguard.rules.util import make_violation, string_interior_lines
from styleguard.scanner import SourceFile


class TabIndentRule:
    """Indent with spaces, never tabs."""

    name = "tab-indent"
    section = "indentation"
    summary = "Indent with spaces, never tabs"
    examples = RuleExamples(
        good="def total(values: list[int]) -> int:\n    return sum(values)\n",
        bad="def total(values: list[int]) -> int:\n\treturn sum(values)\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        in_string = string_interior_lines(source.tokens)
        out: list[Violation] = []
        for idx, line in enumerate(source.lines):
            if idx + 1 in in_string:
                continue
            leading = line[: len(line) - len(line.lstrip(" \t"))]
            if "\t" in leading:
                col = leading.index("\t") + 1
                out.append(
                    make_violation(
                        source, self.name, idx + 1, "tab in indentation", col=col
                    )
                )
        return out


class IndentWidthRule:
    """Each nested block is indented by exactly ``indent_width`` columns.

    Works on INDENT/DEDENT tokens, so continuation lines inside brackets
    are free to align however they like.
    """

    name = "indent-width"
    section = "indentation"
    summary = "Indent each block by the configured width (default 4 spaces)"
    examples = RuleExamples(
        good=(
            "def clamp(value: int, limit: int) -> int:\n"
            "    if value > limit:\n"
            "        return limit\n"
            "    return value\n"
        ),
        bad=(
            "def clamp(value: int, limit: int) -> int:\n"
            "  if value > limit:\n"
            "      return limit\n"
            "  return value\n"
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        width = config["indent_width"]
        out: list[Violation] = []
        stack: list[int] = [0]
        for tok in source.tokens:
            if tok.type == tokenize.INDENT:
                current = len(tok.string.expandtabs(8))
                step = current - stack[-1]
                if step != width:
                    out.append(
                        make_violation(
                            source,
                            self.name,
                            tok.start[0],
                            f"block indented by {step} columns, expected {width}",
                        )
                    )
                stack.append(current)
            elif tok.type == tokenize.DEDENT and len(stack) > 1:
                stack.pop()
        return out


__all__ = ["IndentWidthRule", "TabIndentRule"]
