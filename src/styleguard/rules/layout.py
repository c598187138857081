"""Rules for code that is easy on the eyes.

Violations:
- line-too-long: line exceeds the configured length
- trailing-whitespace: spaces or tabs at the end of a line
- missing-final-newline: file does not end with a newline
- blank-lines: too many consecutive blank lines
- semicolon-statement / compound-statement: more than one statement per line
- comment-missing-space / inline-comment-spacing: cramped comments
"""

from __future__ import annotations

import ast
import tokenize

from styleguard.config import StyleConfig
from styleguard.rules import RuleExamples, Violation
from styleguard.rules.util import make_violation, node_violation, string_interior_lines
from styleguard.scanner import SourceFile

_COMPOUND = (
    ast.If,
    ast.For,
    ast.AsyncFor,
    ast.While,
    ast.With,
    ast.AsyncWith,
    ast.FunctionDef,
    ast.AsyncFunctionDef,
    ast.ClassDef,
    ast.Try,
    ast.TryStar,
    ast.ExceptHandler,
)

_CLAUSE_KEYWORDS = frozenset({"else", "finally"})
_LINE_END = frozenset({tokenize.NEWLINE, tokenize.COMMENT})
_LINE_START = frozenset({tokenize.NEWLINE, tokenize.NL, tokenize.INDENT, tokenize.DEDENT})


def _is_ellipsis_body(body: list[ast.stmt]) -> bool:
    if len(body) != 1:
        return False
    stmt = body[0]
    return (
        isinstance(stmt, ast.Expr)
        and isinstance(stmt.value, ast.Constant)
        and stmt.value.value is Ellipsis
    )


def _case_lines(tree: ast.AST) -> set[int]:
    """Lines that open a ``case`` clause of a match statement."""
    lines: set[int] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Match):
            lines.update(case.pattern.lineno for case in node.cases)
    return lines


def _clause_colon(tokens: list[tokenize.TokenInfo], idx: int, case_lines: set[int]) -> int | None:
    """Index of the ':' closing the else/finally/case clause header at ``idx``."""
    tok = tokens[idx]
    if tok.type != tokenize.NAME:
        return None
    if tok.string in _CLAUSE_KEYWORDS:
        nxt = idx + 1
        if nxt < len(tokens) and tokens[nxt].type == tokenize.OP and tokens[nxt].string == ":":
            return nxt
        return None
    if tok.string != "case" or tok.start[0] not in case_lines:
        return None
    if idx > 0 and tokens[idx - 1].type not in _LINE_START:
        return None
    depth = 0
    for pos in range(idx + 1, len(tokens)):
        cur = tokens[pos]
        if cur.type == tokenize.NEWLINE:
            return None
        if cur.type != tokenize.OP:
            continue
        if cur.string in ("(", "[", "{"):
            depth += 1
        elif cur.string in (")", "]", "}"):
            depth -= 1
        elif cur.string == ":" and depth == 0:
            return pos
    return None


def _has_inline_body(tokens: list[tokenize.TokenInfo], colon: int) -> bool:
    """Check if a statement other than ``...`` follows the header's colon."""
    nxt = colon + 1
    if nxt >= len(tokens) or tokens[nxt].type in _LINE_END:
        return False
    after = nxt + 1
    is_ellipsis = tokens[nxt].string == "..."
    return not (is_ellipsis and after < len(tokens) and tokens[after].type in _LINE_END)


class LineTooLongRule:
    """Keep lines within the configured length."""

    name = "line-too-long"
    section = "layout"
    summary = "Keep lines within the configured length (default 100)"
    examples = RuleExamples(
        good=(
            "GREETING = (\n"
            '    "a greeting that would not fit on one line is split across "\n'
            '    "several shorter lines inside parentheses"\n'
            ")\n"
        ),
        bad=(
            'GREETING = "a greeting that would not fit on one line is kept on one line'
            ' anyway, which makes it hard to read"\n'
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        limit = config["line_length"]
        out: list[Violation] = []
        for idx, line in enumerate(source.lines):
            if len(line) > limit:
                out.append(
                    make_violation(
                        source,
                        self.name,
                        idx + 1,
                        f"line is {len(line)} characters, limit is {limit}",
                        col=limit + 1,
                    )
                )
        return out


class TrailingWhitespaceRule:
    """No whitespace at the end of a line."""

    name = "trailing-whitespace"
    section = "layout"
    summary = "Do not leave whitespace at the end of a line"
    examples = RuleExamples(good="LIMIT = 10\n", bad="LIMIT = 10   \n")

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for idx, line in enumerate(source.lines):
            stripped = line.rstrip(" \t")
            if stripped != line:
                out.append(
                    make_violation(
                        source,
                        self.name,
                        idx + 1,
                        "trailing whitespace",
                        col=len(stripped) + 1,
                    )
                )
        return out


class MissingFinalNewlineRule:
    """End every non-empty file with a newline."""

    name = "missing-final-newline"
    section = "layout"
    summary = "End every file with a single newline"
    examples = RuleExamples(good="LIMIT = 10\n", bad="LIMIT = 10")

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        if not source.text or source.text.endswith(("\n", "\r")):
            return []
        line_no = max(len(source.lines), 1)
        last = source.lines[-1] if source.lines else ""
        return [
            make_violation(
                source, self.name, line_no, "no newline at end of file", col=len(last) + 1
            )
        ]


class BlankLinesRule:
    """Separate code with at most ``max_blank_lines`` blank lines."""

    name = "blank-lines"
    section = "layout"
    summary = "Use at most the configured number of consecutive blank lines (default 2)"
    examples = RuleExamples(
        good="FIRST = 1\n\n\nSECOND = 2\n",
        bad="FIRST = 1\n\n\n\n\nSECOND = 2\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        limit = config["max_blank_lines"]
        in_string = string_interior_lines(source.tokens)
        out: list[Violation] = []
        run = 0
        for idx, line in enumerate(source.lines):
            line_no = idx + 1
            if line.strip() != "" or line_no in in_string:
                run = 0
                continue
            run += 1
            if run == limit + 1:
                out.append(
                    make_violation(
                        source,
                        self.name,
                        line_no,
                        f"more than {limit} consecutive blank lines",
                    )
                )
        return out


class MultipleStatementsRule:
    """One statement per line."""

    name = "multiple-statements"
    section = "layout"
    summary = "Put one statement on each line"
    examples = RuleExamples(
        good="LIMIT = 10\nMAXIMUM = 20\n",
        bad="LIMIT = 10; MAXIMUM = 20\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for tok in source.tokens:
            if tok.type == tokenize.OP and tok.string == ";":
                out.append(
                    make_violation(
                        source,
                        self.name,
                        tok.start[0],
                        "statements separated by a semicolon",
                        col=tok.start[1] + 1,
                        kind="semicolon-statement",
                    )
                )

        for node in ast.walk(source.tree):
            if not isinstance(node, _COMPOUND):
                continue
            if not node.body or _is_ellipsis_body(node.body):
                continue
            if node.body[0].lineno == node.lineno:
                out.append(
                    node_violation(
                        source,
                        self.name,
                        node,
                        "statement body on the same line as its header",
                        kind="compound-statement",
                    )
                )

        case_lines = _case_lines(source.tree)
        for idx, tok in enumerate(source.tokens):
            colon = _clause_colon(source.tokens, idx, case_lines)
            if colon is not None and _has_inline_body(source.tokens, colon):
                out.append(
                    make_violation(
                        source,
                        self.name,
                        tok.start[0],
                        f"'{tok.string}' body on the same line as its header",
                        col=tok.start[1] + 1,
                        kind="compound-statement",
                    )
                )
        return out


class CommentSpacingRule:
    """Comments start with ``# ``; inline comments sit two spaces after code."""

    name = "comment-spacing"
    section = "layout"
    summary = "Start comments with '# ' and put two spaces before inline comments"
    examples = RuleExamples(
        good="LIMIT = 10  # upper bound\n",
        bad="LIMIT = 10 #upper bound\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for tok in source.tokens:
            if tok.type != tokenize.COMMENT:
                continue
            text = tok.string
            row, col = tok.start
            if row == 1 and text.startswith("#!"):
                continue
            if text != "#" and not text.startswith("# "):
                out.append(
                    make_violation(
                        source,
                        self.name,
                        row,
                        "comment should start with '# '",
                        col=col + 1,
                        kind="comment-missing-space",
                    )
                )
            prefix = tok.line[:col]
            if prefix.strip() and not prefix.endswith("  "):
                out.append(
                    make_violation(
                        source,
                        self.name,
                        row,
                        "inline comment needs at least two spaces before '#'",
                        col=col + 1,
                        kind="inline-comment-spacing",
                    )
                )
        return out


__all__ = [
    "BlankLinesRule",
    "CommentSpacingRule",
    "LineTooLongRule",
    "MissingFinalNewlineRule",
    "MultipleStatementsRule",
    "TrailingWhitespaceRule",
]
