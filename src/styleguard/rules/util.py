"""Utility functions for style rules."""

from __future__ import annotations

import ast
import fnmatch
import re
import tokenize
from collections.abc import Iterable

from styleguard.rules import Violation
from styleguard.scanner import SourceFile

SNAKE_CASE = re.compile(r"^(_{0,2}[a-z][a-z0-9_]*|_+)$")
UPPER_CASE = re.compile(r"^_{0,2}[A-Z][A-Z0-9_]*$")
PASCAL_CASE = re.compile(r"^_?[A-Z][a-zA-Z0-9]*$")

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


def make_violation(
    source: SourceFile,
    rule: str,
    line_no: int,
    message: str,
    *,
    col: int = 1,
    kind: str | None = None,
) -> Violation:
    """Build a violation, filling in the stripped source line."""
    return Violation(
        file=source.path,
        line_no=line_no,
        col=col,
        rule=rule,
        kind=rule if kind is None else kind,
        message=message,
        line=source.get_line(line_no),
    )


def node_violation(
    source: SourceFile,
    rule: str,
    node: ast.stmt | ast.expr | ast.arg | ast.excepthandler,
    message: str,
    *,
    kind: str | None = None,
) -> Violation:
    """Build a violation located at an AST node."""
    return make_violation(
        source, rule, node.lineno, message, col=node.col_offset + 1, kind=kind
    )


def in_dirs(source: SourceFile, dirs: Iterable[str]) -> bool:
    """Check if the file lives under any of the named directories."""
    parts = source.rel_path.parts[:-1]
    return any(d in parts for d in dirs)


def is_test_filename(filename: str) -> bool:
    """Check if pytest collects a module with this file name."""
    return filename.startswith("test_") or filename.endswith("_test.py")


def is_test_module(source: SourceFile, test_dirs: Iterable[str]) -> bool:
    """Check if the file is a pytest test module inside a test directory."""
    return in_dirs(source, test_dirs) and is_test_filename(source.rel_path.name)


def string_interior_lines(tokens: list[tokenize.TokenInfo]) -> set[int]:
    """Line numbers that sit inside a multi-line string, after its first line."""
    inside: set[int] = set()
    for tok in tokens:
        if tok.type == tokenize.STRING and tok.end[0] > tok.start[0]:
            inside.update(range(tok.start[0] + 1, tok.end[0] + 1))
    return inside


def matches_any(name: str, patterns: Iterable[str]) -> bool:
    """Check if name matches any fnmatch-style pattern."""
    return any(fnmatch.fnmatchcase(name, p) for p in patterns)


def named_params(node: FunctionNode) -> list[ast.arg]:
    """Return named parameters, dropping a leading self/cls."""
    args = [*node.args.posonlyargs, *node.args.args, *node.args.kwonlyargs]
    if args and args[0].arg in ("self", "cls"):
        return args[1:]
    return args


def iter_functions(tree: ast.AST) -> list[FunctionNode]:
    """Return every function and method definition in the tree."""
    return [n for n in ast.walk(tree) if isinstance(n, ast.FunctionDef | ast.AsyncFunctionDef)]


__all__ = [
    "PASCAL_CASE",
    "SNAKE_CASE",
    "UPPER_CASE",
    "FunctionNode",
    "in_dirs",
    "is_test_filename",
    "is_test_module",
    "iter_functions",
    "make_violation",
    "matches_any",
    "node_violation",
    "named_params",
    "string_interior_lines",
]
