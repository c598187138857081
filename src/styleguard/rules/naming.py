"""Naming rules.

Modules, functions, arguments and local variables are snake_case; classes
are PascalCase. Module and class level names may also be UPPER_CASE
constants or PascalCase aliases. mixedCase is never accepted.
"""

from __future__ import annotations

import ast

from styleguard.config import StyleConfig
from styleguard.rules import RuleExamples, Violation
from styleguard.rules.util import (
    PASCAL_CASE,
    SNAKE_CASE,
    UPPER_CASE,
    iter_functions,
    make_violation,
    matches_any,
    node_violation,
)
from styleguard.scanner import SourceFile


class ModuleNameRule:
    """Module file names are snake_case."""

    name = "module-name"
    section = "naming"
    summary = "Name modules in snake_case"
    examples = RuleExamples(
        good="LIMIT = 10\n",
        bad="LIMIT = 10\n",
        path="src/example/order_book.py",
        bad_path="src/example/OrderBook.py",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        stem = source.rel_path.stem
        if SNAKE_CASE.match(stem):
            return []
        return [make_violation(source, self.name, 1, f"module name '{stem}' is not snake_case")]


class ClassNameRule:
    """Class names are PascalCase."""

    name = "class-name"
    section = "naming"
    summary = "Name classes in PascalCase"
    examples = RuleExamples(
        good='class OrderBook:\n    """Open orders."""\n',
        bad='class order_book:\n    """Open orders."""\n',
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for node in ast.walk(source.tree):
            if isinstance(node, ast.ClassDef) and not PASCAL_CASE.match(node.name):
                out.append(
                    node_violation(
                        source, self.name, node, f"class name '{node.name}' is not PascalCase"
                    )
                )
        return out


class FunctionNameRule:
    """Function and method names are snake_case."""

    name = "function-name"
    section = "naming"
    summary = "Name functions and methods in snake_case"
    examples = RuleExamples(
        good="def load_orders() -> list[str]:\n    return []\n",
        bad="def loadOrders() -> list[str]:\n    return []\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for node in iter_functions(source.tree):
            if SNAKE_CASE.match(node.name) or matches_any(node.name, config["ignore_names"]):
                continue
            out.append(
                node_violation(
                    source, self.name, node, f"function name '{node.name}' is not snake_case"
                )
            )
        return out


class ArgumentNameRule:
    """Argument names are snake_case."""

    name = "argument-name"
    section = "naming"
    summary = "Name arguments in snake_case"
    examples = RuleExamples(
        good="def scale(value: float, factor: float) -> float:\n    return value * factor\n",
        bad=(
            "def scale(value: float, scaleFactor: float) -> float:\n"
            "    return value * scaleFactor\n"
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for node in ast.walk(source.tree):
            if isinstance(node, ast.arg) and not SNAKE_CASE.match(node.arg):
                out.append(
                    node_violation(
                        source, self.name, node, f"argument name '{node.arg}' is not snake_case"
                    )
                )
        return out


class _ScopeVisitor(ast.NodeVisitor):
    """Collect assigned names together with the kind of scope they live in."""

    def __init__(self) -> None:
        self.scopes: list[str] = ["module"]
        self.assigned: list[tuple[ast.Name, str]] = []

    def _enter(self, node: ast.AST, scope: str) -> None:
        self.scopes.append(scope)
        self.generic_visit(node)
        self.scopes.pop()

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._enter(node, "function")

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._enter(node, "function")

    def visit_Lambda(self, node: ast.Lambda) -> None:
        self._enter(node, "function")

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._enter(node, "class")

    def visit_Name(self, node: ast.Name) -> None:
        if isinstance(node.ctx, ast.Store):
            self.assigned.append((node, self.scopes[-1]))


class VariableNameRule:
    """Local variables are snake_case; module/class names may be constants or aliases."""

    name = "variable-name"
    section = "naming"
    summary = "Name variables in snake_case (UPPER_CASE for constants)"
    examples = RuleExamples(
        good=(
            "MAX_RETRIES = 3\n"
            "\n"
            "\n"
            "def retry_delay(attempt: int) -> float:\n"
            "    base_delay = 0.5\n"
            "    return base_delay * attempt\n"
        ),
        bad=(
            "def retry_delay(attempt: int) -> float:\n"
            "    baseDelay = 0.5\n"
            "    return baseDelay * attempt\n"
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        visitor = _ScopeVisitor()
        visitor.visit(source.tree)
        out: list[Violation] = []
        seen: set[tuple[int, str]] = set()
        for node, scope in visitor.assigned:
            if self._accepts(node.id, scope):
                continue
            key = (node.lineno, node.id)
            if key in seen:
                continue
            seen.add(key)
            expected = "snake_case" if scope == "function" else "snake_case or UPPER_CASE"
            out.append(
                node_violation(
                    source, self.name, node, f"variable name '{node.id}' is not {expected}"
                )
            )
        return out

    def _accepts(self, name: str, scope: str) -> bool:
        if SNAKE_CASE.match(name):
            return True
        if scope == "function":
            return False
        return UPPER_CASE.match(name) is not None or PASCAL_CASE.match(name) is not None


class ShortNameRule:
    """Function, class and argument names say what they hold."""

    name = "short-name"
    section = "naming"
    summary = "Avoid one-letter names outside the allowed list"
    examples = RuleExamples(
        good="def area(width: float, height: float) -> float:\n    return width * height\n",
        bad="def area(w: float, h: float) -> float:\n    return w * h\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        minimum = config["min_name_length"]
        allowed = set(config["allowed_short_names"])
        out: list[Violation] = []
        for node in ast.walk(source.tree):
            if isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef):
                name, what = node.name, "name"
            elif isinstance(node, ast.arg):
                name, what = node.arg, "argument name"
            else:
                continue
            if len(name) < minimum and name not in allowed:
                out.append(
                    node_violation(source, self.name, node, f"{what} '{name}' is too short")
                )
        return out


__all__ = [
    "ArgumentNameRule",
    "ClassNameRule",
    "FunctionNameRule",
    "ModuleNameRule",
    "ShortNameRule",
    "VariableNameRule",
]
