"""Rules for detecting weak or fake tests.

These rules identify test anti-patterns that achieve code coverage
without actually verifying behavior. Coverage shows lines executed,
not correctness proven.

Violations:
- weak-assertion-is-not-none: `assert x is not None` proves existence only
- weak-assertion-isinstance: Type check doesn't verify behavior
- weak-assertion-hasattr: Attribute exists, but what's its value?
- weak-assertion-len-zero: `assert len(x) > 0` checks existence not content
- weak-assertion-in-output: String matching in captured output is fragile
- mock-without-assert-called-with: Mock verified called but not with what args
- excessive-mocking: Test patches more than the configured number of things
- test-without-assert: Test function never asserts anything
- test-file-name: Module defines tests pytest will never collect
"""

from __future__ import annotations

import ast

from styleguard.config import StyleConfig
from styleguard.rules import RuleExamples, Violation
from styleguard.rules.util import (
    in_dirs,
    is_test_filename,
    is_test_module,
    make_violation,
    node_violation,
)
from styleguard.scanner import SourceFile

_TEST_PATH = "tests/test_example.py"


def _is_patch_call(func: ast.expr) -> bool:
    """Check if func is a patch() call."""
    if isinstance(func, ast.Attribute) and func.attr == "patch":
        return True
    return isinstance(func, ast.Name) and func.id == "patch"


class _AssertVisitor(ast.NodeVisitor):
    """Visitor to analyze assert statements in test functions."""

    def __init__(self, source: SourceFile, rule: str, max_patches: int) -> None:
        self.source = source
        self.rule = rule
        self.max_patches = max_patches
        self.violations: list[Violation] = []
        self.function_mock_count: int = 0

    def _add(self, node: ast.stmt, kind: str, message: str) -> None:
        self.violations.append(node_violation(self.source, self.rule, node, message, kind=kind))

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        if node.name.startswith("test_"):
            self._analyze_test_function(node)
        self.generic_visit(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        if node.name.startswith("test_"):
            self._analyze_test_function(node)
        self.generic_visit(node)

    def _analyze_test_function(self, node: ast.FunctionDef | ast.AsyncFunctionDef) -> None:
        self.function_mock_count = 0

        for child in ast.walk(node):
            self._check_assert(child)
            self._check_mock_usage(child)

        if self.function_mock_count > self.max_patches:
            self._add(
                node,
                "excessive-mocking",
                f"test patches {self.function_mock_count} things, "
                f"limit is {self.max_patches}",
            )

    def _check_assert(self, node: ast.AST) -> None:
        """Check for weak assertion patterns."""
        if not isinstance(node, ast.Assert):
            return

        test = node.test

        if self._is_identity_check_negated(test):
            self._add(node, "weak-assertion-is-not-none", "assert only proves the value exists")

        if self._is_call_to(test, "isinstance"):
            self._add(node, "weak-assertion-isinstance", "assert only checks the type")

        if self._is_call_to(test, "hasattr"):
            self._add(node, "weak-assertion-hasattr", "assert only checks an attribute exists")

        if self._is_len_existence_check(test):
            self._add(node, "weak-assertion-len-zero", "assert only checks the size is non-zero")

        if self._is_string_in_output(test):
            self._add(node, "weak-assertion-in-output", "assert matches a substring of output")

    def _check_mock_usage(self, node: ast.AST) -> None:
        """Check for mock-related issues."""
        if isinstance(node, ast.Call) and _is_patch_call(node.func):
            self.function_mock_count += 1

        if isinstance(node, ast.Assert) and self._is_mock_called_check(node.test):
            self._add(
                node,
                "mock-without-assert-called-with",
                "assert the call arguments, not just that the mock was called",
            )

    def _is_identity_check_negated(self, node: ast.expr) -> bool:
        """Check if node is `x is not None`."""
        if not isinstance(node, ast.Compare):
            return False
        if len(node.ops) != 1 or not isinstance(node.ops[0], ast.IsNot):
            return False

        comparator = node.comparators[0]
        return isinstance(comparator, ast.Constant) and comparator.value is None

    def _is_call_to(self, node: ast.expr, func_name: str) -> bool:
        """Check if node is a call to the named builtin."""
        if not isinstance(node, ast.Call):
            return False
        return isinstance(node.func, ast.Name) and node.func.id == func_name

    def _is_len_existence_check(self, node: ast.expr) -> bool:
        """Check if node is len(x) > 0 or len(x) >= 1."""
        if not isinstance(node, ast.Compare):
            return False
        if not isinstance(node.left, ast.Call):
            return False

        func = node.left.func
        if not (isinstance(func, ast.Name) and func.id == "len"):
            return False
        if len(node.ops) != 1 or len(node.comparators) != 1:
            return False

        op = node.ops[0]
        comp = node.comparators[0]
        if not isinstance(comp, ast.Constant):
            return False

        if isinstance(op, ast.Gt) and comp.value == 0:
            return True
        return isinstance(op, ast.GtE) and comp.value == 1

    def _is_string_in_output(self, node: ast.expr) -> bool:
        """Check if node is 'string' in x.out or x.err."""
        if not isinstance(node, ast.Compare):
            return False
        if len(node.ops) != 1 or not isinstance(node.ops[0], ast.In):
            return False

        comparator = node.comparators[0]
        if not isinstance(comparator, ast.Attribute):
            return False

        return comparator.attr in ("out", "err", "stdout", "stderr")

    def _is_mock_called_check(self, node: ast.expr) -> bool:
        """Check if node is mock.called without args check."""
        return isinstance(node, ast.Attribute) and node.attr == "called"


class WeakAssertionRule:
    """Guard rule for detecting weak or fake tests."""

    name = "weak-assertion"
    section = "testing"
    summary = "Assert on values, not on existence, type or captured output"
    examples = RuleExamples(
        good=(
            "def test_parse_port() -> None:\n"
            '    port = int("8080")\n'
            "    assert port == 8080\n"
        ),
        bad=(
            "def test_parse_port() -> None:\n"
            '    port = int("8080")\n'
            "    assert port is not None\n"
        ),
        path=_TEST_PATH,
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        if not is_test_module(source, config["test_dirs"]):
            return []
        visitor = _AssertVisitor(source, self.name, config["max_patches"])
        visitor.visit(source.tree)
        return visitor.violations


def _is_raises_item(item: ast.withitem) -> bool:
    """Check if a with-item is a raises(...) context manager."""
    expr = item.context_expr
    if not isinstance(expr, ast.Call):
        return False
    func = expr.func
    if isinstance(func, ast.Attribute):
        return func.attr in ("raises", "assertRaises", "assertRaisesRegex")
    return isinstance(func, ast.Name) and func.id == "raises"


def _has_verification(node: ast.FunctionDef | ast.AsyncFunctionDef) -> bool:
    """Check if a test function asserts anything at all."""
    for child in ast.walk(node):
        if isinstance(child, ast.Assert):
            return True
        if isinstance(child, ast.With | ast.AsyncWith) and any(
            _is_raises_item(item) for item in child.items
        ):
            return True
        if (
            isinstance(child, ast.Call)
            and isinstance(child.func, ast.Attribute)
            and child.func.attr.startswith("assert")
        ):
            return True
    return False


class TestWithoutAssertRule:
    """Every test verifies something."""

    __test__ = False

    name = "test-without-assert"
    section = "testing"
    summary = "Make every test assert on an outcome"
    examples = RuleExamples(
        good=(
            "def test_total() -> None:\n"
            "    total = sum([1, 2, 3])\n"
            "    assert total == 6\n"
        ),
        bad="def test_total() -> None:\n    sum([1, 2, 3])\n",
        path=_TEST_PATH,
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        if not is_test_module(source, config["test_dirs"]):
            return []
        out: list[Violation] = []
        for node in ast.walk(source.tree):
            if not isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
                continue
            if node.name.startswith("test_") and not _has_verification(node):
                out.append(
                    node_violation(
                        source, self.name, node, f"test '{node.name}' never asserts anything"
                    )
                )
        return out


class TestFileNameRule:
    """Modules that define tests are named so pytest collects them."""

    __test__ = False

    name = "test-file-name"
    section = "testing"
    summary = "Name test modules test_*.py so they are collected"
    examples = RuleExamples(
        good="def test_total() -> None:\n    assert sum([1, 2]) == 3\n",
        bad="def test_total() -> None:\n    assert sum([1, 2]) == 3\n",
        path=_TEST_PATH,
        bad_path="tests/totals.py",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        if not in_dirs(source, config["test_dirs"]):
            return []
        filename = source.rel_path.name
        if filename == "conftest.py":
            return []
        if is_test_filename(filename):
            return []
        for node in source.tree.body:
            if not isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef):
                continue
            if node.name.startswith("test_"):
                return [
                    make_violation(
                        source,
                        self.name,
                        node.lineno,
                        f"'{filename}' defines tests but is not named test_*.py",
                    )
                ]
        return []


__all__ = ["TestFileNameRule", "TestWithoutAssertRule", "WeakAssertionRule"]
