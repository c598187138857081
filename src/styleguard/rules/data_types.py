"""Data type rules: precise annotations and no escape hatches.

Violations:
- typing-import-<name>: forbidden name imported from typing
- typing-<name>-usage: forbidden name used as typing.<name>
- cast-call: direct cast() call
- any-usage: bare Any name
- object-annotation: object used in an annotation
- missing-return-annotation / missing-argument-annotation
- mutable-default: mutable value used as an argument default
"""

from __future__ import annotations

import ast

from styleguard.config import StyleConfig
from styleguard.rules import RuleExamples, Violation
from styleguard.rules.util import iter_functions, node_violation
from styleguard.scanner import SourceFile

_MUTABLE_LITERALS = (ast.List, ast.Dict, ast.Set, ast.ListComp, ast.DictComp, ast.SetComp)
_MUTABLE_CALLS = frozenset({"list", "dict", "set", "bytearray"})


def _contains_object_in_annotation(node: ast.AST) -> bool:
    """Check if AST node contains 'object' as a type annotation."""
    return any(isinstance(child, ast.Name) and child.id == "object" for child in ast.walk(node))


class ForbiddenTypingRule:
    """Guard rule for typing escape hatches (Any, cast, TypeAlias by default)."""

    name = "forbidden-typing"
    section = "data-types"
    summary = "Do not reach for Any, cast or TypeAlias; describe the real type"
    examples = RuleExamples(
        good=(
            "from typing import Protocol\n"
            "\n"
            "\n"
            "class Sized(Protocol):\n"
            "    def size(self) -> int: ...\n"
        ),
        bad="from typing import Any\n\nPAYLOAD: Any = None\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        violations: list[Violation] = []
        forbidden = set(config["forbidden_typing"])

        for node in ast.walk(source.tree):
            if isinstance(node, ast.ImportFrom) and node.module == "typing":
                for alias in node.names:
                    if alias.name in forbidden:
                        violations.append(
                            node_violation(
                                source,
                                self.name,
                                node,
                                f"'{alias.name}' imported from typing",
                                kind=f"typing-import-{alias.name.lower()}",
                            )
                        )

            if (
                isinstance(node, ast.Attribute)
                and isinstance(node.value, ast.Name)
                and node.value.id == "typing"
                and node.attr in forbidden
            ):
                violations.append(
                    node_violation(
                        source,
                        self.name,
                        node,
                        f"typing.{node.attr} used",
                        kind=f"typing-{node.attr.lower()}-usage",
                    )
                )

            if (
                "cast" in forbidden
                and isinstance(node, ast.Call)
                and isinstance(node.func, ast.Name)
                and node.func.id == "cast"
            ):
                violations.append(
                    node_violation(source, self.name, node, "cast() call", kind="cast-call")
                )

            if "Any" in forbidden and isinstance(node, ast.Name) and node.id == "Any":
                violations.append(
                    node_violation(source, self.name, node, "Any used", kind="any-usage")
                )

        return violations


class ObjectAnnotationRule:
    """Check for object in type annotations."""

    name = "object-annotation"
    section = "data-types"
    summary = "Do not annotate with object; name the type you expect"
    examples = RuleExamples(
        good="def describe(value: int) -> str:\n    return str(value)\n",
        bad="def describe(value: object) -> str:\n    return str(value)\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        violations: list[Violation] = []
        message = "object used in annotation"

        for node in ast.walk(source.tree):
            if (
                isinstance(node, ast.AnnAssign)
                and _contains_object_in_annotation(node.annotation)
            ):
                violations.append(node_violation(source, self.name, node, message))

            if (
                isinstance(node, ast.arg)
                and node.annotation is not None
                and _contains_object_in_annotation(node.annotation)
            ):
                violations.append(node_violation(source, self.name, node, message))

            if (
                isinstance(node, ast.FunctionDef | ast.AsyncFunctionDef)
                and node.returns is not None
                and _contains_object_in_annotation(node.returns)
            ):
                violations.append(node_violation(source, self.name, node, message))

        return violations


class MissingAnnotationRule:
    """Every function annotates its arguments and its return type."""

    name = "missing-annotation"
    section = "data-types"
    summary = "Annotate every argument and return type"
    examples = RuleExamples(
        good="def double(value: int) -> int:\n    return value * 2\n",
        bad="def double(value):\n    return value * 2\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for node in iter_functions(source.tree):
            if node.returns is None:
                out.append(
                    node_violation(
                        source,
                        self.name,
                        node,
                        f"function '{node.name}' has no return annotation",
                        kind="missing-return-annotation",
                    )
                )
            out.extend(self._check_args(source, node))
        return out

    def _check_args(
        self, source: SourceFile, node: ast.FunctionDef | ast.AsyncFunctionDef
    ) -> list[Violation]:
        args = node.args
        named = [*args.posonlyargs, *args.args]
        if named and named[0].arg in ("self", "cls"):
            named = named[1:]
        every = [*named, *args.kwonlyargs]
        if args.vararg is not None:
            every.append(args.vararg)
        if args.kwarg is not None:
            every.append(args.kwarg)
        return [
            node_violation(
                source,
                self.name,
                arg,
                f"argument '{arg.arg}' of '{node.name}' has no annotation",
                kind="missing-argument-annotation",
            )
            for arg in every
            if arg.annotation is None
        ]


class MutableDefaultRule:
    """Argument defaults are immutable."""

    name = "mutable-default"
    section = "data-types"
    summary = "Do not use lists, dicts or sets as argument defaults"
    examples = RuleExamples(
        good=(
            "def collect(items: list[str] | None = None) -> list[str]:\n"
            "    return [] if items is None else items\n"
        ),
        bad="def collect(items: list[str] = []) -> list[str]:\n    return items\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        out: list[Violation] = []
        for node in iter_functions(source.tree):
            defaults = [*node.args.defaults, *node.args.kw_defaults]
            for default in defaults:
                if default is not None and self._is_mutable(default):
                    out.append(
                        node_violation(
                            source,
                            self.name,
                            default,
                            f"mutable default argument in '{node.name}'",
                        )
                    )
        return out

    def _is_mutable(self, node: ast.expr) -> bool:
        if isinstance(node, _MUTABLE_LITERALS):
            return True
        return (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id in _MUTABLE_CALLS
        )


__all__ = [
    "ForbiddenTypingRule",
    "MissingAnnotationRule",
    "MutableDefaultRule",
    "ObjectAnnotationRule",
]
