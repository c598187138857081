"""Function style rules.

Checks for violations:
- Functions longer than the configured number of lines
- Functions with too many parameters
- Silent exception handling (except: pass)
- Broad exceptions (Exception/BaseException) must log AND re-raise
- Specific exceptions must log OR re-raise
- No `contextlib.suppress` usage
- No `print()` in library code (use a console/logging module instead)
- No `type: ignore`, `noqa` or `pragma` comments
"""

from __future__ import annotations

import ast
import re
import tokenize

from styleguard.config import StyleConfig
from styleguard.rules import RuleExamples, Violation
from styleguard.rules.util import (
    in_dirs,
    iter_functions,
    make_violation,
    named_params,
    node_violation,
)
from styleguard.scanner import SourceFile

# =============================================================================
# Size Rules
# =============================================================================


class FunctionLengthRule:
    """Keep functions short enough to read in one screen."""

    name = "function-length"
    section = "function-style"
    summary = "Keep functions within the configured length (default 80 lines)"
    examples = RuleExamples(
        good="def answer() -> int:\n    return 42\n",
        bad=(
            "def tally() -> int:\n"
            "    total = 0\n"
            + "    total += 1\n" * 80
            + "    return total\n"
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        limit = config["max_function_lines"]
        out: list[Violation] = []
        for node in iter_functions(source.tree):
            end = node.end_lineno if node.end_lineno is not None else node.lineno
            length = end - node.lineno + 1
            if length > limit:
                out.append(
                    node_violation(
                        source,
                        self.name,
                        node,
                        f"function '{node.name}' is {length} lines long, limit is {limit}",
                    )
                )
        return out


class TooManyParametersRule:
    """Functions take a small number of named parameters."""

    name = "too-many-parameters"
    section = "function-style"
    summary = "Take at most the configured number of parameters (default 6)"
    examples = RuleExamples(
        good=(
            "def connect(host: str, port: int, timeout: float) -> str:\n"
            '    return f"{host}:{port}/{timeout}"\n'
        ),
        bad=(
            "def connect(\n"
            "    host: str,\n"
            "    port: int,\n"
            "    user: str,\n"
            "    password: str,\n"
            "    database: str,\n"
            "    timeout: float,\n"
            "    retries: int,\n"
            ") -> str:\n"
            "    return host\n"
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        limit = config["max_parameters"]
        out: list[Violation] = []
        for node in iter_functions(source.tree):
            count = len(named_params(node))
            if count > limit:
                out.append(
                    node_violation(
                        source,
                        self.name,
                        node,
                        f"function '{node.name}' takes {count} parameters, limit is {limit}",
                    )
                )
        return out


# =============================================================================
# Exception Rules
# =============================================================================

_BROAD_TYPES = frozenset({"Exception", "BaseException"})
_LOG_OWNERS = frozenset({"logging", "log", "logger"})
_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "exception", "critical"})


def _type_name(node: ast.expr) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    return None


def _is_broad_exception(handler: ast.ExceptHandler) -> bool:
    """Check if the handler is bare or catches Exception/BaseException."""
    if handler.type is None:
        return True
    types = handler.type.elts if isinstance(handler.type, ast.Tuple) else [handler.type]
    return any(_type_name(t) in _BROAD_TYPES for t in types)


def _is_silent_body(body: list[ast.stmt]) -> bool:
    """Check if the body is a lone ``pass``, ``...`` or other constant."""
    if len(body) != 1:
        return False
    stmt = body[0]
    return isinstance(stmt, ast.Pass) or (
        isinstance(stmt, ast.Expr) and isinstance(stmt.value, ast.Constant)
    )


def _is_log_call(node: ast.AST) -> bool:
    """Check for ``logger.warning(...)``-style calls and ``log_<level>(...)`` helpers."""
    if not isinstance(node, ast.Call):
        return False
    func = node.func
    if isinstance(func, ast.Name):
        prefix, _, level = func.id.partition("_")
        return prefix == "log" and level in _LOG_LEVELS
    if isinstance(func, ast.Attribute) and func.attr in _LOG_LEVELS:
        return _type_name(func.value) in _LOG_OWNERS
    return False


def _scan_handler(handler: ast.ExceptHandler) -> tuple[bool, bool]:
    """Return (has_log, has_raise) for everything inside the handler body."""
    has_log = False
    has_raise = False
    for stmt in handler.body:
        for node in ast.walk(stmt):
            if isinstance(node, ast.Raise):
                has_raise = True
            elif _is_log_call(node):
                has_log = True
    return has_log, has_raise


class ExceptionHandlingRule:
    """Check exception handling rules.

    Covers ``try``/``except`` and ``try``/``except*`` handlers. Skips test
    directories since tests legitimately catch exceptions to verify behavior.
    """

    name = "exception-handling"
    section = "function-style"
    summary = "Never swallow exceptions; broad handlers must log and re-raise"
    examples = RuleExamples(
        good=(
            "import logging\n"
            "\n"
            "logger = logging.getLogger(__name__)\n"
            "\n"
            "\n"
            "def parse_port(text: str) -> int:\n"
            "    try:\n"
            "        return int(text)\n"
            "    except ValueError:\n"
            '        logger.warning("invalid port %s", text)\n'
            "        raise\n"
        ),
        bad=(
            "def parse_port(text: str) -> int:\n"
            "    try:\n"
            "        return int(text)\n"
            "    except ValueError:\n"
            "        pass\n"
            "    return 0\n"
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        if in_dirs(source, config["test_dirs"]):
            return []

        handlers = [n for n in ast.walk(source.tree) if isinstance(n, ast.ExceptHandler)]
        handlers.sort(key=lambda handler: (handler.lineno, handler.col_offset))
        violations: list[Violation] = []
        for handler in handlers:
            if _is_silent_body(handler.body):
                violations.append(
                    node_violation(
                        source,
                        self.name,
                        handler,
                        "exception silently ignored",
                        kind="silent-except-body",
                    )
                )

            has_log, has_raise = _scan_handler(handler)
            if _is_broad_exception(handler):
                if not (has_log and has_raise):
                    violations.append(
                        node_violation(
                            source,
                            self.name,
                            handler,
                            "broad except must log and re-raise",
                            kind="broad-except-requires-log-and-raise",
                        )
                    )
            elif not (has_log or has_raise):
                violations.append(
                    node_violation(
                        source,
                        self.name,
                        handler,
                        "except must log or re-raise",
                        kind="except-without-log-or-raise",
                    )
                )
        return violations


# =============================================================================
# Suppress Rules
# =============================================================================


def _is_suppress(expr: ast.AST) -> bool:
    """Check if expression is contextlib.suppress."""
    func = expr.func if isinstance(expr, ast.Call) else expr
    if isinstance(func, ast.Attribute):
        is_contextlib = isinstance(func.value, ast.Name) and func.value.id == "contextlib"
        return is_contextlib and func.attr == "suppress"
    return isinstance(func, ast.Name) and func.id == "suppress"


class ContextlibSuppressRule:
    """Check for contextlib.suppress usage."""

    name = "contextlib-suppress"
    section = "function-style"
    summary = "Do not hide exceptions with contextlib.suppress"
    examples = RuleExamples(
        good=(
            "def remove_key(table: dict[str, int], key: str) -> None:\n"
            "    table.pop(key, None)\n"
        ),
        bad=(
            "import contextlib\n"
            "\n"
            "\n"
            "def remove_key(table: dict[str, int], key: str) -> None:\n"
            "    with contextlib.suppress(KeyError):\n"
            "        del table[key]\n"
        ),
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        violations: list[Violation] = []
        seen: set[int] = set()
        for node in ast.walk(source.tree):
            if isinstance(node, ast.With | ast.AsyncWith):
                for item in node.items:
                    if _is_suppress(item.context_expr):
                        line_no = item.context_expr.lineno
                        if line_no in seen:
                            continue
                        seen.add(line_no)
                        violations.append(
                            node_violation(
                                source,
                                self.name,
                                item.context_expr,
                                "contextlib.suppress hides exceptions",
                            )
                        )
        return violations


# =============================================================================
# Output Rules
# =============================================================================


class PrintUsageRule:
    """Check for print() usage in library files.

    print() is forbidden under library directories; tests and scripts are
    allowed to use it.
    """

    name = "print-usage"
    section = "function-style"
    summary = "Do not call print() in library code; use the console module"
    examples = RuleExamples(
        good=(
            "from example._console import log_info\n"
            "\n"
            "\n"
            "def announce(message: str) -> None:\n"
            "    log_info(message)\n"
        ),
        bad="def announce(message: str) -> None:\n    print(message)\n",
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        if not in_dirs(source, config["library_dirs"]):
            return []

        violations: list[Violation] = []
        for node in ast.walk(source.tree):
            if (
                isinstance(node, ast.Call)
                and isinstance(node.func, ast.Name)
                and node.func.id == "print"
            ):
                violations.append(
                    node_violation(
                        source,
                        self.name,
                        node,
                        "use the console module instead of print()",
                    )
                )
        return violations


# =============================================================================
# Comment Rules
# =============================================================================

_PRAGMA_RE = re.compile(r"\bpragma\b")
_NOQA_RE = re.compile(r"\bnoqa\b", re.IGNORECASE)


class SuppressionCommentRule:
    """Check for type: ignore, noqa and pragma comments."""

    name = "suppression-comment"
    section = "function-style"
    summary = "Fix the code instead of silencing checkers with comments"
    examples = RuleExamples(
        good="TIMEOUT: float = 2.5\n",
        bad='TIMEOUT: float = "2.5"  # type: ignore\n',
    )

    def check(self, source: SourceFile, config: StyleConfig) -> list[Violation]:
        violations: list[Violation] = []
        for tok in source.tokens:
            if tok.type != tokenize.COMMENT:
                continue
            found: list[tuple[str, str]] = []
            if "type: ignore" in tok.string:
                found.append(("type-ignore", "type: ignore comment"))
            if _NOQA_RE.search(tok.string):
                found.append(("noqa-comment", "noqa comment"))
            if _PRAGMA_RE.search(tok.string):
                found.append(("pragma-comment", "pragma comment"))
            for kind, message in found:
                violations.append(
                    make_violation(
                        source,
                        self.name,
                        tok.start[0],
                        message,
                        col=tok.start[1] + 1,
                        kind=kind,
                    )
                )
        return violations


__all__ = [
    "ContextlibSuppressRule",
    "ExceptionHandlingRule",
    "FunctionLengthRule",
    "PrintUsageRule",
    "SuppressionCommentRule",
    "TooManyParametersRule",
]
