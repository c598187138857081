"""Tests for function style rules."""

from __future__ import annotations

from pathlib import Path

from styleguard.config import StyleConfig, default_config
from styleguard.rules import Rule, Violation
from styleguard.rules.function_style import (
    ContextlibSuppressRule,
    ExceptionHandlingRule,
    FunctionLengthRule,
    PrintUsageRule,
    SuppressionCommentRule,
    TooManyParametersRule,
)
from styleguard.scanner import scan_text


def _check(
    rule: Rule, text: str, path: str = "src/pkg/mod.py", config: StyleConfig | None = None
) -> list[Violation]:
    """Scan text and run a single rule on it."""
    cfg = default_config() if config is None else config
    return rule.check(scan_text(Path(path), text), cfg)


def _kinds(violations: list[Violation]) -> list[str]:
    return [v.kind for v in violations]


class TestFunctionLengthRule:
    """Tests for FunctionLengthRule."""

    def test_over_limit(self, config: StyleConfig) -> None:
        """Test a function one line over the limit."""
        config["max_function_lines"] = 3
        text = "def f() -> None:\n    a = 1\n    b = 2\n    c = 3\n"
        violations = _check(FunctionLengthRule(), text, config=config)
        assert [v.message for v in violations] == ["function 'f' is 4 lines long, limit is 3"]

    def test_at_limit(self, config: StyleConfig) -> None:
        """Test a function exactly at the limit passes."""
        config["max_function_lines"] = 3
        text = "def f() -> None:\n    a = 1\n    b = 2\n"
        assert _check(FunctionLengthRule(), text, config=config) == []

    def test_methods_counted_separately(self, config: StyleConfig) -> None:
        """Test a long class with short methods passes."""
        config["max_function_lines"] = 2
        text = (
            "class A:\n"
            "    def one(self) -> int:\n        return 1\n\n"
            "    def two(self) -> int:\n        return 2\n"
        )
        assert _check(FunctionLengthRule(), text, config=config) == []


class TestTooManyParametersRule:
    """Tests for TooManyParametersRule."""

    def test_keyword_only_counted_self_skipped(self, config: StyleConfig) -> None:
        """Test keyword-only parameters count and self does not."""
        config["max_parameters"] = 2
        text = "class A:\n    def f(self, a: int, b: int, *, c: int) -> None:\n        pass\n"
        violations = _check(TooManyParametersRule(), text, config=config)
        assert [v.message for v in violations] == [
            "function 'f' takes 3 parameters, limit is 2"
        ]

    def test_star_args_not_counted(self, config: StyleConfig) -> None:
        """Test *args and **kwargs do not count toward the limit."""
        config["max_parameters"] = 2
        text = "def g(a: int, b: int, *args: int, **kwargs: int) -> None:\n    pass\n"
        assert _check(TooManyParametersRule(), text, config=config) == []


class TestExceptionHandlingRule:
    """Tests for ExceptionHandlingRule."""

    def test_silent_except_pass(self) -> None:
        """Test except: pass is silent and neither logs nor raises."""
        violations = _check(
            ExceptionHandlingRule(), "try:\n    x = 1\nexcept ValueError:\n    pass\n"
        )
        assert _kinds(violations) == ["silent-except-body", "except-without-log-or-raise"]
        assert [(v.line_no, v.col) for v in violations] == [(3, 1), (3, 1)]

    def test_silent_except_ellipsis(self) -> None:
        """Test except: ... is silent."""
        violations = _check(
            ExceptionHandlingRule(), "try:\n    x = 1\nexcept ValueError:\n    ...\n"
        )
        assert "silent-except-body" in _kinds(violations)

    def test_header_with_comment(self) -> None:
        """Test an except header followed by a comment is still parsed."""
        text = "try:\n    x = 1\nexcept ValueError:  # parse\n    pass\n"
        assert "silent-except-body" in _kinds(_check(ExceptionHandlingRule(), text))

    def test_broad_except_only_raises(self) -> None:
        """Test broad Exception with raise but no log."""
        violations = _check(
            ExceptionHandlingRule(), "try:\n    x = 1\nexcept Exception:\n    raise\n"
        )
        assert _kinds(violations) == ["broad-except-requires-log-and-raise"]

    def test_bare_except_only_logs(self) -> None:
        """Test bare except with log but no raise."""
        text = "import logging\ntry:\n    x = 1\nexcept:\n    logging.error('err')\n"
        violations = _check(ExceptionHandlingRule(), text)
        assert _kinds(violations) == ["broad-except-requires-log-and-raise"]

    def test_broad_in_tuple(self) -> None:
        """Test Exception inside a tuple of types is broad."""
        text = "try:\n    x = 1\nexcept (ValueError, Exception):\n    raise\n"
        violations = _check(ExceptionHandlingRule(), text)
        assert _kinds(violations) == ["broad-except-requires-log-and-raise"]

    def test_broad_with_log_and_raise(self) -> None:
        """Test broad Exception with both log and raise passes."""
        text = (
            "import logging\n"
            "try:\n    x = 1\n"
            "except Exception:\n    logging.error('err')\n    raise\n"
        )
        assert _check(ExceptionHandlingRule(), text) == []

    def test_specific_with_log(self) -> None:
        """Test a specific exception that only logs passes."""
        text = "import logging\ntry:\n    x = 1\nexcept ValueError:\n    logging.warning('w')\n"
        assert _check(ExceptionHandlingRule(), text) == []

    def test_specific_with_console_log(self) -> None:
        """Test console log_* helpers count as logging."""
        text = "try:\n    x = 1\nexcept ValueError as exc:\n    log_error(str(exc))\n"
        assert _check(ExceptionHandlingRule(), text) == []

    def test_specific_with_raise(self) -> None:
        """Test a specific exception that re-raises passes."""
        text = "try:\n    x = 1\nexcept ValueError as exc:\n    raise RuntimeError('x') from exc\n"
        assert _check(ExceptionHandlingRule(), text) == []

    def test_raise_after_body_not_counted(self) -> None:
        """Test a raise after the handler body does not satisfy the handler."""
        text = (
            "def f() -> int:\n"
            "    try:\n"
            "        return 1\n"
            "    except ValueError:\n"
            "        value = 0\n"
            "    raise RuntimeError(str(value))\n"
        )
        violations = _check(ExceptionHandlingRule(), text)
        assert [(v.kind, v.line_no, v.col) for v in violations] == [
            ("except-without-log-or-raise", 4, 5)
        ]

    def test_each_handler_checked(self) -> None:
        """Test consecutive handlers are checked independently."""
        text = (
            "try:\n    x = 1\n"
            "except ValueError:\n    raise\n"
            "except KeyError:\n    x = 2\n"
        )
        violations = _check(ExceptionHandlingRule(), text)
        assert [(v.kind, v.line_no) for v in violations] == [
            ("except-without-log-or-raise", 5)
        ]

    def test_skipped_in_tests(self) -> None:
        """Test exception rules do not apply inside test directories."""
        text = "try:\n    x = 1\nexcept ValueError:\n    pass\n"
        assert _check(ExceptionHandlingRule(), text, path="tests/test_foo.py") == []

    def test_one_line_handler(self) -> None:
        """Test a handler with pass on the header line is reported."""
        text = "try:\n    x = 1\nexcept ValueError: pass\n"
        violations = _check(ExceptionHandlingRule(), text)
        assert [(v.kind, v.line_no) for v in violations] == [
            ("silent-except-body", 3),
            ("except-without-log-or-raise", 3),
        ]

    def test_multiline_header(self) -> None:
        """Test a handler whose type tuple spans several lines."""
        text = "try:\n    x = 1\nexcept (\n    ValueError,\n    KeyError,\n):\n    pass\n"
        violations = _check(ExceptionHandlingRule(), text)
        assert [(v.kind, v.line_no) for v in violations] == [
            ("silent-except-body", 3),
            ("except-without-log-or-raise", 3),
        ]

    def test_raise_in_string_or_comment_not_counted(self) -> None:
        """Test the word raise in a string or comment is not a re-raise."""
        text = (
            "try:\n"
            "    x = 1\n"
            "except ValueError:\n"
            '    notify("cannot raise here")  # raise later\n'
        )
        violations = _check(ExceptionHandlingRule(), text)
        assert _kinds(violations) == ["except-without-log-or-raise"]

    def test_handler_text_in_string_ignored(self) -> None:
        """Test except clauses inside a string literal are not handlers."""
        text = 'DOC = """\ntry:\n    x = 1\nexcept ValueError:\n    pass\n"""\n'
        assert _check(ExceptionHandlingRule(), text) == []

    def test_except_star_handler(self) -> None:
        """Test except* handlers follow the same rules."""
        text = "try:\n    x = 1\nexcept* ValueError:\n    pass\n"
        violations = _check(ExceptionHandlingRule(), text)
        assert _kinds(violations) == ["silent-except-body", "except-without-log-or-raise"]

    def test_logger_attribute_counts_as_log(self) -> None:
        """Test self.logger.<level>() counts as logging."""
        text = "try:\n    x = 1\nexcept ValueError:\n    self.logger.warning('w')\n"
        assert _check(ExceptionHandlingRule(), text) == []

    def test_nested_handlers_in_line_order(self) -> None:
        """Test handlers nested in a handler are reported in line order."""
        text = (
            "try:\n"
            "    x = 1\n"
            "except ValueError:\n"
            "    try:\n"
            "        x = 2\n"
            "    except KeyError:\n"
            "        x = 3\n"
            "    raise\n"
            "except OSError:\n"
            "    x = 4\n"
        )
        violations = _check(ExceptionHandlingRule(), text)
        assert [(v.kind, v.line_no, v.col) for v in violations] == [
            ("except-without-log-or-raise", 6, 5),
            ("except-without-log-or-raise", 9, 1),
        ]


class TestContextlibSuppressRule:
    """Tests for ContextlibSuppressRule."""

    def test_contextlib_suppress(self) -> None:
        """Test contextlib.suppress is reported at the call."""
        text = "import contextlib\nwith contextlib.suppress(ValueError):\n    x = 1\n"
        violations = _check(ContextlibSuppressRule(), text)
        assert [(v.line_no, v.col) for v in violations] == [(2, 6)]

    def test_bare_suppress_reported_once_per_line(self) -> None:
        """Test two suppress items on one with line are reported once."""
        text = (
            "from contextlib import suppress\n"
            "with suppress(ValueError), suppress(KeyError):\n"
            "    x = 1\n"
        )
        assert len(_check(ContextlibSuppressRule(), text)) == 1

    def test_other_context_managers(self) -> None:
        """Test ordinary with statements pass."""
        text = "with open('f', encoding='utf-8') as fh:\n    data = fh.read()\n"
        assert _check(ContextlibSuppressRule(), text) == []


class TestPrintUsageRule:
    """Tests for PrintUsageRule."""

    def test_print_in_library(self) -> None:
        """Test print() under src/ is reported."""
        violations = _check(PrintUsageRule(), "print('hello')\n")
        assert [v.message for v in violations] == ["use the console module instead of print()"]

    def test_print_in_tests_and_scripts(self) -> None:
        """Test print() is allowed in tests and scripts."""
        assert _check(PrintUsageRule(), "print('hello')\n", path="tests/test_foo.py") == []
        assert _check(PrintUsageRule(), "print('hello')\n", path="scripts/helper.py") == []

    def test_print_method_allowed(self) -> None:
        """Test a method named print is not the builtin."""
        assert _check(PrintUsageRule(), "console.print('hello')\n") == []


class TestSuppressionCommentRule:
    """Tests for SuppressionCommentRule."""

    def test_type_ignore(self) -> None:
        """Test a type: ignore comment is reported at the comment."""
        violations = _check(SuppressionCommentRule(), "x = 1  # type: ignore[assignment]\n")
        assert [(v.kind, v.col) for v in violations] == [("type-ignore", 8)]

    def test_noqa_and_pragma(self) -> None:
        """Test noqa and pragma comments."""
        text = "x = 1  # noqa: E501\ny = 2  # pragma: no cover\n"
        violations = _check(SuppressionCommentRule(), text)
        assert [(v.kind, v.line_no) for v in violations] == [
            ("noqa-comment", 1),
            ("pragma-comment", 2),
        ]

    def test_words_inside_other_words(self) -> None:
        """Test pragma only matches as a whole word."""
        assert _check(SuppressionCommentRule(), "x = 1  # pragmatic choice\n") == []

    def test_inside_string_allowed(self) -> None:
        """Test suppression text inside a string literal is not a comment."""
        assert _check(SuppressionCommentRule(), "s = '# type: ignore'\n") == []
