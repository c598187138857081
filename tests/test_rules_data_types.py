"""Tests for data type rules."""

from __future__ import annotations

from pathlib import Path

from styleguard.config import StyleConfig, default_config
from styleguard.rules import Rule, Violation
from styleguard.rules.data_types import (
    ForbiddenTypingRule,
    MissingAnnotationRule,
    MutableDefaultRule,
    ObjectAnnotationRule,
)
from styleguard.scanner import scan_text


def _check(rule: Rule, text: str, config: StyleConfig | None = None) -> list[Violation]:
    cfg = default_config() if config is None else config
    return rule.check(scan_text(Path("src/pkg/mod.py"), text), cfg)


class TestForbiddenTypingRule:
    """Tests for ForbiddenTypingRule."""

    def test_import_any(self) -> None:
        """Test importing Any from typing."""
        violations = _check(ForbiddenTypingRule(), "from typing import Any\n")
        assert [v.kind for v in violations] == ["typing-import-any"]

    def test_typing_attribute_usage(self) -> None:
        """Test typing.Any used through the module."""
        violations = _check(ForbiddenTypingRule(), "import typing\n\nx: typing.Any = 1\n")
        assert [(v.kind, v.line_no) for v in violations] == [("typing-any-usage", 3)]

    def test_cast_import_and_call(self) -> None:
        """Test cast is reported both where imported and where called."""
        text = "from typing import cast\n\ny = cast(int, 1)\n"
        violations = _check(ForbiddenTypingRule(), text)
        assert [v.kind for v in violations] == ["typing-import-cast", "cast-call"]

    def test_type_alias_import(self) -> None:
        """Test TypeAlias is forbidden by default."""
        violations = _check(ForbiddenTypingRule(), "from typing import TypeAlias\n")
        assert [v.kind for v in violations] == ["typing-import-typealias"]

    def test_bare_any_name(self) -> None:
        """Test a bare Any name in an annotation."""
        violations = _check(ForbiddenTypingRule(), "def f(x: Any) -> None:\n    pass\n")
        assert [v.kind for v in violations] == ["any-usage"]

    def test_configured_list(self, config: StyleConfig) -> None:
        """Test only configured names are forbidden."""
        config["forbidden_typing"] = ["Any"]
        text = "from typing import cast\n\ny = cast(int, 1)\n"
        assert _check(ForbiddenTypingRule(), text, config=config) == []

    def test_allowed_typing_imports(self) -> None:
        """Test other typing names are fine."""
        text = "from typing import NamedTuple, Protocol, TypedDict\n"
        assert _check(ForbiddenTypingRule(), text) == []


class TestObjectAnnotationRule:
    """Tests for ObjectAnnotationRule."""

    def test_argument_and_return(self) -> None:
        """Test object in an argument and return annotation."""
        text = "def f(x: object) -> object:\n    return x\n"
        assert len(_check(ObjectAnnotationRule(), text)) == 2

    def test_nested_in_annotated_assignment(self) -> None:
        """Test object nested inside a generic annotation."""
        violations = _check(ObjectAnnotationRule(), "items: list[object] = []\n")
        assert [v.message for v in violations] == ["object used in annotation"]

    def test_object_outside_annotation(self) -> None:
        """Test object used as a value is fine."""
        text = "def f(x: int) -> bool:\n    return isinstance(x, object)\n"
        assert _check(ObjectAnnotationRule(), text) == []


class TestMissingAnnotationRule:
    """Tests for MissingAnnotationRule."""

    def test_every_argument_kind(self) -> None:
        """Test return and each argument kind are reported, self is skipped."""
        text = (
            "class A:\n"
            "    def f(self, a, *rest, key: int = 1, **extra):\n"
            "        pass\n"
        )
        violations = _check(MissingAnnotationRule(), text)
        assert [v.kind for v in violations] == [
            "missing-return-annotation",
            "missing-argument-annotation",
            "missing-argument-annotation",
            "missing-argument-annotation",
        ]
        assert [v.message.split("'")[1] for v in violations[1:]] == ["a", "rest", "extra"]

    def test_fully_annotated(self) -> None:
        """Test an annotated classmethod passes."""
        text = (
            "class A:\n"
            "    @classmethod\n"
            "    def make(cls, size: int, *, name: str = 'a') -> A:\n"
            "        return cls()\n"
        )
        assert _check(MissingAnnotationRule(), text) == []

    def test_async_function(self) -> None:
        """Test async functions are checked."""
        violations = _check(MissingAnnotationRule(), "async def fetch(url: str):\n    pass\n")
        assert [v.message for v in violations] == ["function 'fetch' has no return annotation"]


class TestMutableDefaultRule:
    """Tests for MutableDefaultRule."""

    def test_literals_and_calls(self) -> None:
        """Test list, dict and set() defaults; tuples and None pass."""
        text = "def f(a=[], b={}, *, c=set(), d=None, e=()) -> None:\n    pass\n"
        violations = _check(MutableDefaultRule(), text)
        assert len(violations) == 3
        assert [v.col for v in violations] == [9, 15, 24]

    def test_comprehension_default(self) -> None:
        """Test a comprehension default is mutable."""
        text = "def f(a={k: 1 for k in 'ab'}) -> None:\n    pass\n"
        violations = _check(MutableDefaultRule(), text)
        assert [v.message for v in violations] == ["mutable default argument in 'f'"]
