"""Rule registry: the catalogue of checks and rule selection."""

from __future__ import annotations

from collections.abc import Iterable

from styleguard.rules import SECTIONS, Rule
from styleguard.rules.data_types import (
    ForbiddenTypingRule,
    MissingAnnotationRule,
    MutableDefaultRule,
    ObjectAnnotationRule,
)
from styleguard.rules.function_style import (
    ContextlibSuppressRule,
    ExceptionHandlingRule,
    FunctionLengthRule,
    PrintUsageRule,
    SuppressionCommentRule,
    TooManyParametersRule,
)
from styleguard.rules.indentation import IndentWidthRule, TabIndentRule
from styleguard.rules.layout import (
    BlankLinesRule,
    CommentSpacingRule,
    LineTooLongRule,
    MissingFinalNewlineRule,
    MultipleStatementsRule,
    TrailingWhitespaceRule,
)
from styleguard.rules.naming import (
    ArgumentNameRule,
    ClassNameRule,
    FunctionNameRule,
    ModuleNameRule,
    ShortNameRule,
    VariableNameRule,
)
from styleguard.rules.testing import TestFileNameRule, TestWithoutAssertRule, WeakAssertionRule


class RuleRegistry:
    """Holds rules by name and resolves rule/section selectors."""

    def __init__(self, rules: Iterable[Rule] = ()) -> None:
        self._rules: dict[str, Rule] = {}
        for rule in rules:
            self.register(rule)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: str) -> bool:
        return name in self._rules

    def register(self, rule: Rule) -> None:
        """Add a rule.

        Raises:
            ValueError: If a rule with the same name exists or the section is unknown.
        """
        if rule.name in self._rules:
            raise ValueError(f"rule already registered: {rule.name}")
        if rule.section not in SECTIONS:
            raise ValueError(f"unknown section '{rule.section}' for rule {rule.name}")
        self._rules[rule.name] = rule

    def get(self, name: str) -> Rule:
        """Look up a rule by name.

        Raises:
            KeyError: If no rule has that name.
        """
        if name not in self._rules:
            raise KeyError(f"unknown rule: {name}")
        return self._rules[name]

    def rules(self) -> list[Rule]:
        """Return all rules in guide section order, then registration order."""
        order = {section: i for i, section in enumerate(SECTIONS)}
        return sorted(self._rules.values(), key=lambda rule: order[rule.section])

    def sections(self) -> list[str]:
        """Return the sections that have at least one rule, in guide order."""
        present = {rule.section for rule in self._rules.values()}
        return [section for section in SECTIONS if section in present]

    def _expand(self, selector: str) -> set[str]:
        if selector in self._rules:
            return {selector}
        if selector in SECTIONS:
            return {name for name, rule in self._rules.items() if rule.section == selector}
        raise ValueError(f"unknown rule or section: {selector}")

    def select(self, select: Iterable[str] = (), ignore: Iterable[str] = ()) -> list[Rule]:
        """Resolve selectors to the list of active rules.

        An empty ``select`` means every rule. ``ignore`` is applied after
        ``select``. Selectors are rule names or section ids.
        """
        selectors = list(select)
        chosen: set[str] = set()
        if selectors:
            for selector in selectors:
                chosen |= self._expand(selector)
        else:
            chosen = set(self._rules)
        for selector in ignore:
            chosen -= self._expand(selector)
        return [rule for rule in self.rules() if rule.name in chosen]


def default_rules() -> list[Rule]:
    """Return one instance of every built-in rule."""
    return [
        TabIndentRule(),
        IndentWidthRule(),
        LineTooLongRule(),
        TrailingWhitespaceRule(),
        MissingFinalNewlineRule(),
        BlankLinesRule(),
        MultipleStatementsRule(),
        CommentSpacingRule(),
        ModuleNameRule(),
        ClassNameRule(),
        FunctionNameRule(),
        ArgumentNameRule(),
        VariableNameRule(),
        ShortNameRule(),
        ForbiddenTypingRule(),
        ObjectAnnotationRule(),
        MissingAnnotationRule(),
        MutableDefaultRule(),
        FunctionLengthRule(),
        TooManyParametersRule(),
        ExceptionHandlingRule(),
        ContextlibSuppressRule(),
        PrintUsageRule(),
        SuppressionCommentRule(),
        WeakAssertionRule(),
        TestWithoutAssertRule(),
        TestFileNameRule(),
    ]


def default_registry() -> RuleRegistry:
    """Return a registry holding the whole rule catalogue."""
    return RuleRegistry(default_rules())


__all__ = ["RuleRegistry", "default_registry", "default_rules"]
