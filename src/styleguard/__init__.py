"""Style checker enforcing the team style guide on Python source."""

from styleguard.config import ConfigError, StyleConfig, default_config, load_config
from styleguard.evaluator import EvaluationResult, evaluate_paths, evaluate_source
from styleguard.registry import RuleRegistry, default_registry
from styleguard.rules import Rule, RuleExamples, RuleReport, Violation
from styleguard.scanner import ParseError, SourceFile, scan_file, scan_text

__all__ = [
    "ConfigError",
    "EvaluationResult",
    "ParseError",
    "Rule",
    "RuleExamples",
    "RuleRegistry",
    "RuleReport",
    "SourceFile",
    "StyleConfig",
    "Violation",
    "default_config",
    "default_registry",
    "evaluate_paths",
    "evaluate_source",
    "load_config",
    "scan_file",
    "scan_text",
]
