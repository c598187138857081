"""Rich console wrapper for styled terminal output.

This module provides typed console functions for checker output.
All print statements in the codebase should use these functions instead.
"""

from __future__ import annotations

from typing import Protocol


class _RichConsole(Protocol):
    """Protocol for rich.console.Console interface."""

    def print(
        self,
        *objects: str,
        style: str | None = None,
        markup: bool | None = None,
        highlight: bool | None = None,
        soft_wrap: bool | None = None,
        emoji: bool | None = None,
    ) -> None:
        """Print styled output to console."""
        ...


def _get_console(stderr: bool = False) -> _RichConsole:
    """Get rich Console instance with strict typing."""
    rich_console_mod = __import__("rich.console", fromlist=["Console"])
    console_cls = rich_console_mod.Console
    console: _RichConsole = console_cls(stderr=stderr)
    return console


# Module-level console instances
_console: _RichConsole = _get_console()
_err_console: _RichConsole = _get_console(stderr=True)

_verbose: bool = False


# =============================================================================
# Style Constants
# =============================================================================

STYLE_HEADER = "bold cyan"
STYLE_SECTION = "bold white"
STYLE_RULE = "magenta"
STYLE_WARNING = "yellow"
STYLE_ERROR = "bold red"
STYLE_SUCCESS = "bold green"
STYLE_INFO = "cyan"
STYLE_DEBUG = "dim white"


# =============================================================================
# Output Functions
# =============================================================================


def set_verbose(enabled: bool) -> None:
    """Enable or disable debug output."""
    global _verbose
    _verbose = enabled


def log_header(text: str) -> None:
    """Print a section header with separator lines."""
    separator = "=" * 60
    _console.print(separator, style=STYLE_HEADER)
    _console.print(text, style=STYLE_HEADER)
    _console.print(separator, style=STYLE_HEADER)


def log_section(title: str) -> None:
    """Print a rule section title."""
    _console.print(f"\n{title}", style=STYLE_SECTION, markup=False)


def log_rule(name: str, summary: str) -> None:
    """Print a rule name with its one-line summary."""
    _console.print(
        f"  {name:<24} {summary}", markup=False, highlight=False, soft_wrap=True, emoji=False
    )


def log_info(text: str) -> None:
    """Print an informational message."""
    _console.print(text, style=STYLE_INFO, markup=False)


def log_debug(text: str) -> None:
    """Print a debug message when verbose output is enabled."""
    if _verbose:
        _err_console.print(text, style=STYLE_DEBUG, markup=False, soft_wrap=True, emoji=False)


def log_success(text: str) -> None:
    """Print a success message."""
    _console.print(text, style=STYLE_SUCCESS, markup=False)


def log_warning(text: str) -> None:
    """Print a warning to stderr."""
    _err_console.print(text, style=STYLE_WARNING, markup=False, soft_wrap=True, emoji=False)


def log_error(text: str) -> None:
    """Print an error to stderr."""
    _err_console.print(text, style=STYLE_ERROR, markup=False, soft_wrap=True, emoji=False)


def log_line(text: str) -> None:
    """Print plain unstyled text to stdout.

    Markup and highlighting are disabled so source excerpts and JSON
    pass through unchanged.
    """
    _console.print(text, markup=False, highlight=False, soft_wrap=True, emoji=False)


def log_error_line(text: str) -> None:
    """Print plain unstyled text to stderr."""
    _err_console.print(text, markup=False, highlight=False, soft_wrap=True, emoji=False)


__all__ = [
    "log_debug",
    "log_error",
    "log_error_line",
    "log_header",
    "log_info",
    "log_line",
    "log_rule",
    "log_section",
    "log_success",
    "log_warning",
    "set_verbose",
]
