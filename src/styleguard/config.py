"""Checker configuration loaded from TOML.

Settings live in ``[tool.styleguard]`` of ``pyproject.toml`` or in the top-level
table of a standalone ``styleguard.toml``. Keys use kebab-case in TOML and
snake_case in :class:`StyleConfig`.
"""

from __future__ import annotations

from pathlib import Path
from typing import TypedDict

from styleguard._types import UnknownToml, _get_toml_load

PYPROJECT = "pyproject.toml"
STANDALONE = "styleguard.toml"
TOOL_TABLE = "styleguard"


class ConfigError(RuntimeError):
    """Raised when configuration cannot be read or is invalid."""


class StyleConfig(TypedDict):
    """Checker configuration."""

    # Limits
    line_length: int
    indent_width: int
    max_blank_lines: int
    max_function_lines: int
    max_parameters: int
    max_patches: int
    min_name_length: int

    # Naming and typing
    allowed_short_names: list[str]
    ignore_names: list[str]
    forbidden_typing: list[str]

    # Project layout
    library_dirs: list[str]
    test_dirs: list[str]
    include: list[str]
    exclude: list[str]

    # Rule selection
    select: list[str]
    ignore: list[str]
    per_file_ignores: dict[str, list[str]]


_INT_KEYS: tuple[str, ...] = (
    "line_length",
    "indent_width",
    "max_blank_lines",
    "max_function_lines",
    "max_parameters",
    "max_patches",
    "min_name_length",
)

_LIST_KEYS: tuple[str, ...] = (
    "allowed_short_names",
    "ignore_names",
    "forbidden_typing",
    "library_dirs",
    "test_dirs",
    "include",
    "exclude",
    "select",
    "ignore",
)


def default_config() -> StyleConfig:
    """Return a fresh copy of the built-in defaults."""
    return {
        "line_length": 100,
        "indent_width": 4,
        "max_blank_lines": 2,
        "max_function_lines": 80,
        "max_parameters": 6,
        "max_patches": 3,
        "min_name_length": 2,
        "allowed_short_names": ["_", "e", "f", "i", "j", "k", "n", "v", "x", "y"],
        "ignore_names": [
            "visit_*",
            "setUp",
            "tearDown",
            "setUpClass",
            "tearDownClass",
            "setUpModule",
            "tearDownModule",
            "asyncSetUp",
            "asyncTearDown",
        ],
        "forbidden_typing": ["Any", "cast", "TypeAlias"],
        "library_dirs": ["src"],
        "test_dirs": ["tests"],
        "include": ["src", "tests", "scripts"],
        "exclude": [".git", ".venv", "venv", "build", "dist", "__pycache__"],
        "select": [],
        "ignore": [],
        "per_file_ignores": {},
    }


def _decode_str_list(key: str, raw: UnknownToml) -> list[str]:
    """Decode a TOML array of strings."""
    if not isinstance(raw, list):
        msg = f"Expected list for '{key}', got {type(raw).__name__}"
        raise ConfigError(msg)
    out: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            msg = f"Expected str at {key}[{i}], got {type(item).__name__}"
            raise ConfigError(msg)
        out.append(item)
    return out


def _decode_int(key: str, raw: UnknownToml) -> int:
    """Decode a positive TOML integer."""
    # bool is a subclass of int
    if isinstance(raw, bool) or not isinstance(raw, int):
        msg = f"Expected int for '{key}', got {type(raw).__name__}"
        raise ConfigError(msg)
    if raw < 1:
        msg = f"Expected '{key}' >= 1, got {raw}"
        raise ConfigError(msg)
    return raw


def _decode_per_file_ignores(raw: UnknownToml) -> dict[str, list[str]]:
    """Decode the per-file-ignores table of glob -> selectors."""
    if not isinstance(raw, dict):
        msg = f"Expected table for 'per-file-ignores', got {type(raw).__name__}"
        raise ConfigError(msg)
    return {
        pattern: _decode_str_list(f"per-file-ignores.{pattern}", value)
        for pattern, value in raw.items()
    }


def decode_config(raw: dict[str, UnknownToml], base: StyleConfig | None = None) -> StyleConfig:
    """Decode a raw settings table on top of ``base`` (defaults if omitted).

    Raises:
        ConfigError: On unknown keys or values of the wrong type.
    """
    cfg = default_config() if base is None else apply_overrides(base)
    ints: dict[str, int] = {}
    lists: dict[str, list[str]] = {}
    per_file = cfg["per_file_ignores"]
    for toml_key, value in raw.items():
        key = toml_key.replace("-", "_")
        if key in _INT_KEYS:
            ints[key] = _decode_int(toml_key, value)
        elif key in _LIST_KEYS:
            lists[key] = _decode_str_list(toml_key, value)
        elif key == "per_file_ignores":
            per_file = _decode_per_file_ignores(value)
        else:
            msg = f"Unknown configuration key '{toml_key}'"
            raise ConfigError(msg)

    return {
        "line_length": ints.get("line_length", cfg["line_length"]),
        "indent_width": ints.get("indent_width", cfg["indent_width"]),
        "max_blank_lines": ints.get("max_blank_lines", cfg["max_blank_lines"]),
        "max_function_lines": ints.get("max_function_lines", cfg["max_function_lines"]),
        "max_parameters": ints.get("max_parameters", cfg["max_parameters"]),
        "max_patches": ints.get("max_patches", cfg["max_patches"]),
        "min_name_length": ints.get("min_name_length", cfg["min_name_length"]),
        "allowed_short_names": lists.get("allowed_short_names", cfg["allowed_short_names"]),
        "ignore_names": lists.get("ignore_names", cfg["ignore_names"]),
        "forbidden_typing": lists.get("forbidden_typing", cfg["forbidden_typing"]),
        "library_dirs": lists.get("library_dirs", cfg["library_dirs"]),
        "test_dirs": lists.get("test_dirs", cfg["test_dirs"]),
        "include": lists.get("include", cfg["include"]),
        "exclude": lists.get("exclude", cfg["exclude"]),
        "select": lists.get("select", cfg["select"]),
        "ignore": lists.get("ignore", cfg["ignore"]),
        "per_file_ignores": per_file,
    }


def _load_toml_data(path: Path) -> dict[str, UnknownToml]:
    """Load a TOML file.

    Internal _load* function - entry point for TOML parsing.
    """
    load = _get_toml_load()
    try:
        with path.open("rb") as f:
            return load(f)
    except OSError as exc:
        raise ConfigError(f"failed to read {path}: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(f"invalid TOML in {path}: {exc}") from exc


def _settings_table(path: Path, data: dict[str, UnknownToml]) -> dict[str, UnknownToml]:
    """Pick the styleguard settings table out of a parsed TOML document."""
    if path.name != PYPROJECT:
        return data
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        msg = f"Expected table for 'tool' in {path}"
        raise ConfigError(msg)
    table = tool.get(TOOL_TABLE, {})
    if not isinstance(table, dict):
        msg = f"Expected table for 'tool.{TOOL_TABLE}' in {path}"
        raise ConfigError(msg)
    return table


def find_config_file(root: Path) -> Path | None:
    """Return the config file used for ``root``, if any.

    ``pyproject.toml`` wins when it has a ``[tool.styleguard]`` table.
    """
    pyproject = root / PYPROJECT
    if pyproject.is_file():
        data = _load_toml_data(pyproject)
        tool = data.get("tool")
        if isinstance(tool, dict) and TOOL_TABLE in tool:
            return pyproject
    standalone = root / STANDALONE
    if standalone.is_file():
        return standalone
    return None


def load_config(path: Path | None) -> StyleConfig:
    """Load configuration from ``path``, or return defaults when ``path`` is None."""
    if path is None:
        return default_config()
    data = _load_toml_data(path)
    return decode_config(_settings_table(path, data))


def apply_overrides(
    config: StyleConfig,
    *,
    select: list[str] | None = None,
    ignore: list[str] | None = None,
    line_length: int | None = None,
) -> StyleConfig:
    """Return a copy of ``config`` with command-line overrides applied."""
    out: StyleConfig = {
        "line_length": config["line_length"] if line_length is None else line_length,
        "indent_width": config["indent_width"],
        "max_blank_lines": config["max_blank_lines"],
        "max_function_lines": config["max_function_lines"],
        "max_parameters": config["max_parameters"],
        "max_patches": config["max_patches"],
        "min_name_length": config["min_name_length"],
        "allowed_short_names": list(config["allowed_short_names"]),
        "ignore_names": list(config["ignore_names"]),
        "forbidden_typing": list(config["forbidden_typing"]),
        "library_dirs": list(config["library_dirs"]),
        "test_dirs": list(config["test_dirs"]),
        "include": list(config["include"]),
        "exclude": list(config["exclude"]),
        "select": list(config["select"]) if select is None else select,
        "ignore": list(config["ignore"]) if ignore is None else ignore,
        "per_file_ignores": {k: list(v) for k, v in config["per_file_ignores"].items()},
    }
    if out["line_length"] < 1:
        msg = f"Expected line length >= 1, got {out['line_length']}"
        raise ConfigError(msg)
    return out


__all__ = [
    "ConfigError",
    "StyleConfig",
    "apply_overrides",
    "decode_config",
    "default_config",
    "find_config_file",
    "load_config",
]
