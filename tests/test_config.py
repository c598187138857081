"""Tests for styleguard.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from styleguard.config import (
    ConfigError,
    StyleConfig,
    apply_overrides,
    decode_config,
    default_config,
    find_config_file,
    load_config,
)


def _write(path: Path, text: str) -> None:
    """Helper to write a file, creating parent dirs as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class TestDefaults:
    """Tests for default_config."""

    def test_default_values(self) -> None:
        """Test the documented defaults."""
        cfg = default_config()
        assert cfg["line_length"] == 100
        assert cfg["indent_width"] == 4
        assert cfg["max_blank_lines"] == 2
        assert cfg["max_function_lines"] == 80
        assert cfg["max_parameters"] == 6
        assert cfg["max_patches"] == 3
        assert cfg["forbidden_typing"] == ["Any", "cast", "TypeAlias"]
        assert cfg["include"] == ["src", "tests", "scripts"]
        assert cfg["per_file_ignores"] == {}

    def test_defaults_are_fresh_copies(self) -> None:
        """Test mutating one default config does not leak into the next."""
        first = default_config()
        first["select"].append("naming")
        assert default_config()["select"] == []


class TestDecodeConfig:
    """Tests for decode_config."""

    def test_kebab_case_keys(self) -> None:
        """Test TOML kebab-case keys map onto config fields."""
        cfg = decode_config({"line-length": 88, "test-dirs": ["spec"]})
        assert cfg["line_length"] == 88
        assert cfg["test_dirs"] == ["spec"]
        assert cfg["indent_width"] == 4

    def test_per_file_ignores(self) -> None:
        """Test per-file-ignores decodes to glob -> selectors."""
        cfg = decode_config({"per-file-ignores": {"tests/*": ["naming", "print-usage"]}})
        assert cfg["per_file_ignores"] == {"tests/*": ["naming", "print-usage"]}

    def test_on_top_of_base(self, config: StyleConfig) -> None:
        """Test decoding keeps base values that are not overridden."""
        config["max_parameters"] = 9
        cfg = decode_config({"line-length": 120}, base=config)
        assert cfg["max_parameters"] == 9
        assert cfg["line_length"] == 120

    def test_unknown_key(self) -> None:
        """Test unknown keys raise ConfigError."""
        with pytest.raises(ConfigError, match="Unknown configuration key 'colour'"):
            decode_config({"colour": "red"})

    def test_wrong_int_type(self) -> None:
        """Test a string where an int belongs raises ConfigError."""
        with pytest.raises(ConfigError, match="Expected int for 'line-length'"):
            decode_config({"line-length": "100"})

    def test_bool_is_not_int(self) -> None:
        """Test booleans are rejected for integer settings."""
        with pytest.raises(ConfigError, match="Expected int"):
            decode_config({"indent-width": True})

    def test_non_positive_int(self) -> None:
        """Test limits below 1 raise ConfigError."""
        with pytest.raises(ConfigError, match=">= 1"):
            decode_config({"max-parameters": 0})

    def test_wrong_list_item(self) -> None:
        """Test non-string list items raise ConfigError."""
        with pytest.raises(ConfigError, match=r"Expected str at select\[1\]"):
            decode_config({"select": ["naming", 3]})

    def test_per_file_ignores_not_table(self) -> None:
        """Test per-file-ignores must be a table."""
        with pytest.raises(ConfigError, match="Expected table for 'per-file-ignores'"):
            decode_config({"per-file-ignores": ["tests/*"]})


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_load_none_returns_defaults(self) -> None:
        """Test no path means defaults."""
        assert load_config(None) == default_config()

    def test_load_pyproject_table(self, tmp_path: Path) -> None:
        """Test settings are read from [tool.styleguard]."""
        path = tmp_path / "pyproject.toml"
        _write(path, '[project]\nname = "x"\n\n[tool.styleguard]\nline-length = 79\n')
        assert load_config(path)["line_length"] == 79

    def test_load_pyproject_without_table(self, tmp_path: Path) -> None:
        """Test a pyproject without the table yields defaults."""
        path = tmp_path / "pyproject.toml"
        _write(path, '[project]\nname = "x"\n')
        assert load_config(path) == default_config()

    def test_load_standalone(self, tmp_path: Path) -> None:
        """Test a standalone file uses its top-level table."""
        path = tmp_path / "styleguard.toml"
        _write(path, 'max-function-lines = 40\nignore = ["testing"]\n')
        cfg = load_config(path)
        assert cfg["max_function_lines"] == 40
        assert cfg["ignore"] == ["testing"]

    def test_load_invalid_toml(self, tmp_path: Path) -> None:
        """Test malformed TOML raises ConfigError."""
        path = tmp_path / "styleguard.toml"
        _write(path, "line-length = \n")
        with pytest.raises(ConfigError, match="invalid TOML"):
            load_config(path)

    def test_load_missing_file(self, tmp_path: Path) -> None:
        """Test a missing config file raises ConfigError."""
        with pytest.raises(ConfigError, match="failed to read"):
            load_config(tmp_path / "nope.toml")

    def test_tool_not_a_table(self, tmp_path: Path) -> None:
        """Test a malformed tool entry raises ConfigError."""
        path = tmp_path / "pyproject.toml"
        _write(path, 'tool = "oops"\n')
        with pytest.raises(ConfigError, match="Expected table for 'tool'"):
            load_config(path)


class TestFindConfigFile:
    """Tests for config discovery."""

    def test_prefers_pyproject_with_table(self, tmp_path: Path) -> None:
        """Test pyproject.toml with [tool.styleguard] wins."""
        _write(tmp_path / "pyproject.toml", "[tool.styleguard]\nline-length = 90\n")
        _write(tmp_path / "styleguard.toml", "line-length = 70\n")
        assert find_config_file(tmp_path) == tmp_path / "pyproject.toml"

    def test_falls_back_to_standalone(self, tmp_path: Path) -> None:
        """Test styleguard.toml is used when pyproject has no table."""
        _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
        _write(tmp_path / "styleguard.toml", "line-length = 70\n")
        assert find_config_file(tmp_path) == tmp_path / "styleguard.toml"

    def test_none_found(self, tmp_path: Path) -> None:
        """Test no config file found returns None."""
        assert find_config_file(tmp_path) is None


class TestApplyOverrides:
    """Tests for CLI overrides."""

    def test_overrides_replace_values(self, config: StyleConfig) -> None:
        """Test given overrides replace config values."""
        out = apply_overrides(config, select=["naming"], ignore=["short-name"], line_length=120)
        assert out["select"] == ["naming"]
        assert out["ignore"] == ["short-name"]
        assert out["line_length"] == 120

    def test_none_keeps_values(self, config: StyleConfig) -> None:
        """Test omitted overrides keep config values and copy lists."""
        out = apply_overrides(config)
        assert out == config
        out["exclude"].append("extra")
        assert "extra" not in config["exclude"]

    def test_bad_line_length(self, config: StyleConfig) -> None:
        """Test a non-positive line length override raises ConfigError."""
        with pytest.raises(ConfigError, match="line length"):
            apply_overrides(config, line_length=0)
