"""Pytest fixtures for styleguard tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from styleguard import _console
from styleguard.config import StyleConfig, default_config
from styleguard.registry import RuleRegistry, default_registry


@pytest.fixture(autouse=True)
def reset_verbose_after_test() -> Generator[None, None, None]:
    """Autouse fixture that turns verbose console output off after each test.

    The CLI flips module-level console state; resetting keeps tests that
    check captured output independent of test order.
    """
    yield
    _console.set_verbose(False)


@pytest.fixture
def config() -> StyleConfig:
    """Return a fresh default configuration."""
    return default_config()


@pytest.fixture
def registry() -> RuleRegistry:
    """Return the default rule registry."""
    return default_registry()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create an empty project root with a pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")
    return tmp_path
