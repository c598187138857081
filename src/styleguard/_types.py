"""Internal type aliases and protocols for strict typing.

These types enable strict typing without Any, object, or cast.
"""

from __future__ import annotations

from typing import BinaryIO, Protocol

# Recursive type for TOML data - only for internal _load*/_decode* functions
UnknownToml = (
    dict[str, "UnknownToml"] | list["UnknownToml"] | str | int | float | bool | None
)


class _TomlLoad(Protocol):
    """Protocol for tomllib.load function with strict return type."""

    def __call__(self, fp: BinaryIO, /) -> dict[str, UnknownToml]: ...


def _get_toml_load() -> _TomlLoad:
    """Get typed tomllib.load function via dynamic import."""
    tomllib_mod = __import__("tomllib")
    load_fn: _TomlLoad = tomllib_mod.load
    return load_fn


__all__ = ["UnknownToml", "_get_toml_load"]
