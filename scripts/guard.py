"""Repository guard: hold this project to its own style guide.

Verifies the rule examples first, then checks src/, tests/ and scripts/
with the settings from pyproject.toml.

Run with: python scripts/guard.py [--root DIR]
"""

from __future__ import annotations

import sys
from pathlib import Path

from styleguard._console import log_error
from styleguard.cli import main as styleguard_main


def _root_from_args(args: list[str]) -> Path | None:
    """Return the --root value if given; other arguments are ignored."""
    for flag, value in zip(args, args[1:], strict=False):
        if flag == "--root":
            return Path(value).resolve()
    return None


def run_guards(root: Path) -> int:
    """Run example and style checks on ``root``; return the worst exit code."""
    base = ["--root", str(root)]
    examples_code = styleguard_main([*base, "--check-examples"])
    style_code = styleguard_main(base)
    return max(examples_code, style_code)


def main(argv: list[str] | None = None) -> int:
    """Entry point for guard script."""
    args = argv if argv is not None else sys.argv[1:]
    root = _root_from_args(args)
    if root is not None:
        return run_guards(root)

    project_root = Path(__file__).resolve().parent.parent
    if not (project_root / "pyproject.toml").exists():
        log_error(f"ERROR: pyproject.toml not found in {project_root}")
        return 1

    return run_guards(project_root)


if __name__ == "__main__":
    raise SystemExit(main())
