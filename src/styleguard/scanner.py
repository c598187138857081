"""Source scanning: discover files and turn them into a checkable form.

A :class:`SourceFile` bundles the raw text, its lines, the token stream and
the AST so every rule works from the same parse.
"""

from __future__ import annotations

import ast
import fnmatch
import tokenize
from collections.abc import Generator, Iterable
from io import StringIO
from pathlib import Path
from typing import NamedTuple


class ParseError(RuntimeError):
    """Raised when a source file cannot be decoded, tokenized or parsed."""

    def __init__(self, path: Path, detail: str, line_no: int = 1, col: int = 1) -> None:
        super().__init__(f"Failed to parse {path}: {detail}")
        self.path = path
        self.detail = detail
        self.line_no = line_no
        self.col = col


class SourceFile(NamedTuple):
    """A scanned Python source file."""

    path: Path
    rel_path: Path
    text: str
    lines: list[str]
    tokens: list[tokenize.TokenInfo]
    tree: ast.Module

    def get_line(self, line_no: int) -> str:
        """Get source line content by line number (1-indexed)."""
        idx = line_no - 1
        if 0 <= idx < len(self.lines):
            return self.lines[idx].strip()
        return ""


def read_source(path: Path) -> str:
    """Read file contents as text.

    Uses utf-8-sig to handle optional BOM.
    """
    try:
        return path.read_text(encoding="utf-8-sig", errors="strict")
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise RuntimeError(f"failed to read {path}: {exc}") from exc


def _iter_tokens(text: str) -> Generator[tokenize.TokenInfo, None, None]:
    """Generate tokens from source text."""
    reader = StringIO(text).readline
    yield from tokenize.generate_tokens(reader)


def _relative_to(path: Path, root: Path | None) -> Path:
    if root is None:
        return path
    resolved = path.resolve()
    resolved_root = root.resolve()
    if resolved.is_relative_to(resolved_root):
        return resolved.relative_to(resolved_root)
    return path


def scan_text(path: Path, text: str, root: Path | None = None) -> SourceFile:
    """Tokenize and parse ``text`` as the contents of ``path``.

    Raises:
        ParseError: If the text cannot be tokenized or parsed.
    """
    try:
        tokens = list(_iter_tokens(text))
    except tokenize.TokenError as exc:
        line_no = exc.args[1][0] if len(exc.args) > 1 else 1
        raise ParseError(path, str(exc.args[0]), line_no=line_no) from exc
    except SyntaxError as exc:
        # IndentationError and TabError from the tokenizer
        raise ParseError(
            path, exc.msg, line_no=exc.lineno or 1, col=exc.offset or 1
        ) from exc

    try:
        tree = ast.parse(text, filename=str(path))
    except SyntaxError as exc:
        raise ParseError(
            path, exc.msg, line_no=exc.lineno or 1, col=exc.offset or 1
        ) from exc

    return SourceFile(
        path=path,
        rel_path=_relative_to(path, root),
        text=text,
        lines=text.splitlines(),
        tokens=tokens,
        tree=tree,
    )


def scan_file(path: Path, root: Path | None = None) -> SourceFile:
    """Read and scan a source file."""
    return scan_text(path, read_source(path), root=root)


def is_excluded(path: Path, exclude: Iterable[str]) -> bool:
    """Check if path matches any exclude glob (whole path or any component)."""
    posix = path.as_posix()
    for pattern in exclude:
        if fnmatch.fnmatch(posix, pattern):
            return True
        if any(fnmatch.fnmatch(part, pattern) for part in path.parts):
            return True
    return False


def iter_source_files(paths: Iterable[Path], exclude: Iterable[str]) -> list[Path]:
    """Expand files and directories into a sorted list of Python files.

    Raises:
        FileNotFoundError: If a given path does not exist.
    """
    patterns = list(exclude)
    found: set[Path] = set()
    for path in paths:
        if path.is_dir():
            for child in path.rglob("*.py"):
                rel = child.relative_to(path)
                if child.is_file() and not is_excluded(rel, patterns):
                    found.add(child)
        elif path.is_file():
            if not is_excluded(path, patterns):
                found.add(path)
        else:
            raise FileNotFoundError(f"no such file or directory: {path}")
    return sorted(found)


__all__ = [
    "ParseError",
    "SourceFile",
    "is_excluded",
    "iter_source_files",
    "read_source",
    "scan_file",
    "scan_text",
]
