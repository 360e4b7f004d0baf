from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .errors import PathSyntaxError

Key = Union[str, int]
Location = Tuple[Key, ...]

ROOT = '$'


@dataclass(frozen=True)
class PathStep:
    """One step of a parsed path expression.

    `selector` is a key name, an integer index, or None for a wildcard.
    `recursive` marks `..` descent (the step applies to every descendant).
    """

    selector: Optional[Key]
    recursive: bool = False


def escape_path_segment(segment: Key) -> str:
    """Escape a key for bracket notation.

    - Backslashes are escaped as '\\\\'.
    - Single quotes are escaped as "\\'" so the key stays inside ['...'].
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace("'", "\\'")


def format_location(location: Location) -> str:
    """Render a concrete location as a normalized path, e.g. $['paths'][0]."""
    parts: List[str] = [ROOT]
    for key in location:
        if isinstance(key, int):
            parts.append(f'[{key}]')
        else:
            parts.append(f"['{escape_path_segment(key)}']")
    return ''.join(parts)


def _read_quoted(expr: str, i: int) -> Tuple[str, int]:
    quote = expr[i]
    out: List[str] = []
    i += 1
    while i < len(expr):
        ch = expr[i]
        if ch == '\\' and i + 1 < len(expr):
            out.append(expr[i + 1])
            i += 2
            continue
        if ch == quote:
            return ''.join(out), i + 1
        out.append(ch)
        i += 1
    raise PathSyntaxError(expr, 'unterminated quoted name')


def _read_bracket(expr: str, i: int, recursive: bool) -> Tuple[PathStep, int]:
    """Parse a `[...]` selector starting at `expr[i] == '['`."""
    i += 1
    while i < len(expr) and expr[i].isspace():
        i += 1
    if i >= len(expr):
        raise PathSyntaxError(expr, "unterminated '['")

    if expr[i] in ('"', "'"):
        selector, i = _read_quoted(expr, i)
        step = PathStep(selector, recursive)
    else:
        end = expr.find(']', i)
        if end == -1:
            raise PathSyntaxError(expr, "unterminated '['")
        raw = expr[i:end].strip()
        if raw == '*':
            step = PathStep(None, recursive)
        else:
            try:
                if not raw.isascii():
                    raise ValueError(raw)
                step = PathStep(int(raw), recursive)
            except ValueError:
                raise PathSyntaxError(expr, f'unsupported bracket selector {raw!r}') from None
        i = end

    while i < len(expr) and expr[i].isspace():
        i += 1
    if i >= len(expr) or expr[i] != ']':
        raise PathSyntaxError(expr, "expected ']'")
    return step, i + 1


def parse_path(expr: str) -> List[PathStep]:
    """Parse a JSONPath-style expression into steps.

    Supported: `$`, `.name`, `['name']`, `[0]`, `[-1]`, `[*]`, `.*` and
    recursive descent (`..name`, `..*`, `..[0]`). Dotted names run until the
    next '.', '[' or whitespace, so keys like `x-stackQL-resources` need no
    quoting.
    """
    if not isinstance(expr, str):
        raise PathSyntaxError(str(expr), 'expression must be a string')
    expr = expr.strip()
    if not expr.startswith(ROOT):
        raise PathSyntaxError(expr, "expression must start with '$'")

    steps: List[PathStep] = []
    i = 1
    while i < len(expr):
        ch = expr[i]
        if ch == '[':
            step, i = _read_bracket(expr, i, recursive=False)
            steps.append(step)
            continue
        if ch != '.':
            raise PathSyntaxError(expr, f'unexpected {ch!r} at position {i}')

        recursive = expr.startswith('..', i)
        i += 2 if recursive else 1
        if i < len(expr) and expr[i] == '[':
            if not recursive:
                raise PathSyntaxError(expr, f"unexpected '[' after '.' at position {i}")
            step, i = _read_bracket(expr, i, recursive=True)
            steps.append(step)
            continue

        start = i
        while i < len(expr) and expr[i] not in '.[' and not expr[i].isspace():
            i += 1
        name = expr[start:i]
        if not name:
            raise PathSyntaxError(expr, f'empty name at position {start}')
        steps.append(PathStep(None if name == '*' else name, recursive))

    return steps
