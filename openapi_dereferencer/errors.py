from __future__ import annotations

from enum import Enum
from typing import Sequence


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    UNRESOLVABLE = "unresolvable"
    INVALID_POINTER = "invalid_pointer"
    EMPTY_COMPOSITION = "empty_composition"
    CYCLE = "cycle"
    TOO_DEEP = "too_deep"
    INVALID_PATH = "invalid_path"


class DereferenceError(Exception):
    """Base class for every failure raised by the engine."""

    kind: ErrorKind = ErrorKind.UNRESOLVABLE


class ReferenceResolutionError(DereferenceError):
    """A `$ref` pointer does not resolve inside the document."""

    kind = ErrorKind.UNRESOLVABLE

    def __init__(self, pointer: str, message: str | None = None):
        self.pointer = pointer
        super().__init__(message or f"Could not resolve $ref path: {pointer}")


class InvalidPointerError(ReferenceResolutionError):
    kind = ErrorKind.INVALID_POINTER

    def __init__(self, pointer: str, reason: str = "only local '#/...' pointers are supported"):
        self.reason = reason
        super().__init__(pointer, f"Invalid $ref pointer {pointer!r}: {reason}")


class CycleDetectedError(DereferenceError):
    kind = ErrorKind.CYCLE

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__("Reference cycle detected: " + " -> ".join(self.chain))


class PathNotFoundError(DereferenceError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path {path} could not be fully resolved.")


class EmptyCompositionError(DereferenceError):
    """A `oneOf`/`anyOf` list has no first alternative to select."""

    kind = ErrorKind.EMPTY_COMPOSITION

    def __init__(self, keyword: str, location: str):
        self.keyword = keyword
        self.location = location
        super().__init__(f"Empty {keyword} at {location}: nothing to select.")


class NestingTooDeepError(DereferenceError):
    kind = ErrorKind.TOO_DEEP

    def __init__(self, location: str, limit: int):
        self.location = location
        self.limit = limit
        super().__init__(f"Document nesting exceeds max depth {limit} at {location}.")


class PathSyntaxError(DereferenceError, ValueError):
    kind = ErrorKind.INVALID_PATH

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Invalid path expression {expression!r}: {reason}")
