from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .dereference import dereference_api
from .errors import DereferenceError, ErrorKind, PathNotFoundError
from .flattening import flatten_all_of, select_first_of_any_of, select_first_of_one_of

logger = logging.getLogger(__name__)

OPERATIONS: Dict[str, Callable[..., Any]] = {
    'dereference': dereference_api,
    'flatten_all_of': flatten_all_of,
    'select_first_of_one_of': select_first_of_one_of,
    'select_first_of_any_of': select_first_of_any_of,
}


@dataclass
class OperationResult:
    """Outcome of one operation: either a document or a tagged error."""

    operation: str
    document: Any = None
    error: Optional[DereferenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ''


def run_operation(name: str, document: Any, **kwargs) -> OperationResult:
    """Run a named operation, folding engine errors into an OperationResult.

    The `None` returned by `dereference_api` for an unmatched scope becomes a
    NOT_FOUND result, so callers handle every failure the same way.
    """
    try:
        operation = OPERATIONS[name]
    except KeyError:
        raise ValueError(f"Unknown operation {name!r}; expected one of {sorted(OPERATIONS)}") from None

    try:
        output = operation(document, **kwargs)
    except DereferenceError as exc:
        logger.info("%s failed (%s): %s", name, exc.kind.value, exc)
        return OperationResult(name, error=exc)

    if output is None and name == 'dereference':
        return OperationResult(name, error=PathNotFoundError(kwargs.get('start_at', '$')))
    return OperationResult(name, document=output)
