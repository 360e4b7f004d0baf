"""Core logic for the OpenAPI Dereferencer.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- select and splice subtrees by JSONPath-style expressions
- inline local `$ref` pointers, scoped and with ignored subtrees
- flatten `allOf` and reduce `oneOf` / `anyOf` to their first alternative
"""

from .accessors import select, splice_at
from .dereference import dereference_api
from .errors import (
    CycleDetectedError,
    DereferenceError,
    EmptyCompositionError,
    ErrorKind,
    InvalidPointerError,
    NestingTooDeepError,
    PathNotFoundError,
    PathSyntaxError,
    ReferenceResolutionError,
)
from .flattening import flatten_all_of, normalize_document, select_first_of_any_of, select_first_of_one_of
from .results import OperationResult, run_operation

__all__ = [
    'dereference_api',
    'flatten_all_of',
    'select_first_of_one_of',
    'select_first_of_any_of',
    'normalize_document',
    'run_operation',
    'OperationResult',
    'select',
    'splice_at',
    'DereferenceError',
    'ErrorKind',
    'ReferenceResolutionError',
    'InvalidPointerError',
    'CycleDetectedError',
    'PathNotFoundError',
    'EmptyCompositionError',
    'NestingTooDeepError',
    'PathSyntaxError',
]
