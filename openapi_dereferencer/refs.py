from __future__ import annotations

import logging
from typing import Any, List
from urllib.parse import unquote

from .errors import CycleDetectedError, InvalidPointerError, ReferenceResolutionError
from .schema_utils import NodeKind, node_kind

logger = logging.getLogger(__name__)

REF_KEY = '$ref'


def is_reference(node: Any) -> bool:
    return node_kind(node) is NodeKind.MAPPING and isinstance(node.get(REF_KEY), str)


def parse_pointer(pointer: str) -> List[str]:
    """Split a local `#/a/b` pointer into decoded segments.

    The fragment is percent-decoded, then each segment is unescaped per
    RFC 6901 (`~1` -> '/', `~0` -> '~'). `#` alone addresses the root.
    """
    if not isinstance(pointer, str) or not pointer.startswith('#'):
        raise InvalidPointerError(str(pointer))

    fragment = unquote(pointer[1:])
    if not fragment:
        return []
    if not fragment.startswith('/'):
        raise InvalidPointerError(pointer, "fragment must start with '/'")
    return [seg.replace('~1', '/').replace('~0', '~') for seg in fragment[1:].split('/')]


def resolve_pointer(pointer: str, root: Any) -> Any:
    """Look up a single pointer in `root` without following further references."""
    current = root
    for segment in parse_pointer(pointer):
        kind = node_kind(current)
        if kind is NodeKind.MAPPING and segment in current:
            current = current[segment]
        elif kind is NodeKind.SEQUENCE and segment.isascii() and segment.isdigit() and int(segment) < len(current):
            current = current[int(segment)]
        else:
            raise ReferenceResolutionError(pointer)
    return current


def resolve(ref_node: Any, root: Any) -> Any:
    """Resolve a reference node to concrete content, following chained references.

    A -> B -> C resolves straight to C. Sibling keys of the reference node are
    dropped. Revisiting a pointer within one chain raises CycleDetectedError.
    Non-reference nodes are returned unchanged.
    """
    chain: List[str] = []
    target = ref_node
    while is_reference(target):
        pointer = target[REF_KEY]
        if pointer in chain:
            raise CycleDetectedError(chain + [pointer])
        chain.append(pointer)
        target = resolve_pointer(pointer, root)

    if chain:
        logger.debug("Resolved %s", ' -> '.join(chain))
    return target
