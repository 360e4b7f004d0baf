from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, List, Tuple

from .paths import Key, Location, format_location


class NodeKind(Enum):
    MAPPING = 'mapping'
    SEQUENCE = 'sequence'
    SCALAR = 'scalar'


def node_kind(node: Any) -> NodeKind:
    """Classify a document node. Anything that is not a dict or list is a scalar."""
    if isinstance(node, dict):
        return NodeKind.MAPPING
    if isinstance(node, list):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def iter_children(node: Any) -> Iterator[Tuple[Key, Any]]:
    """Yield (key, child) pairs in insertion / index order."""
    kind = node_kind(node)
    if kind is NodeKind.MAPPING:
        yield from node.items()
    elif kind is NodeKind.SEQUENCE:
        yield from enumerate(node)


def iter_nodes(data: Any, location: Location = ()) -> Iterator[Tuple[Location, Any]]:
    """Pre-order traversal yielding (location, node), the root included."""
    stack: List[Tuple[Location, Any]] = [(tuple(location), data)]
    while stack:
        loc, node = stack.pop()
        yield loc, node
        children = list(iter_children(node))
        for key, child in reversed(children):
            stack.append((loc + (key,), child))


def find_keyword_paths(data: Any, keyword: str) -> List[str]:
    """Find all paths to mappings that carry `keyword` (e.g. '$ref', 'allOf')."""
    return [
        format_location(loc)
        for loc, node in iter_nodes(data)
        if node_kind(node) is NodeKind.MAPPING and keyword in node
    ]


def has_keyword(data: Any, keyword: str) -> bool:
    return any(
        node_kind(node) is NodeKind.MAPPING and keyword in node
        for _, node in iter_nodes(data)
    )
