from __future__ import annotations

from typing import Any, List, Tuple

from .paths import Location, PathStep, parse_path
from .schema_utils import NodeKind, iter_children, iter_nodes, node_kind
from .walker import copy_tree


def _apply_step(step: PathStep, location: Location, node: Any) -> List[Tuple[Location, Any]]:
    kind = node_kind(node)
    selector = step.selector

    if selector is None:
        return [(location + (key,), child) for key, child in iter_children(node)]

    if kind is NodeKind.MAPPING:
        # Numeric selectors also address string keys such as response codes ('200').
        key = selector if isinstance(selector, str) else str(selector)
        if key in node:
            return [(location + (key,), node[key])]
        return []

    if kind is NodeKind.SEQUENCE:
        if isinstance(selector, str):
            digits = selector[1:] if selector.startswith('-') else selector
            if not (digits.isascii() and digits.isdigit()):
                return []
            selector = int(selector)
        index = selector + len(node) if selector < 0 else selector
        if 0 <= index < len(node):
            return [(location + (index,), node[index])]

    return []


def match_path(data: Any, path: str) -> List[Tuple[Location, Any]]:
    """Evaluate `path` against `data`, returning (location, node) pairs in document order."""
    matches: List[Tuple[Location, Any]] = [((), data)]
    for step in parse_path(path):
        next_matches: List[Tuple[Location, Any]] = []
        for location, node in matches:
            candidates = iter_nodes(node, location) if step.recursive else [(location, node)]
            for cand_location, cand_node in candidates:
                next_matches.extend(_apply_step(step, cand_location, cand_node))
        matches = next_matches

    seen = set()
    unique: List[Tuple[Location, Any]] = []
    for location, node in matches:
        if location in seen:
            continue
        seen.add(location)
        unique.append((location, node))
    return unique


def select(data: Any, path: str) -> List[Any]:
    """Return every node matched by `path`. Zero matches yields an empty list."""
    return [node for _, node in match_path(data, path)]


def select_locations(data: Any, path: str) -> List[Location]:
    return [location for location, _ in match_path(data, path)]


def get_at_location(data: Any, location: Location) -> Any:
    """Follow a concrete location. Raises KeyError/IndexError if it does not exist."""
    current = data
    for key in location:
        current = current[key]
    return current


def set_value_at_location(data: Any, location: Location, value: Any):
    """Set a value in place at a concrete location and return the (new) root."""
    if not location:
        return value
    parent = get_at_location(data, location[:-1])
    parent[location[-1]] = value
    return data


def splice_at_location(data: Any, location: Location, replacement: Any) -> Any:
    """Return a copy of `data` with the node at `location` replaced."""
    return set_value_at_location(copy_tree(data), location, copy_tree(replacement))


def splice_at(data: Any, path: str, replacement: Any) -> Any:
    """Return a copy of `data` with every node matched by `path` replaced.

    Matches nested under an earlier match are dropped with their ancestor.
    """
    output = copy_tree(data)
    replaced: List[Location] = []
    for location in sorted(select_locations(data, path), key=len):
        if any(location[:len(prefix)] == prefix for prefix in replaced):
            continue
        output = set_value_at_location(output, location, copy_tree(replacement))
        replaced.append(location)
    return output
