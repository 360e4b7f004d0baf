from __future__ import annotations

from typing import AbstractSet, Any, Callable, List, Optional, Tuple

from .errors import CycleDetectedError, NestingTooDeepError
from .paths import Location, format_location
from .schema_utils import NodeKind, iter_children, node_kind

Transform = Callable[[Any, Location], Any]


def _keep(node: Any, location: Location) -> Any:
    return node


def copy_tree(node: Any) -> Any:
    """Deep-copy a document without recursing on the interpreter stack."""
    return walk(node, _keep)


def walk(
    node: Any,
    transform: Transform,
    location: Location = (),
    ignore: AbstractSet[Location] = frozenset(),
    max_depth: Optional[int] = None,
) -> Any:
    """Rebuild `node` pre-order, offering every node to `transform` first.

    `transform(node, location)` returns the node to keep (the same object or a
    substitute); the walk then descends into the children of whatever it
    returned. Locations in `ignore` are copied verbatim without calling the
    transform or descending. `location` is the position of `node` in the full
    document so that ignore locations line up.

    The result never shares containers with the input. An explicit stack keeps
    deep documents off the interpreter stack; `max_depth` bounds nesting below
    `location`. A substitute that is already being expanded by an ancestor
    means the output would be infinite, so it raises CycleDetectedError.
    """
    base = len(location)
    holder: List[Any] = [None]
    # (node, parent container, key in parent, location, substitutions on the ancestor chain)
    stack: List[Tuple[Any, Any, Any, Location, Tuple[Tuple[Any, Location], ...]]] = [
        (node, holder, 0, tuple(location), ())
    ]

    while stack:
        current, parent, key, loc, expanding = stack.pop()

        if loc in ignore:
            parent[key] = copy_tree(current)
            continue

        if max_depth is not None and len(loc) - base > max_depth:
            raise NestingTooDeepError(format_location(loc), max_depth)

        replaced = transform(current, loc)
        if replaced is not current:
            for seen, seen_loc in expanding:
                if seen is replaced:
                    raise CycleDetectedError([format_location(seen_loc), format_location(loc)])
            expanding = expanding + ((replaced, loc),)

        kind = node_kind(replaced)
        if kind is NodeKind.MAPPING:
            rebuilt: Any = dict.fromkeys(replaced)
        elif kind is NodeKind.SEQUENCE:
            rebuilt = [None] * len(replaced)
        else:
            parent[key] = replaced
            continue

        parent[key] = rebuilt
        children = list(iter_children(replaced))
        for child_key, child in reversed(children):
            stack.append((child, rebuilt, child_key, loc + (child_key,), expanding))

    return holder[0]
