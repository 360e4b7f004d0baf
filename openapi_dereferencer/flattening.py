from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from .config import DereferenceSettings
from .errors import EmptyCompositionError
from .paths import Location, format_location
from .schema_utils import NodeKind, node_kind
from .walker import Transform, copy_tree, walk

logger = logging.getLogger(__name__)

ALL_OF = 'allOf'
ONE_OF = 'oneOf'
ANY_OF = 'anyOf'
PROPERTIES = 'properties'


def _as_mapping(value: Any) -> Dict[str, Any]:
    return value if node_kind(value) is NodeKind.MAPPING else {}


def merge_all_of(members: Iterable[Any], location: Location = ()) -> Dict[str, Any]:
    """Fold allOf members into one schema object, in order.

    Later members overwrite earlier top-level keys, except `properties`, which
    is merged key by key (later entries win, earlier-only entries survive).
    The `allOf` key itself is dropped from the result.
    """
    merged: Dict[str, Any] = {}
    for index, member in enumerate(members):
        if node_kind(member) is not NodeKind.MAPPING:
            logger.warning("Skipping non-object allOf member %d at %s", index, format_location(location))
            continue
        combined = {**merged, **member}
        combined[PROPERTIES] = {**_as_mapping(merged.get(PROPERTIES)), **_as_mapping(member.get(PROPERTIES))}
        merged = combined

    merged.pop(ALL_OF, None)
    return merged


def _flatten_all_of(node: Any, location: Location) -> Any:
    if node_kind(node) is NodeKind.MAPPING and isinstance(node.get(ALL_OF), list):
        return merge_all_of(node[ALL_OF], location)
    return node


def _select_first(keyword: str) -> Transform:
    def transform(node: Any, location: Location) -> Any:
        # The first alternative may itself be a composition of the same kind.
        while node_kind(node) is NodeKind.MAPPING and isinstance(node.get(keyword), list):
            alternatives = node[keyword]
            if not alternatives:
                raise EmptyCompositionError(keyword, format_location(location))
            node = alternatives[0]
        return node

    return transform


def _normalize(document: Any, transform: Transform, settings: Optional[DereferenceSettings]) -> Any:
    settings = settings or DereferenceSettings()
    return walk(document, transform, max_depth=settings.max_depth)


def flatten_all_of(document: Any, *, settings: Optional[DereferenceSettings] = None) -> Any:
    """Replace every allOf schema with the merge of its members."""
    return _normalize(document, _flatten_all_of, settings)


def select_first_of_one_of(document: Any, *, settings: Optional[DereferenceSettings] = None) -> Any:
    """Replace every oneOf schema with its first alternative.

    Sibling keys and the other alternatives are discarded. An empty oneOf
    raises EmptyCompositionError.
    """
    return _normalize(document, _select_first(ONE_OF), settings)


def select_first_of_any_of(document: Any, *, settings: Optional[DereferenceSettings] = None) -> Any:
    """Replace every anyOf schema with its first alternative (see select_first_of_one_of)."""
    return _normalize(document, _select_first(ANY_OF), settings)


def normalize_document(
    document: Any,
    *,
    flatten: bool = True,
    one_of: bool = True,
    any_of: bool = True,
    settings: Optional[DereferenceSettings] = None,
) -> Any:
    output = copy_tree(document)
    if flatten:
        output = flatten_all_of(output, settings=settings)
    if one_of:
        output = select_first_of_one_of(output, settings=settings)
    if any_of:
        output = select_first_of_any_of(output, settings=settings)
    return output
