from __future__ import annotations

import logging
from typing import Any, FrozenSet, Iterable, Optional, Union

from .accessors import get_at_location, select_locations, set_value_at_location
from .config import DereferenceSettings
from .errors import PathNotFoundError
from .paths import Location, format_location
from .refs import is_reference, resolve
from .walker import copy_tree, walk

logger = logging.getLogger(__name__)


def _collect_ignored(document: Any, ignore_paths: Iterable[str], strict: bool) -> FrozenSet[Location]:
    ignored = set()
    for path in ignore_paths:
        locations = select_locations(document, path)
        if not locations:
            if strict:
                raise PathNotFoundError(path)
            logger.warning("Ignore path %s matched nothing.", path)
        ignored.update(locations)
    return frozenset(ignored)


def dereference_api(
    document: Any,
    start_at: str = '$',
    ignore_paths: Union[str, Iterable[str], None] = None,
    *,
    settings: Optional[DereferenceSettings] = None,
    strict: Optional[bool] = None,
) -> Any:
    """Inline every local `$ref` under `start_at`, skipping `ignore_paths`.

    Only the first node matched by `start_at` is processed; it is spliced back
    into a copy of `document` and the copy is returned. References always
    resolve against the untouched input, never the partially built output.

    Returns None (with a warning) when `start_at` matches nothing, unless
    `strict` is set, in which case PathNotFoundError is raised. Ignore paths
    are evaluated against the whole document. A ReferenceResolutionError aborts
    the call without a partial result.
    """
    settings = settings or DereferenceSettings()
    if strict is None:
        strict = settings.strict_paths
    if ignore_paths is None:
        ignore_paths = []
    if isinstance(ignore_paths, str):
        ignore_paths = [ignore_paths]

    dereferenced = copy_tree(document)

    locations = select_locations(dereferenced, start_at)
    if not locations:
        if strict:
            raise PathNotFoundError(start_at)
        logger.warning("Path %s could not be fully resolved.", start_at)
        return None

    scope = locations[0]
    if len(locations) > 1:
        logger.debug("Path %s matched %d nodes; using %s", start_at, len(locations), format_location(scope))

    ignored = _collect_ignored(dereferenced, ignore_paths, strict)

    def inline_reference(node: Any, location: Location) -> Any:
        if is_reference(node):
            return resolve(node, document)
        return node

    processed = walk(
        get_at_location(dereferenced, scope),
        inline_reference,
        location=scope,
        ignore=ignored,
        max_depth=settings.max_depth,
    )
    return set_value_at_location(dereferenced, scope, processed)
