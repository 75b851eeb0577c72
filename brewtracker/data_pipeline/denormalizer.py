"""
BrewTracker IDs — Request denormalizer.

Inverse of the normalizer: turns the generic ``id`` back into the field the
backend expects before a body is sent.  Request bodies can nest entities of
several types (a brew session embedding its recipe, a recipe listing its
ingredients), so the deep variant re-classifies every dict it visits by the
keys it carries rather than trusting the type inferred from the URL.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Set, Tuple, Union

from brewtracker.core.constants import DENORMALIZE_MAX_DEPTH, GENERIC_ID_FIELD
from brewtracker.domain.enums import BACKEND_ID_FIELD_MAPPING, EntityShape, EntityType

logger = logging.getLogger(__name__)


def denormalize_entity_id(entity: Dict[str, Any], entity_type: Union[EntityType, str]) -> Dict[str, Any]:
    """Return a copy of ``entity`` with ``id`` renamed to the backend field.

    Assumes ``entity`` is already normalized; nothing is re-validated.
    """
    backend_field = EntityType(entity_type).backend_id_field

    denormalized = dict(entity)
    denormalized[backend_field] = entity.get(GENERIC_ID_FIELD)
    denormalized.pop(GENERIC_ID_FIELD, None)
    return denormalized


# ---------------------------------------------------------------------------
# Structural classification
# ---------------------------------------------------------------------------

def _has_all(obj: dict, *keys: str) -> bool:
    return all(key in obj for key in keys)


def _has_any(obj: dict, *keys: str) -> bool:
    return any(key in obj for key in keys)


def _backend_field(entity_type: EntityType) -> str:
    return BACKEND_ID_FIELD_MAPPING[entity_type]


# Evaluated top to bottom; first match wins.
_SHAPE_GUARDS: Tuple[Tuple[EntityShape, Callable[[dict], bool]], ...] = (
    (
        EntityShape.RECIPE,
        lambda o: _backend_field(EntityType.RECIPE) in o
        or _has_all(o, "name", "ingredients", "style"),
    ),
    (
        EntityShape.INGREDIENT,
        lambda o: _backend_field(EntityType.INGREDIENT) in o
        or (_has_all(o, "name", "type") and _has_any(o, "alpha_acid", "color", "potential")),
    ),
    (
        EntityShape.BREW_SESSION,
        lambda o: _backend_field(EntityType.BREW_SESSION) in o
        or _has_all(o, "brew_date", "recipe"),
    ),
    (
        EntityShape.USER,
        lambda o: _backend_field(EntityType.USER) in o
        or _has_all(o, "email", "username"),
    ),
    (
        EntityShape.FERMENTATION_ENTRY,
        lambda o: _backend_field(EntityType.FERMENTATION_ENTRY) in o
        or _has_all(o, "temperature", "gravity", "date"),
    ),
)


def classify_entity(obj: Any) -> EntityShape:
    """Classify a dict by its key signature; non-dicts are ``UNKNOWN``."""
    if not isinstance(obj, dict):
        return EntityShape.UNKNOWN
    for shape, guard in _SHAPE_GUARDS:
        if guard(obj):
            return shape
    return EntityShape.UNKNOWN


# ---------------------------------------------------------------------------
# Deep rewrite
# ---------------------------------------------------------------------------

def denormalize_entity_id_deep(
    data: Any,
    root_entity_type: Union[EntityType, str],
    visited: Optional[Set[int]] = None,
    depth: int = 0,
    max_depth: int = DENORMALIZE_MAX_DEPTH,
) -> Any:
    """Recursively denormalize every entity inside ``data``.

    Parameters
    ----------
    data:
        Any JSON-compatible value.  Lists and dicts are rebuilt; scalars pass
        through untouched.
    root_entity_type:
        Type inferred from the request URL.  Used for dicts whose key
        signature does not identify them.
    visited:
        ``id()`` of every container on the current recursion path.  A node is
        removed again on exit, so one object reachable from two sibling
        branches is still rewritten in both; only true back-references are
        skipped.
    depth:
        Current nesting level; past ``max_depth`` the node is returned as-is.

    Never raises on cyclic or deeply nested input: both guards log a warning
    and return the offending subtree unchanged.
    """
    if not isinstance(data, (list, dict)):
        return data

    if depth > max_depth:
        logger.warning(
            "denormalize_entity_id_deep: maximum recursion depth %d exceeded", max_depth,
        )
        return data

    if visited is None:
        visited = set()

    node_key = id(data)
    if node_key in visited:
        logger.warning("denormalize_entity_id_deep: circular reference detected, skipping node")
        return data

    visited.add(node_key)
    try:
        if isinstance(data, list):
            return [
                denormalize_entity_id_deep(item, root_entity_type, visited, depth + 1, max_depth)
                for item in data
            ]

        copy = dict(data)
        if GENERIC_ID_FIELD in copy:
            entity_type = classify_entity(copy).entity_type or root_entity_type
            copy = denormalize_entity_id(copy, entity_type)

        for key, value in copy.items():
            copy[key] = denormalize_entity_id_deep(value, root_entity_type, visited, depth + 1, max_depth)
        return copy
    finally:
        visited.discard(node_key)
