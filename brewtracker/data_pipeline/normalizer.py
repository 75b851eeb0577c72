"""
BrewTracker IDs — Response normalizer.

Converts backend identifier fields (``recipe_id``, ``session_id`` ...) into
the generic ``id`` the application uses, for single entities, lists and the
wrapped list shapes the backend returns.  Every function here is pure: input
payloads are never mutated.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from brewtracker.core.constants import GENERIC_ID_FIELD, LEGACY_ID_FIELD, WRAPPED_LIST_KEYS
from brewtracker.core.errors import IdNormalizationError
from brewtracker.domain.enums import BackendIdPolicy, EntityType

logger = logging.getLogger(__name__)

EntityId = Union[str, int]


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_entity_id(entity: Any, entity_type: Union[EntityType, str]) -> Optional[EntityId]:
    """Return the best identifier candidate on ``entity``, or ``None``.

    Candidates are checked in priority order: the backend field for
    ``entity_type``, then ``id``, then ``_id``.  The first value that is not
    ``None`` wins, so falsy ids such as ``0`` are still returned.
    """
    if not isinstance(entity, dict):
        return None

    backend_field = EntityType(entity_type).backend_id_field
    for key in (backend_field, GENERIC_ID_FIELD, LEGACY_ID_FIELD):
        value = entity.get(key)
        if value is not None:
            return value
    return None


# ---------------------------------------------------------------------------
# Single entity / list
# ---------------------------------------------------------------------------

def normalize_entity_id(
    entity: Any,
    entity_type: Union[EntityType, str],
    policy: BackendIdPolicy = BackendIdPolicy.DROP,
) -> Dict[str, Any]:
    """Return a shallow copy of ``entity`` with its identifier under ``id``.

    Raises
    ------
    IdNormalizationError
        ``entity`` is not a dict, or carries no identifier candidate.
    """
    entity_type = EntityType(entity_type)

    if not isinstance(entity, dict):
        raise IdNormalizationError(
            f"Invalid entity provided for normalization: {type(entity).__name__}",
            entity_type=entity_type.value,
        )

    entity_id = extract_entity_id(entity, entity_type)
    if entity_id is None:
        logger.warning("No valid ID found for %s entity: %r", entity_type.value, entity)
        raise IdNormalizationError(
            f"No valid ID found for {entity_type.value} entity",
            entity_type=entity_type.value,
        )

    normalized = dict(entity)
    normalized[GENERIC_ID_FIELD] = entity_id

    if BackendIdPolicy(policy) is BackendIdPolicy.DROP:
        normalized.pop(entity_type.backend_id_field, None)

    return normalized


def normalize_entity_ids(
    entities: Any,
    entity_type: Union[EntityType, str],
    policy: BackendIdPolicy = BackendIdPolicy.DROP,
) -> List[Dict[str, Any]]:
    """Normalize every entity in a list.

    API payloads arrive unvalidated, so a non-list is logged and yields ``[]``
    instead of raising.
    """
    if not isinstance(entities, list):
        logger.error("normalize_entity_ids received non-list: %r", entities)
        return []

    return [normalize_entity_id(entity, entity_type, policy) for entity in entities]


# ---------------------------------------------------------------------------
# Shape-polymorphic response dispatch
# ---------------------------------------------------------------------------

def normalize_response_data(data: Any, entity_type: Union[EntityType, str]) -> Any:
    """Normalize whatever shape the backend returned for ``entity_type``.

    Recognised shapes, checked in order:

    * a bare list of entities;
    * a dict carrying the backend id field of ``entity_type`` itself, with
      any wrapped list it holds normalized too;
    * a dict wrapping a list under ``ingredients``, ``recipes``,
      ``brew_sessions`` or ``data`` (e.g. ``{"recipes": [...], "total": 10}``);
    * a single entity dict with an extractable identifier.

    Anything else, including empty payloads, is returned as-is.  Fermentation
    entries are addressed by index within their session and are never
    touched.
    """
    entity_type = EntityType(entity_type)

    if entity_type is EntityType.FERMENTATION_ENTRY:
        return data

    if not data:
        return data

    if isinstance(data, list):
        return normalize_entity_ids(data, entity_type)

    if not isinstance(data, dict):
        return data

    # A recipe carries its own "ingredients" list: normalize the recipe, then
    # its children.
    if data.get(entity_type.backend_id_field) is not None:
        return _normalize_wrapped_list(normalize_entity_id(data, entity_type), entity_type)

    wrapped = _normalize_wrapped_list(data, entity_type)
    if wrapped is not data:
        return wrapped

    if extract_entity_id(data, entity_type) is not None:
        return normalize_entity_id(data, entity_type)

    return data


def _normalize_wrapped_list(data: Dict[str, Any], entity_type: EntityType) -> Dict[str, Any]:
    """Normalize the first wrapped list key on ``data``; a copy if one matched."""
    for key, wrapped_type in WRAPPED_LIST_KEYS:
        if isinstance(data.get(key), list):
            normalized = dict(data)
            normalized[key] = normalize_entity_ids(data[key], wrapped_type or entity_type)
            return normalized
    return data


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

def debug_entity_ids(entity: Any, label: str = "Entity") -> None:
    """Log every id-looking field on ``entity`` at DEBUG level.

    Silent on non-dicts; never raises.
    """
    if not isinstance(entity, dict) or not logger.isEnabledFor(logging.DEBUG):
        return

    id_fields = {
        key: value
        for key, value in entity.items()
        if isinstance(key, str) and ("id" in key or "Id" in key)
    }
    logger.debug("%s ID fields: %r", label, id_fields)
