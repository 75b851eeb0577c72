"""
brewtracker.domain.enums — All enumerations used across the engine.

Keep this module import-clean (stdlib only).
"""

from enum import Enum
from typing import Dict, Optional


# ---------------------------------------------------------------------------
# Entity types (closed set)
# ---------------------------------------------------------------------------

class EntityType(str, Enum):
    """
    Record types exchanged with the backend.  Values are the string names
    used throughout the mobile client, so ``EntityType("brewSession")`` works.
    """
    RECIPE             = "recipe"
    INGREDIENT         = "ingredient"
    BREW_SESSION       = "brewSession"
    USER               = "user"
    FERMENTATION_ENTRY = "fermentationEntry"
    STYLE              = "style"

    @property
    def backend_id_field(self) -> str:
        """Name of the identifier field the backend uses for this type."""
        return BACKEND_ID_FIELD_MAPPING[self]


# Backend identifier field per entity type
BACKEND_ID_FIELD_MAPPING: Dict[EntityType, str] = {
    EntityType.RECIPE:             "recipe_id",
    EntityType.INGREDIENT:         "ingredient_id",
    EntityType.BREW_SESSION:       "session_id",
    EntityType.USER:               "user_id",
    EntityType.FERMENTATION_ENTRY: "entry_id",
    EntityType.STYLE:              "style_guide_id",
}

# Reverse lookup: backend field → entity type
BACKEND_FIELD_TO_ENTITY_TYPE: Dict[str, EntityType] = {
    field: entity_type for entity_type, field in BACKEND_ID_FIELD_MAPPING.items()
}


# ---------------------------------------------------------------------------
# What happens to the backend field after normalization
# ---------------------------------------------------------------------------

class BackendIdPolicy(str, Enum):
    """
    DROP:      ``recipe_id`` is removed once its value moved to ``id``.
    PRESERVE:  ``recipe_id`` stays alongside ``id``.
    """
    DROP     = "drop"
    PRESERVE = "preserve"


# ---------------------------------------------------------------------------
# Structural classification result
# ---------------------------------------------------------------------------

class EntityShape(str, Enum):
    """
    Result of classifying a bare dict by the keys it carries.
    UNKNOWN means no signature matched and the caller picks a fallback.
    """
    RECIPE             = "recipe"
    INGREDIENT         = "ingredient"
    BREW_SESSION       = "brewSession"
    USER               = "user"
    FERMENTATION_ENTRY = "fermentationEntry"
    UNKNOWN            = "unknown"

    @property
    def entity_type(self) -> Optional[EntityType]:
        if self is EntityShape.UNKNOWN:
            return None
        return EntityType(self.value)
