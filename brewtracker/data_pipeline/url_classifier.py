"""
BrewTracker IDs — Entity-type detection from request URLs.
"""

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple

from brewtracker.domain.enums import EntityType

# A path segment must end at "/", "?" or the end of the URL
_SEGMENT_END = r"(/|\?|$)"

# Most specific first: sub-resources that live under a general collection
# (``/brew-sessions/42/fermentation``) must win over that collection.
_URL_PATTERNS: List[Tuple[Pattern[str], EntityType]] = [
    (re.compile(r"/fermentation" + _SEGMENT_END), EntityType.FERMENTATION_ENTRY),
    (re.compile(r"/beerxml/(create|match)-ingredients" + _SEGMENT_END), EntityType.INGREDIENT),
    (re.compile(r"/recipes" + _SEGMENT_END), EntityType.RECIPE),
    (re.compile(r"/ingredients" + _SEGMENT_END), EntityType.INGREDIENT),
    (re.compile(r"/brew-sessions" + _SEGMENT_END), EntityType.BREW_SESSION),
    (re.compile(r"/users" + _SEGMENT_END), EntityType.USER),
    (re.compile(r"/styles" + _SEGMENT_END), EntityType.STYLE),
]


def detect_entity_type_from_url(url: Optional[str]) -> Optional[EntityType]:
    """Return the entity type addressed by ``url``, or ``None``.

    Matching is case-insensitive and works on relative paths, absolute URLs
    and URLs carrying a query string.
    """
    normalized_url = (url or "").lower()

    for pattern, entity_type in _URL_PATTERNS:
        if pattern.search(normalized_url):
            return entity_type

    return None
