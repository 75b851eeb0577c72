"""
BrewTracker IDs — System-wide constants.

Every magic number lives here. If you find a literal in the codebase that is
not a local variable, it belongs here instead.
"""

# ---------------------------------------------------------------------------
# Deep denormalization guards
# ---------------------------------------------------------------------------

# Nesting levels (lists and dicts both count) before recursion halts
DENORMALIZE_MAX_DEPTH: int = 50

# ---------------------------------------------------------------------------
# Generic identifier keys, in fallback order after the backend field
# ---------------------------------------------------------------------------

GENERIC_ID_FIELD: str = "id"
LEGACY_ID_FIELD: str = "_id"

# ---------------------------------------------------------------------------
# Wrapped list responses: key → entity type name that the list holds.
# ``None`` means "use the type classified from the URL".
# Order matters: the first key holding a list wins.
# ---------------------------------------------------------------------------

WRAPPED_LIST_KEYS = (
    ("ingredients",   "ingredient"),
    ("recipes",       "recipe"),
    ("brew_sessions", "brewSession"),
    ("data",          None),
)

# ---------------------------------------------------------------------------
# HTTP error classification
# ---------------------------------------------------------------------------

HTTP_TOO_MANY_REQUESTS: int = 429
HTTP_SERVER_ERROR_MIN: int = 500

# Fixed user-facing messages for common non-retryable statuses
HTTP_STATUS_MESSAGES = {
    400: "Invalid request data. Please check your input.",
    401: "Authentication failed. Please log in again.",
    403: "Access denied. You don't have permission to perform this action.",
    404: "Resource not found.",
    409: "Conflict. The resource already exists or has been modified.",
    422: "Validation error. Please check your input.",
    429: "Too many requests. Please wait a moment and try again.",
    500: "Server error. Please try again later.",
    502: "Service temporarily unavailable. Please try again.",
    503: "Service temporarily unavailable. Please try again.",
    504: "Service temporarily unavailable. Please try again.",
}
