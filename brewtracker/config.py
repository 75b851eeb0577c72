"""
Centralized configuration for the BrewTracker API client.
All settings come from environment variables for 12-factor deployment.
"""

import os


def _env_bool(name: str, default: bool = False) -> bool:
    val = os.environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


# ---------------------------------------------------------------------------
# Backend API
# ---------------------------------------------------------------------------
API_URL = os.environ.get("API_URL", "http://127.0.0.1:5000/api").rstrip("/")
API_TIMEOUT_SECONDS = float(os.environ.get("API_TIMEOUT_SECONDS", "10"))

# Retry policy for idempotent requests (exponential backoff with jitter)
API_MAX_RETRIES = int(os.environ.get("API_MAX_RETRIES", "3"))
API_RETRY_DELAY_SECONDS = float(os.environ.get("API_RETRY_DELAY_SECONDS", "1"))
API_RETRY_MAX_DELAY_SECONDS = float(os.environ.get("API_RETRY_MAX_DELAY_SECONDS", "10"))

# ---------------------------------------------------------------------------
# ID normalization
# ---------------------------------------------------------------------------
# Install the ID interceptors on every ApiClient by default
ID_NORMALIZATION_ENABLED = _env_bool("ID_NORMALIZATION_ENABLED", True)

# LOG_LEVEL is read by brewtracker.configure_logging()
