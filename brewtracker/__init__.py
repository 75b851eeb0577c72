"""
brewtracker — Entity-ID normalization for the BrewTracker API client.

The backend names each record's identifier differently (``recipe_id``,
``session_id``, ``user_id`` ...).  Application code wants a uniform ``id``.
This package rewrites request and response bodies in both directions and
plugs into an HTTP client's interceptor chains.

Import surface::

    from brewtracker import configure_logging
    from brewtracker.api.client import ApiClient
    from brewtracker.api.id_interceptor import setup_id_interceptors
    from brewtracker.data_pipeline.normalizer import normalize_response_data
    from brewtracker.data_pipeline.denormalizer import denormalize_entity_id_deep

Host applications without their own logging setup call
``configure_logging()`` once at startup.
"""

from brewtracker.core.logging import configure_logging

__version__ = "1.0.0"

__all__ = ["configure_logging", "__version__"]
