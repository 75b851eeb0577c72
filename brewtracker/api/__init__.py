"""
brewtracker.api — HTTP client, interceptor chains and the ID interceptor adapter.

Import surface::

    from brewtracker.api.client         import ApiClient
    from brewtracker.api.interceptors   import InterceptorManager
    from brewtracker.api.id_interceptor import setup_id_interceptors, get_interceptor_status
    from brewtracker.api.errors         import normalize_error
"""
