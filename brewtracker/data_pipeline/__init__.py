"""
brewtracker.data_pipeline — Pure ID transformations and entity-type detection.

Import surface::

    from brewtracker.data_pipeline.normalizer     import normalize_response_data
    from brewtracker.data_pipeline.denormalizer   import denormalize_entity_id_deep
    from brewtracker.data_pipeline.url_classifier import detect_entity_type_from_url
"""
