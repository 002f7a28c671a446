# -*- coding: utf-8 -*-
"""
AdSpace Discovery Service Layer
"""

# Lazy imports to avoid circular dependencies
__all__ = [
    "create_property_repository",
    "create_geolocation_provider",
    "rank_by_proximity",
    "filter_by_term",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies."""
    if name == "create_property_repository":
        from .data_provider_factory import create_property_repository
        return create_property_repository
    elif name == "create_geolocation_provider":
        from .geolocation_service import create_geolocation_provider
        return create_geolocation_provider
    elif name == "rank_by_proximity":
        from .proximity_ranker import rank_by_proximity
        return rank_by_proximity
    elif name == "filter_by_term":
        from .search_filter import filter_by_term
        return filter_by_term
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
