"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_indexing_service,
    get_search_engine,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_indexing_service",
    "get_search_engine",
    "get_service_cache",
    "get_settings_dependency",
]
