"""External test data."""

from .search_vector import SearchVector, read_search_vector

__all__ = ["SearchVector", "read_search_vector"]
