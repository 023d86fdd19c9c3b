"""
Entities package for the catalog API.
Contains plain data structures exchanged between services and access objects.
"""

from .search_hits import SearchHits

__all__ = ["SearchHits"]
