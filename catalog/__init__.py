"""
Catalog package for the FilmMate exposure assistant.
"""

from .reference_catalog import ReferenceCatalog, DEFAULT_CATALOG_PATH

__all__ = ['ReferenceCatalog', 'DEFAULT_CATALOG_PATH']
