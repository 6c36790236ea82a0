"""
Database package for the FilmMate exposure assistant.
"""

from .db_manager import DatabaseManager

__all__ = ['DatabaseManager']
