"""
Client state for the FilmMate exposure assistant.
"""

from .user_session import UserSession, validate_username
from .app_state import AppState, Screen

__all__ = ['UserSession', 'validate_username', 'AppState', 'Screen']
