"""
Reporters package for the FilmMate exposure assistant.
"""

from .text_reporter import (
    TextReporter,
    format_shutter_speed,
    format_aperture,
    format_delta,
    format_settings,
)

__all__ = [
    'TextReporter',
    'format_shutter_speed',
    'format_aperture',
    'format_delta',
    'format_settings',
]
