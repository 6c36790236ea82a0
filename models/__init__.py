"""
Domain models for the FilmMate exposure assistant.

This package contains the value records describing equipment, film, lighting
and exposure settings, plus the shot log record kept by the store.
"""

from .camera import Camera
from .lens import Lens
from .film_stock import FilmStock, FilmType, Latitude
from .lighting_condition import LightingCondition
from .exposure_settings import ExposureSettings, ExposureCalculationResult
from .shot_log import ShotLog, NOTES_MAX_LENGTH, normalize_timestamp

__all__ = [
    'Camera',
    'Lens',
    'FilmStock',
    'FilmType',
    'Latitude',
    'LightingCondition',
    'ExposureSettings',
    'ExposureCalculationResult',
    'ShotLog',
    'NOTES_MAX_LENGTH',
    'normalize_timestamp',
]
