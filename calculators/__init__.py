"""
Calculators package for the FilmMate exposure assistant.
"""

from .exceptions import ExposureCalculationError, InvalidInputError, NoValidCombinationError
from .exposure_calculator import ExposureCalculator, exposure_value, solve

__all__ = [
    'ExposureCalculator',
    'exposure_value',
    'solve',
    'ExposureCalculationError',
    'InvalidInputError',
    'NoValidCombinationError',
]
