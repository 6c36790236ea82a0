"""
Application State

Immutable state of one client moving between the equipment-selection,
results and log-list screens. Every transition returns a new AppState.
The CLI drives it for `calculate` and `logs list`; a browser front end
keeps the same transitions on its side of the API.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import (
    Camera, Lens, FilmStock, LightingCondition,
    ExposureCalculationResult, ShotLog
)
from calculators import ExposureCalculator, InvalidInputError

logger = logging.getLogger(__name__)


class Screen(Enum):
    """Enumeration of client screens."""
    SETTINGS = "settings"
    RESULTS = "results"
    LOGS = "logs"


@dataclass(frozen=True)
class AppState:
    """
    Snapshot of a client's selections, latest result and loaded shot logs.

    Attributes:
        screen: Screen currently shown
        camera, lens, film_stock, lighting_condition: Current selections
        result: Latest calculation, cleared whenever a selection changes
        shot_logs: Logs of the current user, newest first

    Example:
        >>> state = AppState().select_camera(camera).select_lens(lens)
        >>> state = state.select_film_stock(film).select_lighting_condition(lighting)
        >>> state = state.calculate()
        >>> state.screen
        <Screen.RESULTS: 'results'>
    """

    screen: Screen = Screen.SETTINGS
    camera: Optional[Camera] = None
    lens: Optional[Lens] = None
    film_stock: Optional[FilmStock] = None
    lighting_condition: Optional[LightingCondition] = None
    result: Optional[ExposureCalculationResult] = None
    shot_logs: Tuple[ShotLog, ...] = field(default_factory=tuple)

    # Selection

    def select_camera(self, camera: Camera) -> 'AppState':
        return replace(self, camera=camera, result=None)

    def select_lens(self, lens: Lens) -> 'AppState':
        return replace(self, lens=lens, result=None)

    def select_film_stock(self, film_stock: FilmStock) -> 'AppState':
        return replace(self, film_stock=film_stock, result=None)

    def select_lighting_condition(self, lighting_condition: LightingCondition) -> 'AppState':
        return replace(self, lighting_condition=lighting_condition, result=None)

    def clear_selections(self) -> 'AppState':
        return replace(
            self,
            screen=Screen.SETTINGS,
            camera=None,
            lens=None,
            film_stock=None,
            lighting_condition=None,
            result=None,
        )

    def is_ready_to_calculate(self) -> bool:
        """True once all four selections are made."""
        return None not in (self.camera, self.lens, self.film_stock, self.lighting_condition)

    # Navigation

    def calculate(self, calculator: Optional[ExposureCalculator] = None) -> 'AppState':
        """
        Run the exposure calculation and move to the results screen.

        Args:
            calculator: Calculator to use (defaults to a new ExposureCalculator)

        Raises:
            InvalidInputError: If a selection is missing
            NoValidCombinationError: If the selections admit no exposure
        """
        if not self.is_ready_to_calculate():
            raise InvalidInputError('Select a camera, lens, film stock and lighting condition first')

        calculator = calculator or ExposureCalculator()
        result = calculator.calculate_exposure_settings(
            self.camera, self.lens, self.film_stock, self.lighting_condition
        )
        return replace(self, screen=Screen.RESULTS, result=result)

    def show_settings(self) -> 'AppState':
        return replace(self, screen=Screen.SETTINGS)

    def show_results(self) -> 'AppState':
        """
        Return to the results screen.

        Raises:
            ValueError: If nothing has been calculated for the current selections
        """
        if self.result is None:
            raise ValueError('No calculation result to show')
        return replace(self, screen=Screen.RESULTS)

    def show_logs(self) -> 'AppState':
        return replace(self, screen=Screen.LOGS)

    # Shot logs

    def load_shot_logs(self, shot_logs) -> 'AppState':
        ordered = sorted(shot_logs, key=lambda log: log.timestamp, reverse=True)
        return replace(self, shot_logs=tuple(ordered))

    def add_shot_log(self, shot_log: ShotLog) -> 'AppState':
        return replace(self, shot_logs=(shot_log, *self.shot_logs))

    def update_shot_log(self, shot_log: ShotLog) -> 'AppState':
        return replace(self, shot_logs=tuple(
            shot_log if log.id == shot_log.id else log for log in self.shot_logs
        ))

    def remove_shot_log(self, log_id: str) -> 'AppState':
        return replace(self, shot_logs=tuple(log for log in self.shot_logs if log.id != log_id))

    def reset(self) -> 'AppState':
        """Fresh state for a user switch."""
        logger.debug("Application state reset")
        return AppState()
