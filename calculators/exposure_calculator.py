"""
Exposure Calculator

Recommends an aperture/shutter-speed pair, plus ranked alternatives, for a
camera, lens, film stock and lighting condition.
"""

import math
import logging
from typing import List, Tuple, Dict, Any

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import (
    Camera, Lens, FilmStock, LightingCondition,
    ExposureSettings, ExposureCalculationResult
)
from .exceptions import InvalidInputError, NoValidCombinationError

logger = logging.getLogger(__name__)

# Exposure calculation constants
TOLERANCE = 2.0            # stops either side of the target EV
ISO_BASE_VALUE = 100
PREFERRED_SHUTTER_MIN = 30
PREFERRED_SHUTTER_MAX = 500
ACCEPTABLE_SHUTTER_MIN = 15
ACCEPTABLE_SHUTTER_MAX = 1000
FULL_SCORE = 10
MAX_ALTERNATIVES = 3


def exposure_value(aperture: float, shutter_speed: float, iso: int) -> float:
    """
    Compute the exposure value of a setting.

    EV = log2(aperture^2 / (1 / shutter_speed)) + log2(iso / 100)

    Args:
        aperture: f-number
        shutter_speed: Shutter-speed denominator (200 means 1/200s)
        iso: Film speed

    Returns:
        Exposure value in stops
    """
    shutter = 1 / shutter_speed
    return math.log2((aperture ** 2) / shutter) + math.log2(iso / ISO_BASE_VALUE)


class ExposureCalculator:
    """
    Calculates exposure settings from equipment, film and lighting.

    Every aperture/shutter pair the equipment supports is evaluated; pairs
    within TOLERANCE stops of the target EV are scored for balance (central
    aperture of the lens, hand-holdable shutter speed) and the best one is
    recommended. The next best, up to three, are returned as alternatives.

    The calculator holds no state and can be shared between callers.

    Example:
        >>> calculator = ExposureCalculator()
        >>> result = calculator.calculate_exposure_settings(camera, lens, film, lighting)
        >>> result.recommended_settings
        ExposureSettings(aperture=5.6, shutter_speed=500, iso=200, exposure_delta=-0.06)
    """

    def calculate_exposure_settings(self, camera: Camera, lens: Lens,
                                    film_stock: FilmStock,
                                    lighting_condition: LightingCondition) -> ExposureCalculationResult:
        """
        Calculate recommended and alternative exposure settings.

        Args:
            camera: Camera providing the shutter speeds
            lens: Lens providing the apertures
            film_stock: Film providing the ISO
            lighting_condition: Scene providing the target EV

        Returns:
            ExposureCalculationResult with one recommendation and up to three alternatives

        Raises:
            InvalidInputError: If any input is missing
            NoValidCombinationError: If no pair falls within tolerance of the target EV
        """
        self._validate_inputs(camera, lens, film_stock, lighting_condition)

        target_ev = lighting_condition.ev_value
        iso = film_stock.iso

        candidates = self._find_valid_combinations(
            camera.available_shutter_speeds,
            lens.available_apertures,
            iso,
            target_ev
        )

        logger.debug(
            f"{len(candidates)} of "
            f"{len(camera.available_shutter_speeds) * len(lens.available_apertures)} "
            f"combinations within {TOLERANCE} stops of EV {target_ev}"
        )

        if not candidates:
            logger.warning(
                f"No valid exposure for {camera.name} / {lens.name} / "
                f"{film_stock.name} at EV {target_ev}"
            )
            raise NoValidCombinationError(
                'No valid exposure combinations found for the given equipment and conditions',
                details={
                    'camera': camera.id,
                    'lens': lens.id,
                    'film_stock': film_stock.id,
                    'ev_value': target_ev,
                    'tolerance': TOLERANCE,
                }
            )

        aperture_order = lens.sorted_apertures()
        recommended = self._select_recommended_settings(candidates, aperture_order)
        alternatives = self._select_alternative_settings(candidates, recommended, aperture_order)

        logger.info(
            f"Recommended f/{recommended.aperture} at 1/{recommended.shutter_speed} "
            f"ISO {recommended.iso} (delta {recommended.exposure_delta:+.2f}), "
            f"{len(alternatives)} alternatives"
        )

        return ExposureCalculationResult(
            recommended_settings=recommended,
            alternative_settings=tuple(alternatives)
        )

    @staticmethod
    def _validate_inputs(camera, lens, film_stock, lighting_condition):
        missing = [
            name for name, value in (
                ('camera', camera),
                ('lens', lens),
                ('film_stock', film_stock),
                ('lighting_condition', lighting_condition),
            )
            if value is None
        ]
        if missing:
            raise InvalidInputError('All inputs must be provided', details={'missing': missing})

        # log2 is undefined for these; records built via from_dict never hold them
        invalid = {}
        if any(s <= 0 for s in camera.available_shutter_speeds):
            invalid['camera'] = camera.id
        if any(a <= 0 for a in lens.available_apertures):
            invalid['lens'] = lens.id
        if film_stock.iso <= 0:
            invalid['film_stock'] = film_stock.id
        if invalid:
            raise InvalidInputError(
                'Shutter speeds, apertures and ISO must be positive',
                details={'invalid': invalid}
            )

    @staticmethod
    def _find_valid_combinations(shutter_speeds, apertures, iso: int,
                                 target_ev: float) -> List[ExposureSettings]:
        """
        Evaluate every shutter/aperture pair, shutter-major.

        The tolerance test uses the unrounded delta; the stored delta is
        rounded to two decimals.
        """
        combinations = []

        for shutter_speed in shutter_speeds:
            for aperture in apertures:
                delta = exposure_value(aperture, shutter_speed, iso) - target_ev

                if abs(delta) <= TOLERANCE:
                    combinations.append(ExposureSettings(
                        aperture=aperture,
                        shutter_speed=shutter_speed,
                        iso=iso,
                        exposure_delta=round(delta, 2)
                    ))

        return combinations

    def _select_recommended_settings(self, combinations: List[ExposureSettings],
                                     aperture_order: Tuple[float, ...]) -> ExposureSettings:
        # max() keeps the first of equal scores, i.e. enumeration order
        return max(combinations, key=lambda s: self.balance_score(s, aperture_order))

    def _select_alternative_settings(self, combinations: List[ExposureSettings],
                                     recommended: ExposureSettings,
                                     aperture_order: Tuple[float, ...]) -> List[ExposureSettings]:
        alternatives = [c for c in combinations if not c.same_settings(recommended)]

        # sorted() is stable with reverse=True, so ties stay in enumeration order
        alternatives = sorted(
            alternatives,
            key=lambda s: self.balance_score(s, aperture_order),
            reverse=True
        )
        return alternatives[:MAX_ALTERNATIVES]

    def balance_score(self, settings: ExposureSettings, aperture_order: Tuple[float, ...]) -> float:
        """
        Score how balanced a setting is; higher is better.

        Args:
            settings: Candidate settings
            aperture_order: The lens's apertures sorted ascending

        Returns:
            Aperture score plus shutter score
        """
        return (
            self.aperture_score(settings.aperture, aperture_order)
            + self.shutter_speed_score(settings.shutter_speed)
        )

    @staticmethod
    def aperture_score(aperture: float, aperture_order: Tuple[float, ...]) -> float:
        """
        Favour the lens's middle aperture.

        Score is FULL_SCORE minus the distance, in positions, from the middle
        of the ascending aperture list.
        """
        middle = len(aperture_order) // 2
        return FULL_SCORE - abs(aperture_order.index(aperture) - middle)

    @staticmethod
    def shutter_speed_score(shutter_speed: float) -> float:
        """Favour hand-holdable speeds: full score for 1/30-1/500, half for 1/15-1/1000."""
        if PREFERRED_SHUTTER_MIN <= shutter_speed <= PREFERRED_SHUTTER_MAX:
            return FULL_SCORE
        if ACCEPTABLE_SHUTTER_MIN <= shutter_speed <= ACCEPTABLE_SHUTTER_MAX:
            return FULL_SCORE / 2
        return 0

    @staticmethod
    def latitude_report(result: ExposureCalculationResult,
                        film_stock: FilmStock) -> List[Dict[str, Any]]:
        """
        Report whether each returned setting is inside the film's latitude.

        Informational only; latitude never filters or reorders the result.

        Returns:
            One dict per setting (recommendation first) with the settings and
            a 'within_latitude' flag
        """
        return [
            {
                'settings': settings,
                'within_latitude': film_stock.is_within_latitude(settings.exposure_delta or 0.0),
            }
            for settings in result.all_settings()
        ]


_default_calculator = ExposureCalculator()


def solve(camera: Camera, lens: Lens, film_stock: FilmStock,
          lighting_condition: LightingCondition) -> ExposureCalculationResult:
    """Calculate exposure settings with a shared ExposureCalculator."""
    return _default_calculator.calculate_exposure_settings(
        camera, lens, film_stock, lighting_condition
    )
