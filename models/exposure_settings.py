"""
Exposure Settings Models

Aperture/shutter/ISO triples produced by the exposure calculator and the
result record that groups a recommendation with its alternatives.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, List

from .camera import as_number


@dataclass(frozen=True)
class ExposureSettings:
    """
    A single aperture/shutter-speed/ISO combination.

    Attributes:
        aperture: f-number, drawn from the lens's aperture set
        shutter_speed: Shutter-speed denominator, drawn from the camera's set
        iso: Film speed used for the calculation
        exposure_delta: Signed stops from the target EV (positive = overexposed),
            rounded to two decimals; None when the settings were entered by hand

    Example:
        >>> ExposureSettings(aperture=16, shutter_speed=200, iso=200, exposure_delta=1.64)
    """

    aperture: float
    shutter_speed: float
    iso: int
    exposure_delta: Optional[float] = None

    def same_settings(self, other: 'ExposureSettings') -> bool:
        """Compare the aperture/shutter/ISO triple, ignoring the delta."""
        return (
            self.aperture == other.aperture
            and self.shutter_speed == other.shutter_speed
            and self.iso == other.iso
        )

    def to_dict(self) -> dict:
        """Convert settings to dictionary representation."""
        data = {
            'aperture': self.aperture,
            'shutter_speed': self.shutter_speed,
            'iso': self.iso,
        }
        if self.exposure_delta is not None:
            data['exposure_delta'] = self.exposure_delta
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'ExposureSettings':
        """Create ExposureSettings instance from dictionary."""
        delta = data.get('exposure_delta')
        return cls(
            aperture=as_number(data['aperture']),
            shutter_speed=as_number(data['shutter_speed']),
            iso=int(data['iso']),
            exposure_delta=float(delta) if delta is not None else None,
        )


@dataclass(frozen=True)
class ExposureCalculationResult:
    """
    Output of one exposure calculation.

    Attributes:
        recommended_settings: Best balanced combination
        alternative_settings: Up to three runners-up, best first, never
            repeating the recommended triple
    """

    recommended_settings: ExposureSettings
    alternative_settings: Tuple[ExposureSettings, ...] = field(default_factory=tuple)

    def all_settings(self) -> List[ExposureSettings]:
        """Recommendation followed by the alternatives."""
        return [self.recommended_settings, *self.alternative_settings]

    def to_dict(self) -> dict:
        return {
            'recommended_settings': self.recommended_settings.to_dict(),
            'alternative_settings': [s.to_dict() for s in self.alternative_settings],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ExposureCalculationResult':
        return cls(
            recommended_settings=ExposureSettings.from_dict(data['recommended_settings']),
            alternative_settings=tuple(
                ExposureSettings.from_dict(s) for s in data.get('alternative_settings') or []
            ),
        )
