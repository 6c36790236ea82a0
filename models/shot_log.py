"""
Shot Log Model

Represents one logged exposure: the equipment and lighting that were
selected, what the calculator suggested, and what the photographer used.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Union

from .camera import Camera
from .lens import Lens
from .film_stock import FilmStock
from .lighting_condition import LightingCondition
from .exposure_settings import ExposureSettings, ExposureCalculationResult

NOTES_MAX_LENGTH = 500
RATING_MIN = 1
RATING_MAX = 5


def normalize_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse and normalise a shot timestamp to naive local time.

    Accepts ISO 8601 strings, including a trailing 'Z' as sent by browsers.
    Timezone-aware values are converted to local time and stripped of their
    offset, matching the naive datetime.now() stamps written locally.

    Example:
        >>> normalize_timestamp('2025-06-01T12:00:00Z').tzinfo is None
        True
    """
    if value is None:
        return None

    if isinstance(value, str):
        text = value.strip()
        if text.endswith(('Z', 'z')):
            text = text[:-1] + '+00:00'
        value = datetime.fromisoformat(text)

    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


@dataclass
class ShotLog:
    """
    Represents a logged shot.

    Equipment and settings are embedded rather than referenced, so a log stays
    readable after the reference catalog changes.

    Attributes:
        camera: Camera used
        lens: Lens used
        film_stock: Film loaded
        lighting_condition: Lighting the shot was metered for
        recommended_settings: Calculator's recommendation
        alternative_settings: Calculator's alternatives
        original_settings: Settings the photographer picked before editing
        selected_settings: Settings after the photographer's edits
        id: Unique identifier (assigned by the store when None)
        timestamp: When the shot was taken
        notes: Optional free-text description, at most 500 characters
        rating: Optional 1-5 star rating

    Example:
        >>> log = ShotLog.from_result(camera, lens, film, lighting, result)
        >>> log.rating = 4
        >>> log.validate()
    """

    camera: Camera
    lens: Lens
    film_stock: FilmStock
    lighting_condition: LightingCondition
    recommended_settings: ExposureSettings
    alternative_settings: List[ExposureSettings] = field(default_factory=list)
    original_settings: Optional[ExposureSettings] = None
    selected_settings: Optional[ExposureSettings] = None

    id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    notes: Optional[str] = None
    rating: Optional[int] = None

    def __post_init__(self):
        if self.original_settings is None:
            self.original_settings = self.selected_settings or self.recommended_settings
        if self.selected_settings is None:
            self.selected_settings = self.original_settings
        self.notes = self.clean_notes(self.notes)
        self.timestamp = normalize_timestamp(self.timestamp) or datetime.now()

    @classmethod
    def from_result(cls, camera: Camera, lens: Lens, film_stock: FilmStock,
                    lighting_condition: LightingCondition,
                    result: ExposureCalculationResult,
                    chosen: Optional[ExposureSettings] = None,
                    notes: Optional[str] = None,
                    rating: Optional[int] = None,
                    timestamp: Optional[datetime] = None) -> 'ShotLog':
        """
        Build a shot log from a calculation result.

        Args:
            camera, lens, film_stock, lighting_condition: Calculator inputs
            result: Calculator output
            chosen: Settings the photographer picked (defaults to the recommendation)
            notes: Optional description
            rating: Optional 1-5 rating
            timestamp: Shot time (defaults to now)

        Returns:
            Unsaved ShotLog instance
        """
        chosen = chosen or result.recommended_settings
        return cls(
            camera=camera,
            lens=lens,
            film_stock=film_stock,
            lighting_condition=lighting_condition,
            recommended_settings=result.recommended_settings,
            alternative_settings=list(result.alternative_settings),
            original_settings=chosen,
            selected_settings=chosen,
            timestamp=timestamp or datetime.now(),
            notes=notes,
            rating=rating,
        )

    @staticmethod
    def clean_notes(notes: Optional[str]) -> Optional[str]:
        """Trim notes; blank notes become None."""
        if notes is None:
            return None
        notes = notes.strip()
        return notes or None

    @property
    def was_edited(self) -> bool:
        """True if the selected settings differ from the originally chosen ones."""
        return not self.selected_settings.same_settings(self.original_settings)

    def validate(self):
        """
        Check the log's constraints.

        Raises:
            ValueError: If a required record is missing, the notes are too long
                or the rating is outside 1-5
        """
        missing = [
            name for name in ('camera', 'lens', 'film_stock', 'lighting_condition')
            if getattr(self, name) is None
        ]
        if missing:
            raise ValueError(f"Missing required shot log data: {', '.join(missing)}")

        if self.notes and len(self.notes) > NOTES_MAX_LENGTH:
            raise ValueError(
                f"Notes must be no more than {NOTES_MAX_LENGTH} characters "
                f"(got {len(self.notes)})"
            )

        if self.rating is not None:
            if isinstance(self.rating, bool) or not isinstance(self.rating, int):
                raise ValueError(f"Rating must be an integer, got {self.rating!r}")
            if not RATING_MIN <= self.rating <= RATING_MAX:
                raise ValueError(f"Rating must be between {RATING_MIN} and {RATING_MAX}, got {self.rating}")

    def to_dict(self) -> dict:
        """
        Convert shot log to dictionary representation.

        Returns:
            Dictionary with all shot log fields, timestamp as ISO string
        """
        return {
            'id': self.id,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
            'camera': self.camera.to_dict(),
            'lens': self.lens.to_dict(),
            'film_stock': self.film_stock.to_dict(),
            'lighting_condition': self.lighting_condition.to_dict(),
            'recommended_settings': self.recommended_settings.to_dict(),
            'alternative_settings': [s.to_dict() for s in self.alternative_settings],
            'original_settings': self.original_settings.to_dict(),
            'selected_settings': self.selected_settings.to_dict(),
            'notes': self.notes,
            'rating': self.rating,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ShotLog':
        """
        Create ShotLog instance from dictionary.

        Args:
            data: Dictionary containing shot log fields

        Returns:
            ShotLog instance
        """
        timestamp = normalize_timestamp(data.get('timestamp'))

        original = data.get('original_settings')
        selected = data.get('selected_settings')
        rating = data.get('rating')

        return cls(
            id=data.get('id'),
            timestamp=timestamp or datetime.now(),
            camera=Camera.from_dict(data['camera']),
            lens=Lens.from_dict(data['lens']),
            film_stock=FilmStock.from_dict(data['film_stock']),
            lighting_condition=LightingCondition.from_dict(data['lighting_condition']),
            recommended_settings=ExposureSettings.from_dict(data['recommended_settings']),
            alternative_settings=[
                ExposureSettings.from_dict(s) for s in data.get('alternative_settings') or []
            ],
            original_settings=ExposureSettings.from_dict(original) if original else None,
            selected_settings=ExposureSettings.from_dict(selected) if selected else None,
            notes=data.get('notes'),
            rating=int(rating) if rating is not None else None,
        )

    def __repr__(self) -> str:
        """String representation of ShotLog."""
        return (
            f"ShotLog(id='{self.id}', camera='{self.camera.name}', "
            f"film='{self.film_stock.name}', rating={self.rating})"
        )
