"""
Film Stock Model

Represents a film stock: its sensitivity and its tolerance for exposure error.
"""

from dataclasses import dataclass
from enum import Enum


class FilmType(Enum):
    """Enumeration of film classifications. Cosmetic only."""
    COLOR = "Color"
    BLACK_AND_WHITE = "Black & White"


@dataclass(frozen=True)
class Latitude:
    """
    Exposure latitude of a film, in stops.

    Attributes:
        over: Stops of overexposure the film tolerates
        under: Stops of underexposure the film tolerates
    """

    over: float = 0.0
    under: float = 0.0

    def contains(self, delta: float) -> bool:
        """True when a signed exposure delta falls inside the latitude."""
        return -self.under <= delta <= self.over

    def to_dict(self) -> dict:
        return {'over': self.over, 'under': self.under}


@dataclass(frozen=True)
class FilmStock:
    """
    Represents a film stock from the reference catalog.

    Attributes:
        id: Catalog identifier (e.g., "kodak-portra-400")
        name: Display name
        iso: Box speed
        film_type: Color or black & white
        latitude: Over/under exposure tolerance in stops

    Example:
        >>> film = FilmStock(
        ...     id="kodak-portra-400",
        ...     name="Kodak Portra 400",
        ...     iso=400,
        ...     film_type=FilmType.COLOR,
        ...     latitude=Latitude(over=3, under=1.5)
        ... )
        >>> film.is_within_latitude(-1.0)
        True
    """

    id: str
    name: str
    iso: int
    film_type: FilmType = FilmType.COLOR
    latitude: Latitude = Latitude()

    def is_within_latitude(self, delta: float) -> bool:
        """
        Check whether an exposure delta is inside this film's latitude.

        Args:
            delta: Signed stops from target (positive = overexposed)

        Returns:
            True if the film tolerates the deviation
        """
        return self.latitude.contains(delta)

    def to_dict(self) -> dict:
        """
        Convert film stock to dictionary representation.

        Returns:
            Dictionary with all film stock fields
        """
        return {
            'id': self.id,
            'name': self.name,
            'iso': self.iso,
            'type': self.film_type.value,
            'latitude': self.latitude.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'FilmStock':
        """
        Create FilmStock instance from dictionary.

        Args:
            data: Dictionary containing film stock fields

        Returns:
            FilmStock instance

        Raises:
            ValueError: If ISO is not positive, the type is unknown or latitude is negative
        """
        iso = int(data['iso'])
        if iso <= 0:
            raise ValueError(f"Film stock '{data.get('id')}' has non-positive ISO: {iso}")

        latitude_data = data.get('latitude') or {}
        latitude = Latitude(
            over=float(latitude_data.get('over', 0)),
            under=float(latitude_data.get('under', 0)),
        )
        if latitude.over < 0 or latitude.under < 0:
            raise ValueError(f"Film stock '{data.get('id')}' has negative latitude")

        return cls(
            id=str(data['id']),
            name=data.get('name') or str(data['id']),
            iso=iso,
            film_type=FilmType(data.get('type', FilmType.COLOR.value)),
            latitude=latitude,
        )

    def __repr__(self) -> str:
        """String representation of FilmStock."""
        return f"FilmStock(name='{self.name}', iso={self.iso}, type={self.film_type.value})"
