"""
Camera Model

Represents a camera body and the shutter speeds it offers.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Camera:
    """
    Represents a camera body from the reference catalog.

    Shutter speeds are stored as denominators: 200 means 1/200s, and a value
    below 1 is a speed slower than one second (0.5 means 2 seconds).

    Attributes:
        id: Catalog identifier (e.g., "canon-ae1")
        name: Display name
        available_shutter_speeds: Shutter-speed denominators the body supports

    Example:
        >>> camera = Camera(
        ...     id="canon-ae1",
        ...     name="Canon AE-1",
        ...     available_shutter_speeds=(1000, 500, 250, 125, 60, 30)
        ... )
        >>> camera.fastest_shutter_speed
        1000
    """

    id: str
    name: str
    available_shutter_speeds: Tuple[float, ...]

    @property
    def fastest_shutter_speed(self) -> float:
        return max(self.available_shutter_speeds)

    @property
    def slowest_shutter_speed(self) -> float:
        return min(self.available_shutter_speeds)

    def to_dict(self) -> dict:
        """
        Convert camera to dictionary representation.

        Returns:
            Dictionary with all camera fields
        """
        return {
            'id': self.id,
            'name': self.name,
            'available_shutter_speeds': list(self.available_shutter_speeds),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Camera':
        """
        Create Camera instance from dictionary.

        Args:
            data: Dictionary containing camera fields

        Returns:
            Camera instance

        Raises:
            ValueError: If the shutter-speed set is empty or holds a non-positive value
        """
        speeds = tuple(as_number(s) for s in data.get('available_shutter_speeds') or ())
        if not speeds:
            raise ValueError(f"Camera '{data.get('id')}' has no available shutter speeds")
        if any(s <= 0 for s in speeds):
            raise ValueError(f"Camera '{data.get('id')}' has a non-positive shutter speed")

        return cls(
            id=str(data['id']),
            name=data.get('name') or str(data['id']),
            available_shutter_speeds=speeds,
        )

    def __repr__(self) -> str:
        """String representation of Camera."""
        return f"Camera(name='{self.name}', shutter_speeds={len(self.available_shutter_speeds)})"


def as_number(value):
    """Keep whole numbers as int so 200 stays 200, not 200.0."""
    number = float(value)
    return int(number) if number.is_integer() else number
