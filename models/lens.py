"""
Lens Model

Represents a lens and the f-number apertures it can be set to.
"""

from dataclasses import dataclass
from typing import Tuple

from .camera import as_number


@dataclass(frozen=True)
class Lens:
    """
    Represents a lens from the reference catalog.

    Attributes:
        id: Catalog identifier (e.g., "canon-fd-50mm-f1.8")
        name: Display name
        available_apertures: f-numbers the lens supports, conventionally ascending

    Example:
        >>> lens = Lens(
        ...     id="canon-fd-50mm-f1.8",
        ...     name="Canon FD 50mm f/1.8",
        ...     available_apertures=(1.8, 2, 2.8, 4, 5.6, 8, 11, 16, 22)
        ... )
        >>> lens.max_aperture
        1.8
    """

    id: str
    name: str
    available_apertures: Tuple[float, ...]

    @property
    def max_aperture(self) -> float:
        """Widest opening (smallest f-number)."""
        return min(self.available_apertures)

    @property
    def min_aperture(self) -> float:
        """Smallest opening (largest f-number)."""
        return max(self.available_apertures)

    def sorted_apertures(self) -> Tuple[float, ...]:
        """Apertures in ascending f-number order."""
        return tuple(sorted(self.available_apertures))

    def to_dict(self) -> dict:
        """
        Convert lens to dictionary representation.

        Returns:
            Dictionary with all lens fields
        """
        return {
            'id': self.id,
            'name': self.name,
            'available_apertures': list(self.available_apertures),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Lens':
        """
        Create Lens instance from dictionary.

        Args:
            data: Dictionary containing lens fields

        Returns:
            Lens instance

        Raises:
            ValueError: If the aperture set is empty or holds a non-positive value
        """
        apertures = tuple(as_number(a) for a in data.get('available_apertures') or ())
        if not apertures:
            raise ValueError(f"Lens '{data.get('id')}' has no available apertures")
        if any(a <= 0 for a in apertures):
            raise ValueError(f"Lens '{data.get('id')}' has a non-positive aperture")

        return cls(
            id=str(data['id']),
            name=data.get('name') or str(data['id']),
            available_apertures=apertures,
        )

    def __repr__(self) -> str:
        """String representation of Lens."""
        return (
            f"Lens(name='{self.name}', "
            f"apertures=f/{self.max_aperture}-f/{self.min_aperture})"
        )
