"""
Lighting Condition Model

Represents a named scene brightness expressed as an exposure value (EV).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class LightingCondition:
    """
    Represents a lighting condition from the reference catalog.

    Attributes:
        id: Catalog identifier (e.g., "bright-sun")
        name: Display name
        description: Short description of the scene
        ev_value: Target exposure value, conventionally 0-20

    Example:
        >>> LightingCondition(id="bright-sun", name="Bright Sun",
        ...                   description="Clear sky, bright sunlight", ev_value=15)
    """

    id: str
    name: str
    description: str
    ev_value: float

    def to_dict(self) -> dict:
        """Convert lighting condition to dictionary representation."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'ev_value': self.ev_value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'LightingCondition':
        """Create LightingCondition instance from dictionary."""
        return cls(
            id=str(data['id']),
            name=data.get('name') or str(data['id']),
            description=data.get('description') or '',
            ev_value=float(data['ev_value']),
        )

    def __repr__(self) -> str:
        """String representation of LightingCondition."""
        return f"LightingCondition(name='{self.name}', ev={self.ev_value})"
