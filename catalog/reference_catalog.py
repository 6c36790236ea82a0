"""
Reference Catalog

Static tables of cameras, lenses, film stocks and lighting conditions the
user picks from. The catalog ships as YAML next to this module and can be
replaced by a file named in the configuration.
"""

import os
import logging
from typing import Optional, List, Dict, TypeVar, Callable

import yaml

import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import Camera, Lens, FilmStock, LightingCondition

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = os.path.join(os.path.dirname(__file__), 'reference_data.yaml')

T = TypeVar('T')


class ReferenceCatalog:
    """
    Read-only lookup of reference equipment, film and lighting.

    Entries keep the order they have in the source file.

    Attributes:
        cameras: Cameras in catalog order
        lenses: Lenses in catalog order
        film_stocks: Film stocks in catalog order
        lighting_conditions: Lighting conditions in catalog order

    Example:
        >>> catalog = ReferenceCatalog.from_yaml()
        >>> catalog.get_camera('canon-ae1').name
        'Canon AE-1'
    """

    def __init__(self, cameras: List[Camera], lenses: List[Lens],
                 film_stocks: List[FilmStock],
                 lighting_conditions: List[LightingCondition]):
        self._cameras = self._index('cameras', cameras)
        self._lenses = self._index('lenses', lenses)
        self._film_stocks = self._index('film_stocks', film_stocks)
        self._lighting_conditions = self._index('lighting_conditions', lighting_conditions)

    @staticmethod
    def _index(table: str, entries: List[T]) -> Dict[str, T]:
        index: Dict[str, T] = {}
        for entry in entries:
            if entry.id in index:
                raise ValueError(f"Duplicate id in {table}: {entry.id}")
            index[entry.id] = entry
        return index

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> 'ReferenceCatalog':
        """
        Load a catalog from a YAML file.

        Args:
            path: Catalog file (defaults to the bundled reference_data.yaml)

        Returns:
            ReferenceCatalog instance

        Raises:
            ValueError: If an entry is malformed or an id repeats within a table
        """
        path = path or DEFAULT_CATALOG_PATH
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        catalog = cls.from_dict(data)
        logger.info(
            f"Loaded catalog from {path}: {len(catalog.cameras)} cameras, "
            f"{len(catalog.lenses)} lenses, {len(catalog.film_stocks)} film stocks, "
            f"{len(catalog.lighting_conditions)} lighting conditions"
        )
        return catalog

    @classmethod
    def from_dict(cls, data: dict) -> 'ReferenceCatalog':
        """Build a catalog from already-parsed tables."""
        def load(table: str, factory: Callable[[dict], T]) -> List[T]:
            entries = []
            for entry in data.get(table) or []:
                try:
                    entries.append(factory(entry))
                except (KeyError, TypeError) as e:
                    raise ValueError(f"Malformed entry in {table}: {entry!r} ({e})") from e
            return entries

        return cls(
            cameras=load('cameras', Camera.from_dict),
            lenses=load('lenses', Lens.from_dict),
            film_stocks=load('film_stocks', FilmStock.from_dict),
            lighting_conditions=load('lighting_conditions', LightingCondition.from_dict),
        )

    @classmethod
    def from_config(cls, config_path: str = 'config.yaml') -> 'ReferenceCatalog':
        """Create ReferenceCatalog from configuration file."""
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        return cls.from_yaml(config.get('catalog', {}).get('path'))

    @property
    def cameras(self) -> List[Camera]:
        return list(self._cameras.values())

    @property
    def lenses(self) -> List[Lens]:
        return list(self._lenses.values())

    @property
    def film_stocks(self) -> List[FilmStock]:
        return list(self._film_stocks.values())

    @property
    def lighting_conditions(self) -> List[LightingCondition]:
        return list(self._lighting_conditions.values())

    def get_camera(self, camera_id: str) -> Optional[Camera]:
        return self._cameras.get(camera_id)

    def get_lens(self, lens_id: str) -> Optional[Lens]:
        return self._lenses.get(lens_id)

    def get_film_stock(self, film_stock_id: str) -> Optional[FilmStock]:
        return self._film_stocks.get(film_stock_id)

    def get_lighting_condition(self, lighting_condition_id: str) -> Optional[LightingCondition]:
        return self._lighting_conditions.get(lighting_condition_id)

    def to_dict(self) -> dict:
        """Convert catalog to dictionary representation."""
        return {
            'cameras': [c.to_dict() for c in self.cameras],
            'lenses': [l.to_dict() for l in self.lenses],
            'film_stocks': [f.to_dict() for f in self.film_stocks],
            'lighting_conditions': [lc.to_dict() for lc in self.lighting_conditions],
        }
