"""
Reference Catalog Tests
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from catalog import ReferenceCatalog
from calculators import solve
from models import FilmType


@pytest.fixture(scope='module')
def catalog():
    return ReferenceCatalog.from_yaml()


def test_bundled_catalog_contents(catalog):
    assert [c.id for c in catalog.cameras] == ['canon-ae1']
    assert len(catalog.lenses) == 4
    assert len(catalog.film_stocks) == 5
    assert len(catalog.lighting_conditions) == 7

    camera = catalog.get_camera('canon-ae1')
    assert camera.available_shutter_speeds[0] == 1000
    assert camera.slowest_shutter_speed == 0.5

    hp5 = catalog.get_film_stock('ilford-hp5-plus')
    assert hp5.iso == 400
    assert hp5.film_type == FilmType.BLACK_AND_WHITE
    assert hp5.latitude.over == 4

    assert catalog.get_lighting_condition('bright-sun').ev_value == 15
    assert catalog.get_lighting_condition('indoor-dim').ev_value == 6


def test_unknown_ids(catalog):
    assert catalog.get_camera('leica-m6') is None
    assert catalog.get_lens('nope') is None
    assert catalog.get_film_stock('nope') is None
    assert catalog.get_lighting_condition('nope') is None


def test_every_lens_and_film_solves_in_daylight(catalog):
    camera = catalog.get_camera('canon-ae1')
    lighting = catalog.get_lighting_condition('overcast')

    for lens in catalog.lenses:
        for film in catalog.film_stocks:
            result = solve(camera, lens, film, lighting)
            assert result.recommended_settings.iso == film.iso


def test_duplicate_ids_rejected():
    camera = {'id': 'dup', 'name': 'Dup', 'available_shutter_speeds': [125]}

    with pytest.raises(ValueError, match='Duplicate id'):
        ReferenceCatalog.from_dict({'cameras': [camera, camera]})


def test_malformed_entry_rejected():
    with pytest.raises(ValueError, match='Malformed entry in lenses'):
        ReferenceCatalog.from_dict({'lenses': [{'name': 'No id', 'available_apertures': [2]}]})


def test_from_yaml_custom_file(tmp_path):
    path = tmp_path / 'catalog.yaml'
    path.write_text(
        "cameras:\n"
        "  - id: pentax-k1000\n"
        "    name: Pentax K1000\n"
        "    available_shutter_speeds: [1000, 500, 250, 125, 60, 30, 15, 8, 4, 2, 1]\n"
        "lighting_conditions:\n"
        "  - id: snow\n"
        "    name: Snow\n"
        "    description: Bright sun on snow\n"
        "    ev_value: 16\n"
    )

    catalog = ReferenceCatalog.from_yaml(str(path))

    assert catalog.get_camera('pentax-k1000').name == 'Pentax K1000'
    assert catalog.lenses == []
    assert catalog.get_lighting_condition('snow').ev_value == 16


def test_from_config_falls_back_to_bundled_catalog(tmp_path):
    config = tmp_path / 'config.yaml'
    config.write_text("catalog:\n  path:\n")

    catalog = ReferenceCatalog.from_config(str(config))

    assert catalog.get_camera('canon-ae1') is not None


def test_to_dict_round_trip(catalog):
    restored = ReferenceCatalog.from_dict(catalog.to_dict())

    assert restored.cameras == catalog.cameras
    assert restored.lenses == catalog.lenses
    assert restored.film_stocks == catalog.film_stocks
    assert restored.lighting_conditions == catalog.lighting_conditions
