"""
Text Reporter Tests
"""

import sys
from datetime import datetime
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from reporters import (
    TextReporter, format_shutter_speed, format_aperture, format_delta, format_settings
)
from models import (
    Camera, Lens, FilmStock, Latitude, LightingCondition,
    ExposureSettings, ExposureCalculationResult, ShotLog
)


@pytest.fixture
def film():
    return FilmStock(id='fujifilm-c200', name='Fujifilm C200', iso=200,
                     latitude=Latitude(over=2, under=1))


@pytest.fixture
def result():
    return ExposureCalculationResult(
        recommended_settings=ExposureSettings(16, 200, 200, 1.64),
        alternative_settings=(
            ExposureSettings(11, 500, 200, 1.88),
            ExposureSettings(5.6, 500, 200, -1.5),
        ),
    )


@pytest.fixture
def shot_log(film, result):
    log = ShotLog.from_result(
        Camera(id='canon-ae1', name='Canon AE-1', available_shutter_speeds=(500, 200)),
        Lens(id='fd50', name='Canon FD 50mm f/1.8', available_apertures=(5.6, 11, 16)),
        film,
        LightingCondition(id='bright-sun', name='Bright Sun', description='', ev_value=15),
        result,
        notes='Harbour wall',
        rating=4,
        timestamp=datetime(2025, 6, 1, 12, 30),
    )
    log.id = '3f2a9c1e-0000-4000-8000-000000000000'
    return log


def test_format_shutter_speed():
    assert format_shutter_speed(200) == '1/200s'
    assert format_shutter_speed(1000) == '1/1000s'
    assert format_shutter_speed(1) == '1s'
    assert format_shutter_speed(0.5) == '2s'


def test_format_settings():
    assert format_aperture(5.6) == 'f/5.6'
    assert format_delta(0.64) == '+0.64 EV'
    assert format_delta(-1.5) == '-1.50 EV'
    assert format_delta(None) == 'n/a'
    assert format_settings(ExposureSettings(16, 200, 200, 1.64)) == 'f/16 • 1/200s • ISO 200 (+1.64 EV)'
    assert format_settings(ExposureSettings(8, 125, 400)) == 'f/8 • 1/125s • ISO 400'


def test_format_result_marks_latitude(result, film):
    text = TextReporter().format_result(result, film)
    lines = text.splitlines()

    assert lines[0] == 'RECOMMENDED'
    assert 'f/16 • 1/200s' in lines[2] and 'within latitude' in lines[2]
    assert '[1] f/11' in text
    assert 'f/5.6 • 1/500s • ISO 200 (-1.50 EV)  outside latitude' in text


def test_format_result_without_film(result):
    text = TextReporter().format_result(result)

    assert 'latitude' not in text
    assert 'ALTERNATIVES' in text


def test_format_shot_log(shot_log):
    text = TextReporter().format_shot_log(shot_log)

    assert 'Date: 2025-06-01 12:30' in text
    assert 'Film: Fujifilm C200 (ISO 200, Color)' in text
    assert 'Originally' not in text
    assert '★★★★☆ (4/5)' in text
    assert 'Notes: Harbour wall' in text

    shot_log.selected_settings = ExposureSettings(11, 200, 200)
    assert 'Originally:  f/16 • 1/200s' in TextReporter().format_shot_log(shot_log)


def test_format_shot_log_list(shot_log):
    text = TextReporter().format_shot_log_list([shot_log])

    assert text.startswith('Shot logs (1):')
    assert '3f2a9c1e' in text
    assert 'Fujifilm C200' in text


def test_generate_report(tmp_path, shot_log):
    reporter = TextReporter(output_directory=str(tmp_path / 'reports'))

    path = reporter.generate_report('ansel', [shot_log])

    assert Path(path).name == 'shot_log_ansel.txt'
    content = Path(path).read_text(encoding='utf-8')
    assert content.startswith('Shot Log: ansel')
    assert 'Total shots: 1' in content
    assert 'Average rating: 4.0 (1 rated)' in content


def test_generate_report_custom_filename(tmp_path):
    reporter = TextReporter(output_directory=str(tmp_path))

    path = reporter.generate_report('ansel', [], filename='empty.txt')

    assert Path(path) == tmp_path / 'empty.txt'
    assert 'Average rating' not in Path(path).read_text(encoding='utf-8')
