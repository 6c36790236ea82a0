"""
CLI Tests
Tests: user sign-in, calculating and logging a shot, editing and exporting logs
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

import cli
from database import DatabaseManager

CALCULATE = [
    'calculate', '--camera', 'canon-ae1', '--lens', 'canon-fd-50mm-f1.8',
    '--film', 'kodak-portra-400', '--lighting', 'bright-sun',
]


@pytest.fixture
def config(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(
        "database:\n"
        "  type: sqlite\n"
        "  sqlite:\n"
        f"    path: {tmp_path / 'filmmate.db'}\n"
        "session:\n"
        f"  cache_path: {tmp_path / 'session.yaml'}\n"
        "catalog:\n"
        "  path:\n"
        "reporting:\n"
        f"  text_reports_path: {tmp_path / 'reports'}\n"
    )
    return str(path)


def _run(config, *args):
    cli.main(['--config', config, *args])


def _logs(config):
    with DatabaseManager.from_config(config) as db:
        return db.load_shot_logs('ansel')


def test_calculate_without_logging(config):
    _run(config, *CALCULATE)

    assert not Path(config).with_name('session.yaml').exists()


def test_log_requires_user(config):
    with pytest.raises(SystemExit):
        _run(config, *CALCULATE, '--log')


def test_unknown_camera_exits(config):
    args = list(CALCULATE)
    args[2] = 'leica-m6'

    with pytest.raises(SystemExit):
        _run(config, *args)


def test_log_shot_and_edit(config, tmp_path):
    _run(config, 'user', 'set', 'ansel')
    _run(config, *CALCULATE, '--log', '--choose', '1', '--aperture', '11',
         '--notes', 'Harbour wall', '--rating', '3')

    [shot_log] = _logs(config)
    assert shot_log.original_settings == shot_log.alternative_settings[0]
    assert shot_log.selected_settings.aperture == 11
    assert shot_log.was_edited
    assert shot_log.notes == 'Harbour wall'

    _run(config, 'logs', 'list')

    prefix = shot_log.id[:8]
    _run(config, 'logs', 'rate', prefix, '5')
    _run(config, 'logs', 'notes', prefix, '')
    [shot_log] = _logs(config)
    assert shot_log.rating == 5
    assert shot_log.notes is None

    _run(config, 'logs', 'export')
    assert (tmp_path / 'reports' / 'shot_log_ansel.txt').exists()

    _run(config, 'logs', 'delete', prefix)
    assert _logs(config) == []


def test_aperture_not_on_lens_exits(config):
    _run(config, 'user', 'set', 'ansel')

    with pytest.raises(SystemExit):
        _run(config, *CALCULATE, '--log', '--aperture', '1.4')

    assert _logs(config) == []


def test_user_clear(config):
    _run(config, 'user', 'set', 'ansel')
    _run(config, 'user', 'clear')

    with pytest.raises(SystemExit):
        _run(config, 'logs', 'list')
